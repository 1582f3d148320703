"""API routes for the exhibitor scraper service."""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from expo_scraper.errors import ScraperError
from expo_scraper.models.schemas import ConnectedEvent, ExportRequest, ScrapeRequest, ScrapeResponse
from expo_scraper.services.exporter import MEDIA_TYPES, export_records, safe_filename
from expo_scraper.services.session import ExtractionSession
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["scrape"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def wants_stream(request: Request, body: ScrapeRequest) -> bool:
    return body.stream or "text/event-stream" in request.headers.get("accept", "")


@router.post("/scrape", response_model=ScrapeResponse)
async def scrape(body: ScrapeRequest, request: Request) -> Response:
    """Scrape an exhibitor directory.

    Streams server-sent events when the client asks for ``text/event-stream``
    (or sets ``stream``); otherwise runs to completion and returns one JSON body.
    """
    url = body.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")

    session = ExtractionSession(url, body.options)
    log.info("[%s] Scrape request for %s (stream=%s)", session.id, url, wants_stream(request, body))

    if wants_stream(request, body):
        return StreamingResponse(
            _stream_events(session),
            media_type="text/event-stream",
            headers=_SSE_HEADERS,
        )

    try:
        records = await session.run()
    except ScraperError as exc:
        log.error("[%s] Scrape failed: %s", session.id, exc)
        return _error_response(str(exc))
    except Exception as exc:
        log.error("[%s] Scrape failed unexpectedly: %s", session.id, exc, exc_info=True)
        return _error_response(str(exc) or "Unknown error occurred")

    payload = ScrapeResponse(success=True, data=records, count=len(records))
    return JSONResponse(payload.model_dump(mode="json", by_alias=True, exclude_none=True))


@router.post("/export")
async def export(body: ExportRequest) -> Response:
    """Download a record set as ``.xlsx`` (default) or ``.csv``."""
    if body.data is None:
        raise HTTPException(status_code=400, detail="No data provided")

    content = export_records(body.data, body.format)
    filename = safe_filename(body.filename, body.format)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[body.format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "message": "Exhibitor scraper API is running"}


async def _stream_events(session: ExtractionSession) -> AsyncIterator[str]:
    """SSE frames for one session; a client disconnect cancels the session."""
    yield ConnectedEvent().to_sse()
    try:
        async for event in session.events():
            yield event.to_sse()
    finally:
        session.cancel()


def _error_response(message: str) -> JSONResponse:
    payload = ScrapeResponse(success=False, error=message)
    return JSONResponse(
        payload.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=500,
    )
