"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expo_scraper.api.routes import router
from expo_scraper.config import settings
from expo_scraper.errors import ScraperError
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    browser = settings.playwright_ws_endpoint or f"local chromium (headless={settings.playwright_headless})"
    log.info("Exhibitor scraper %s starting; browser: %s", VERSION, browser)
    if not (settings.google_api_key and settings.google_search_engine_id):
        log.warning("GOOGLE_API_KEY / GOOGLE_SEARCH_ENGINE_ID not set; website search limited to domain guessing")
    yield
    log.info("Exhibitor scraper shutting down")


async def scraper_error_handler(request: Request, exc: ScraperError) -> JSONResponse:
    log.error("Unhandled pipeline error on %s: %s", request.url.path, exc)
    return JSONResponse({"success": False, "error": str(exc)}, status_code=500)


def create_app() -> FastAPI:
    application = FastAPI(
        title="Exhibitor Scraper",
        description=(
            "Extracts exhibitor listings from trade-show directory sites and "
            "finds best-guess official websites for companies without one."
        ),
        version=VERSION,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(ScraperError, scraper_error_handler)
    application.include_router(router)

    @application.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": VERSION}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("expo_scraper.main:app", host="0.0.0.0", port=8000, reload=True)
