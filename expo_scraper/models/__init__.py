from expo_scraper.models.schemas import (
    CompleteEvent,
    ConnectedEvent,
    ErrorEvent,
    ExhibitorEvent,
    ExhibitorRecord,
    ExportFormat,
    ExportRequest,
    ExtractionOptions,
    PageType,
    PaginationState,
    PaginationStatus,
    ProgressEvent,
    ResolutionCandidate,
    ScrapeRequest,
    ScrapeResponse,
    StartEvent,
    StreamEvent,
)

__all__ = [
    "CompleteEvent",
    "ConnectedEvent",
    "ErrorEvent",
    "ExhibitorEvent",
    "ExhibitorRecord",
    "ExportFormat",
    "ExportRequest",
    "ExtractionOptions",
    "PageType",
    "PaginationState",
    "PaginationStatus",
    "ProgressEvent",
    "ResolutionCandidate",
    "ScrapeRequest",
    "ScrapeResponse",
    "StartEvent",
    "StreamEvent",
]
