from __future__ import annotations

import enum
from typing import Annotated, Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.json_schema import SkipJsonSchema

from expo_scraper.utils.urls import is_blocked_website, is_http_url

# Wire format is camelCase (companyName, maxWebsiteSearches, ...); Python stays snake_case
_CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------
class PageType(str, enum.Enum):
    MANIFEST = "manifest"
    MAPYOURSHOW = "mapyourshow"
    A2Z = "a2z"
    SMALLWORLDLABS = "smallworldlabs"
    AFFILIATESUMMIT = "affiliatesummit"
    GOESHOW = "goeshow"
    WPMA = "wpma"
    SURFEXPO = "surfexpo"
    GENERIC = "generic"


# ---------------------------------------------------------------------------
# Extracted exhibitor record
# ---------------------------------------------------------------------------
class ExhibitorRecord(BaseModel):
    """Normalized exhibitor listing.

    ``website`` is either empty or an absolute http(s) URL that is not a
    directory platform or social network; anything else is blanked rather
    than rejected, so a bad link never costs us the company itself.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    company_name: str
    website: str = ""
    source: PageType = PageType.GENERIC
    booth: str | None = None
    category: str | None = None
    location: str | None = None
    description: str | None = None
    business_types: str | None = None

    @field_validator("company_name")
    @classmethod
    def validate_company_name(cls, v: str) -> str:
        v = v.strip()
        if not 2 <= len(v) <= 200:
            raise ValueError(f"Company name must be 2-200 characters (got {len(v)})")
        return v

    @field_validator("website", mode="before")
    @classmethod
    def normalize_website(cls, v: Any) -> str:
        if not v:
            return ""
        v = str(v).strip()
        if not is_http_url(v) or is_blocked_website(v):
            return ""
        return v


# ---------------------------------------------------------------------------
# Session options
# ---------------------------------------------------------------------------
class ExtractionOptions(BaseModel):
    """Per-session knobs.  ``None`` means "use the configured default".

    ``handle_pagination=None`` (``"auto"`` on the wire) is the automatic policy: SmallWorldLabs
    directories paginate, every other template stays on the first page.
    """

    model_config = _CAMEL_CONFIG

    find_websites: bool | None = None
    max_website_searches: int | None = None
    handle_pagination: bool | None = None
    # In-process callbacks for run(); never part of the wire format
    on_progress: SkipJsonSchema[Callable[[Any], Any] | None] = Field(default=None, exclude=True)
    on_record_found: SkipJsonSchema[Callable[[Any], Any] | None] = Field(default=None, exclude=True)

    @field_validator("handle_pagination", mode="before")
    @classmethod
    def auto_pagination(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().lower() == "auto":
            return None
        return v


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
class PaginationStatus(str, enum.Enum):
    IDLE = "idle"
    ADVANCING = "advancing"
    EXHAUSTED = "exhausted"


class PaginationState(BaseModel):
    current_page: int = 1
    has_next: bool = True
    page_cap: int = 5
    status: PaginationStatus = PaginationStatus.IDLE


# ---------------------------------------------------------------------------
# Website resolution
# ---------------------------------------------------------------------------
class ResolutionCandidate(BaseModel):
    url: str
    score: int
    domain: str


# ---------------------------------------------------------------------------
# Result stream events
# ---------------------------------------------------------------------------
class _Event(BaseModel):
    model_config = _CAMEL_CONFIG

    def to_sse(self) -> str:
        """Render the event as one server-sent-event frame."""
        return f"data: {self.model_dump_json(by_alias=True, exclude_none=True)}\n\n"


class ConnectedEvent(_Event):
    type: Literal["connected"] = "connected"


class StartEvent(_Event):
    type: Literal["start"] = "start"
    url: str


class ProgressEvent(_Event):
    type: Literal["progress"] = "progress"
    message: str
    current: int | None = None
    total: int | None = None
    with_website: int | None = None
    need_discovery: int | None = None
    searching: bool | None = None


class ExhibitorEvent(_Event):
    type: Literal["exhibitor"] = "exhibitor"
    exhibitor: ExhibitorRecord


class CompleteEvent(_Event):
    type: Literal["complete"] = "complete"
    count: int


class ErrorEvent(_Event):
    type: Literal["error"] = "error"
    error: str


StreamEvent = Annotated[
    Union[ConnectedEvent, StartEvent, ProgressEvent, ExhibitorEvent, CompleteEvent, ErrorEvent],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------
class ScrapeRequest(BaseModel):
    url: str = Field(default="", description="The exhibitor directory URL to scrape.")
    options: ExtractionOptions = Field(default_factory=ExtractionOptions)
    stream: bool = Field(
        default=False,
        description="Stream server-sent events instead of returning one JSON body.",
    )


class ScrapeResponse(BaseModel):
    success: bool
    data: list[ExhibitorRecord] = Field(default_factory=list)
    count: int = 0
    error: str | None = None


class ExportFormat(str, enum.Enum):
    XLSX = "xlsx"
    CSV = "csv"


class ExportRequest(BaseModel):
    data: list[ExhibitorRecord] | None = None
    filename: str = "exhibitors"
    format: ExportFormat = ExportFormat.XLSX
