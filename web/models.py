# ======================================
# Web API Models
# - Pydantic v2 models for the atlas HTTP API
# - Type-safe data structures for frontend/backend
# ======================================

from pydantic import BaseModel, Field


# ===============================
# Requests
# ===============================
class FamilyRequest(BaseModel):
    """Request model for switching the category family."""

    family: str = Field(description="Category family token")


class SearchRequest(BaseModel):
    """Request model for live search input."""

    search_text: str = Field(default="", description="Raw search box content")


class CategoryToggleRequest(BaseModel):
    """Request model for a single category checkbox."""

    category: str
    selected: bool | None = Field(
        default=None, description="Explicit state; omit to flip the current one"
    )


class PointerRequest(BaseModel):
    """Pointer position on the canvas and on the page."""

    x: float = Field(description="Canvas x in pixels")
    y: float = Field(description="Canvas y in pixels")
    page_x: float = Field(description="Page x in pixels")
    page_y: float = Field(description="Page y in pixels")


# ===============================
# Responses
# ===============================
class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str
    loaded: bool
    family: str | None
    total_points: int
    last_error: str | None = None


class FamiliesResponse(BaseModel):
    families: list[str]
    current: str | None


class LoadResponse(BaseModel):
    """Response model for a family load."""

    family: str
    success: bool
    total_points: int
    categories: list[str]
    error: str | None = None


class FilterResponse(BaseModel):
    """Filter state after an update, plus the resulting match count."""

    search_text: str
    selected_categories: list[str]
    categories: list[str]
    relevant_count: int
    total_points: int


class BubbleDatum(BaseModel):
    """Single bubble with its resolved colours."""

    x: float
    y: float
    r: float
    title: str
    link: str | None
    cluster: int | None
    categories: list[str]
    relevant: bool
    opacity: float = Field(ge=0.0, le=1.0)
    background_color: str
    border_color: str


class ChartPayload(BaseModel):
    """Complete bubble chart dataset and options for the frontend."""

    family: str | None
    label: str = "UMAP Plot"
    revision: int = Field(ge=0, description="Redraw counter")
    width: int = Field(ge=1, description="Canvas width in pixels")
    height: int = Field(ge=1, description="Canvas height in pixels")
    chart_area: tuple[float, float, float, float] = Field(
        description="Plot rectangle as (left, top, right, bottom) in canvas pixels"
    )
    data: list[BubbleDatum]
    options: dict[str, object]


class TooltipResponse(BaseModel):
    visible: bool
    title: str | None = None
    left: float | None = None
    top: float | None = None
    point_index: int | None = None


class ClickResponse(BaseModel):
    """Navigation target for a click; ``link`` is None when nothing opens."""

    link: str | None = None
    target: str = "_blank"
