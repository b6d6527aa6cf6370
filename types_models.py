"""
Type definitions and Pydantic models for the UMAP atlas.

This module provides validated structures for the raw dataset documents, the
per-point render model, the filter state and the runtime configuration.
"""

from pathlib import Path
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


EMPHASIS_RELEVANT = 1.0
EMPHASIS_MUTED = 0.2


# ===============================
# Raw dataset documents
# ===============================
class PaperInfo(BaseModel):
    """One entry of ``additional_info`` in a ``umap_data_<family>.json`` file."""

    title: str = Field(description="Paper title")
    abstract: str | None = Field(default=None, description="Paper abstract")
    arxiv_id: str | None = Field(default=None, description="arXiv identifier")
    categories: str = Field(
        default="", description="Comma-separated arXiv category tokens"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("arxiv_id", mode="before")
    @classmethod
    def _coerce_arxiv_id(cls, v: Any) -> Any:
        """Old-style numeric ids (e.g. 1706.03762) may arrive as JSON numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("categories", mode="before")
    @classmethod
    def _join_category_list(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        return v


class UmapDocument(BaseModel):
    """Projection coordinates plus per-point metadata."""

    embeddings: list[tuple[float, float]] = Field(
        description="2-D UMAP coordinates, one pair per paper"
    )
    additional_info: list[PaperInfo] = Field(
        description="Per-paper metadata, index-aligned with embeddings"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class ClusterDocument(BaseModel):
    """Cluster assignment per point, index-aligned with the embeddings."""

    clusters: list[int | None] = Field(description="Cluster id per paper")

    model_config = ConfigDict(frozen=True, extra="ignore")


# ===============================
# Render model
# ===============================
class Point(BaseModel):
    """One visualized document.

    Load-time fields are frozen individually; only ``relevant`` and
    ``emphasis`` change, and only through the relevance engine.
    """

    position: tuple[float, float] = Field(
        frozen=True, description="Projection coordinates"
    )
    radius: float = Field(frozen=True, gt=0, description="Bubble radius in pixels")
    title: str = Field(frozen=True, description="Display and search text")
    abstract: str | None = Field(default=None, frozen=True)
    external_link: str | None = Field(
        default=None, frozen=True, description="Source document URI"
    )
    cluster_id: int | None = Field(
        default=None, frozen=True, description="Cluster id, None when unknown"
    )
    categories: tuple[str, ...] = Field(
        default=(), frozen=True, description="Trimmed category tokens"
    )

    relevant: bool = True
    emphasis: float = Field(default=EMPHASIS_RELEVANT, ge=EMPHASIS_MUTED, le=1.0)

    model_config = ConfigDict(validate_assignment=True)

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


class PointStyle(BaseModel):
    """Per-point colours handed to the chart renderer."""

    fill_color: str
    border_color: str

    model_config = ConfigDict(frozen=True)


class FilterState(BaseModel):
    """Current search text and category selection."""

    search_text: str = ""
    selected_categories: set[str] = Field(default_factory=set)


# ===============================
# Configuration
# ===============================
class ExplorerConfig(BaseModel):
    """Runtime configuration for the explorer with full validation."""

    data_dir: Path = Field(description="Directory holding the dataset JSON files")
    data_base_url: str | None = Field(
        default=None, description="HTTP base URL; overrides data_dir when set"
    )
    request_timeout: int = Field(ge=1, description="HTTP timeout in seconds")
    families: list[str] = Field(min_length=1, description="Selectable families")
    default_family: str = Field(description="Family loaded at startup")
    point_radius: float = Field(gt=0, description="Bubble radius in pixels")
    link_template: str = Field(description="URI template with {arxiv_id}")
    chart_width: int = Field(ge=1)
    chart_height: int = Field(ge=1)
    chart_padding: int = Field(ge=0)
    tooltip_offset_x: int = 20
    tooltip_offset_y: int = 20
    tooltip_line_height: int = Field(default=18, ge=1)
    tooltip_chars_per_line: int = Field(default=60, ge=1)
    reset_search_on_load: bool = False

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("data_dir", mode="before")
    @classmethod
    def _convert_to_path(cls, v: Any) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("data_base_url", mode="before")
    @classmethod
    def _blank_url_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v
