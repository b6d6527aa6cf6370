"""Relevance engine: search/category predicates and per-point styling."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from types_models import EMPHASIS_MUTED, EMPHASIS_RELEVANT, Point, PointStyle

CLUSTER_COLORS: dict[int, str] = {
    0: "#1f77b4",
    1: "#ff7f0e",
    2: "#2ca02c",
    3: "#d62728",
    4: "#9467bd",
}
UNKNOWN_CLUSTER_COLOR = "#000000"
MUTED_COLOR = "#808080"
BORDER_RGB = (255, 255, 255)


def matches_search(title: str, search_text: str) -> bool:
    """Case-insensitive substring match; empty search matches everything."""
    if search_text == "":
        return True
    return search_text.lower() in title.lower()


def matches_categories(categories: Iterable[str], selected: Collection[str]) -> bool:
    """Exact, case-sensitive membership of at least one token."""
    return any(token in selected for token in categories)


def is_relevant(point: Point, search_text: str, selected: Collection[str]) -> bool:
    return matches_search(point.title, search_text) and matches_categories(
        point.categories, selected
    )


def emphasis_for(relevant: bool) -> float:
    return EMPHASIS_RELEVANT if relevant else EMPHASIS_MUTED


def recompute(
    points: Iterable[Point], search_text: str, selected: Collection[str]
) -> int:
    """Update ``relevant`` and ``emphasis`` on every point in place.

    Each point depends only on its own title and categories. An empty
    selection makes every point irrelevant.

    Returns:
        Number of relevant points after the update.
    """
    relevant_count = 0
    for point in points:
        relevant = is_relevant(point, search_text, selected)
        point.relevant = relevant
        point.emphasis = emphasis_for(relevant)
        relevant_count += relevant
    return relevant_count


def color_for_cluster(cluster_id: int | None) -> str:
    if cluster_id is None:
        return UNKNOWN_CLUSTER_COLOR
    return CLUSTER_COLORS.get(cluster_id, UNKNOWN_CLUSTER_COLOR)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``#rrggbb`` into an (r, g, b) tuple."""
    if len(hex_color) != 7 or not hex_color.startswith("#"):
        raise ValueError(f"Expected a #rrggbb colour, got: {hex_color!r}")
    return (
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


def _rgba(rgb: tuple[int, int, int], alpha: float) -> str:
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def style_for(point: Point) -> PointStyle:
    """Resolve fill and border colours for one point.

    Filtered-out points are drawn gray whatever their cluster, so only
    relevant points carry cluster colour.
    """
    base = color_for_cluster(point.cluster_id) if point.relevant else MUTED_COLOR
    return PointStyle(
        fill_color=_rgba(hex_to_rgb(base), point.emphasis),
        border_color=_rgba(BORDER_RGB, point.emphasis),
    )


__all__ = [
    "CLUSTER_COLORS",
    "MUTED_COLOR",
    "UNKNOWN_CLUSTER_COLOR",
    "color_for_cluster",
    "emphasis_for",
    "hex_to_rgb",
    "is_relevant",
    "matches_categories",
    "matches_search",
    "recompute",
    "style_for",
]
