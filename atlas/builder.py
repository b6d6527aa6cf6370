"""Build the render model from raw projection, metadata and cluster data."""

from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

from atlas.errors import AlignmentError
from types_models import PaperInfo, Point

logger = logging.getLogger(__name__)


class BuiltDataset(NamedTuple):
    """Points plus every distinct category token in first-seen order."""

    points: list[Point]
    categories: list[str]


def parse_categories(raw: str) -> tuple[str, ...]:
    """Split a comma-separated category field into trimmed, non-empty tokens."""
    return tuple(token.strip() for token in raw.split(",") if token.strip())


def build_external_link(arxiv_id: str | None, template: str) -> str | None:
    """Return the source URI, or None when no identifier is present."""
    if arxiv_id is None:
        return None
    arxiv_id = arxiv_id.strip()
    if not arxiv_id:
        return None
    return template.format(arxiv_id=arxiv_id)


def build_points(
    embeddings: Sequence[Sequence[float]],
    additional_info: Sequence[PaperInfo],
    clusters: Sequence[int | None],
    *,
    radius: float,
    link_template: str,
) -> BuiltDataset:
    """Merge the three index-aligned inputs into a point sequence.

    All inputs must have the same length; a mismatch raises
    :class:`AlignmentError` before any point is constructed.
    """
    if not (len(embeddings) == len(additional_info) == len(clusters)):
        raise AlignmentError(len(embeddings), len(additional_info), len(clusters))

    # dict keeps first-observation order
    seen: dict[str, None] = {}
    points: list[Point] = []
    uncategorised = 0

    for coords, info, cluster in zip(embeddings, additional_info, clusters):
        categories = parse_categories(info.categories)
        if not categories:
            uncategorised += 1
        for token in categories:
            seen.setdefault(token, None)

        points.append(
            Point(
                position=(float(coords[0]), float(coords[1])),
                radius=radius,
                title=info.title,
                abstract=info.abstract,
                external_link=build_external_link(info.arxiv_id, link_template),
                cluster_id=cluster,
                categories=categories,
            )
        )

    if uncategorised:
        logger.warning(
            "⚠️ %d of %d papers have no categories and can never match a category filter",
            uncategorised,
            len(points),
        )

    return BuiltDataset(points=points, categories=list(seen))


__all__ = ["BuiltDataset", "build_external_link", "build_points", "parse_categories"]
