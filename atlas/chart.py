"""Bubble chart adapter: data-to-pixel scaling, hit-testing and redraws.

Drawing itself happens in the browser. This module keeps the pieces the
explorer needs on the server side: the pixel geometry used to resolve a
pointer position to a point, the per-point styles produced on every redraw,
and the listener registry of the drawing surface.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt

from types_models import Point, PointStyle

logger = logging.getLogger(__name__)

FloatArray = npt.NDArray[np.float64]
StyleFn = Callable[[Point], PointStyle]


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position on the canvas plus the page position for overlays."""

    x: float
    y: float
    page_x: float
    page_y: float


Listener = Callable[[PointerEvent], Any]


class Canvas:
    """Drawing surface that outlives individual charts.

    Listeners are attached per event type. Removing a listener that is not
    attached is a no-op.
    """

    def __init__(self, width: int, height: int) -> None:
        super().__init__()
        self.width = width
        self.height = height
        self._listeners: dict[str, list[Listener]] = {}

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        handlers = self._listeners.setdefault(event_type, [])
        if listener not in handlers:
            handlers.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        handlers = self._listeners.get(event_type, [])
        if listener in handlers:
            handlers.remove(listener)

    def listener_count(self, event_type: str) -> int:
        return len(self._listeners.get(event_type, []))

    def dispatch(self, event_type: str, event: PointerEvent) -> list[Any]:
        """Invoke every listener for ``event_type`` and collect the results."""
        return [listener(event) for listener in list(self._listeners.get(event_type, []))]


class BubbleChart:
    """Bubble chart over a fixed point sequence."""

    def __init__(
        self,
        canvas: Canvas,
        points: Sequence[Point],
        style_fn: StyleFn,
        *,
        padding: int = 40,
    ) -> None:
        super().__init__()
        self.canvas = canvas
        self.points = points
        self._style_fn = style_fn
        self._padding = padding
        self.x_range, self.y_range = self._axis_ranges()
        self._pixels: FloatArray = self._scale_to_pixels()
        self.styles: list[PointStyle] = []
        self.revision = 0
        self.destroyed = False
        self.update()

    # ===============================
    # Geometry
    # ===============================
    def _axis_ranges(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Data range per axis; a degenerate axis spans one unit from its value."""
        if not self.points:
            return (0.0, 1.0), (0.0, 1.0)

        coords = np.array([p.position for p in self.points], dtype=np.float64)
        mins = coords.min(axis=0)
        maxs = coords.max(axis=0)
        maxs[maxs == mins] += 1.0
        return (float(mins[0]), float(maxs[0])), (float(mins[1]), float(maxs[1]))

    @property
    def padding(self) -> int:
        return self._padding

    @property
    def chart_area(self) -> tuple[float, float, float, float]:
        """Plot rectangle in canvas pixels as (left, top, right, bottom)."""
        return (
            float(self._padding),
            float(self._padding),
            float(self.canvas.width - self._padding),
            float(self.canvas.height - self._padding),
        )

    def _scale_to_pixels(self) -> FloatArray:
        """Map data coordinates linearly from the axis ranges into the chart area.

        The y axis grows upwards in data space and downwards in pixels. A
        degenerate axis puts its points on the left or bottom edge.
        """
        if not self.points:
            return np.zeros((0, 2), dtype=np.float64)

        coords = np.array([p.position for p in self.points], dtype=np.float64)
        (x_min, x_max), (y_min, y_max) = self.x_range, self.y_range
        left, top, right, bottom = self.chart_area

        pixels = np.empty_like(coords)
        pixels[:, 0] = left + (coords[:, 0] - x_min) / (x_max - x_min) * (right - left)
        pixels[:, 1] = bottom - (coords[:, 1] - y_min) / (y_max - y_min) * (bottom - top)
        return pixels

    def pixel_position(self, index: int) -> tuple[float, float]:
        x, y = self._pixels[index]
        return float(x), float(y)

    def elements_at_event(self, event: PointerEvent, intersect: bool = True) -> list[int]:
        """Return the index of the bubble nearest to the pointer, if any.

        With ``intersect`` the pointer must also lie inside that bubble.
        """
        if self.destroyed or not self.points:
            return []

        deltas = self._pixels - np.array([event.x, event.y], dtype=np.float64)
        distances = np.hypot(deltas[:, 0], deltas[:, 1])
        radii = np.array([p.radius for p in self.points], dtype=np.float64)

        candidates = (
            np.flatnonzero(distances <= radii) if intersect else np.arange(len(self.points))
        )
        if candidates.size == 0:
            return []
        return [int(candidates[np.argmin(distances[candidates])])]

    # ===============================
    # Lifecycle
    # ===============================
    def update(self) -> None:
        """Redraw: re-resolve every point's style from its current state."""
        if self.destroyed:
            logger.debug("Ignoring update on destroyed chart")
            return
        self.styles = [self._style_fn(point) for point in self.points]
        self.revision += 1

    def destroy(self) -> None:
        self.destroyed = True
        self.styles = []


__all__ = ["BubbleChart", "Canvas", "PointerEvent"]
