"""Route pointer events on the chart canvas to tooltip and navigation."""

from __future__ import annotations

import logging
import math
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass

from atlas.chart import BubbleChart, Canvas, PointerEvent
from types_models import Point

logger = logging.getLogger(__name__)

Navigate = Callable[[str], object]
MeasureHeight = Callable[[str], float]

MOUSE_MOVE = "mousemove"
CLICK = "click"


@dataclass(frozen=True)
class TooltipState:
    """Either hidden, or visible for one point at a page position."""

    visible: bool = False
    point_index: int | None = None
    title: str | None = None
    left: float | None = None
    top: float | None = None


HIDDEN = TooltipState()


def line_wrapped_height(line_height: int, chars_per_line: int) -> MeasureHeight:
    """Estimate the rendered tooltip height from the wrapped title length."""

    def measure(title: str) -> float:
        lines = max(1, math.ceil(len(title) / chars_per_line))
        return float(lines * line_height)

    return measure


def open_in_new_tab(url: str) -> bool:
    return webbrowser.open_new_tab(url)


class InteractionRouter:
    """Resolves pointer events through the chart's hit-test.

    The router owns the tooltip state and the listeners it attaches to a
    canvas. ``attach`` always detaches first, so handlers never pile up
    across chart rebuilds.
    """

    def __init__(
        self,
        *,
        offset_x: int = 20,
        offset_y: int = 20,
        measure_height: MeasureHeight | None = None,
        navigate: Navigate | None = open_in_new_tab,
    ) -> None:
        super().__init__()
        self._offset_x = offset_x
        self._offset_y = offset_y
        self._measure_height = measure_height or line_wrapped_height(18, 60)
        self._navigate = navigate
        self._chart: BubbleChart | None = None
        self._canvas: Canvas | None = None
        self.tooltip: TooltipState = HIDDEN

    @property
    def chart(self) -> BubbleChart | None:
        return self._chart

    def attach(self, chart: BubbleChart) -> None:
        self.detach()
        chart.canvas.add_event_listener(MOUSE_MOVE, self.on_mouse_move)
        chart.canvas.add_event_listener(CLICK, self.on_click)
        self._chart = chart
        self._canvas = chart.canvas

    def detach(self) -> None:
        if self._canvas is not None:
            self._canvas.remove_event_listener(MOUSE_MOVE, self.on_mouse_move)
            self._canvas.remove_event_listener(CLICK, self.on_click)
        self._canvas = None
        self._chart = None

    def _active_point(self, event: PointerEvent) -> tuple[int, Point] | None:
        if self._chart is None:
            return None
        hits = self._chart.elements_at_event(event, intersect=True)
        if not hits:
            return None
        index = hits[0]
        return index, self._chart.points[index]

    def on_mouse_move(self, event: PointerEvent) -> TooltipState:
        active = self._active_point(event)
        if active is None:
            return self.hide_tooltip()

        index, point = active
        # Lift the tooltip by its own height so it never covers the cursor.
        top = event.page_y - self._offset_y - self._measure_height(point.title)
        self.tooltip = TooltipState(
            visible=True,
            point_index=index,
            title=point.title,
            left=event.page_x + self._offset_x,
            top=top,
        )
        return self.tooltip

    def on_click(self, event: PointerEvent) -> str | None:
        """Open the clicked point's link; returns the link, or None for a no-op."""
        active = self._active_point(event)
        if active is None:
            return None

        _, point = active
        if point.external_link is None:
            return None

        if self._navigate is not None:
            logger.info("Opening %s", point.external_link)
            self._navigate(point.external_link)
        return point.external_link

    def hide_tooltip(self) -> TooltipState:
        self.tooltip = HIDDEN
        return self.tooltip


__all__ = [
    "CLICK",
    "HIDDEN",
    "InteractionRouter",
    "MOUSE_MOVE",
    "TooltipState",
    "line_wrapped_height",
    "open_in_new_tab",
]
