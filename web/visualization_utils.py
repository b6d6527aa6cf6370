# ======================================
# Atlas Visualization Utilities
# - Bubble chart payload for the frontend renderer
# - Chart options pinned to the hit-test geometry
# ======================================

from typing import Any, Sequence

from atlas.chart import BubbleChart
from types_models import Point, PointStyle
from web.models import BubbleDatum, ChartPayload

AXIS_TITLES = ("UMAP Component 1", "UMAP Component 2")
GRID_COLOR = "rgba(255,255,255,0.2)"


def chart_options(
    x_range: tuple[float, float] = (0.0, 1.0),
    y_range: tuple[float, float] = (0.0, 1.0),
    padding: int = 0,
) -> dict[str, Any]:
    """Renderer options: fixed canvas size and axis bounds, no legend, no built-in tooltip.

    The canvas must be drawn at the payload's width and height with exactly
    these bounds, otherwise pointer coordinates stop matching the bubbles.
    """
    return {
        "responsive": False,
        "maintainAspectRatio": False,
        "layout": {"padding": padding},
        "scales": {
            "x": {
                "type": "linear",
                "min": x_range[0],
                "max": x_range[1],
                "title": {"display": True, "text": AXIS_TITLES[0]},
                "grid": {"color": GRID_COLOR},
            },
            "y": {
                "type": "linear",
                "min": y_range[0],
                "max": y_range[1],
                "title": {"display": True, "text": AXIS_TITLES[1]},
                "grid": {"color": GRID_COLOR},
            },
        },
        "plugins": {"legend": {"display": False}, "tooltip": {"enabled": False}},
        "elements": {"point": {"borderWidth": 1}},
        "animation": {"duration": 1000, "easing": "easeInOutQuad"},
    }


def _bubble(point: Point, style: PointStyle) -> BubbleDatum:
    return BubbleDatum(
        x=point.x,
        y=point.y,
        r=point.radius,
        title=point.title,
        link=point.external_link,
        cluster=point.cluster_id,
        categories=list(point.categories),
        relevant=point.relevant,
        opacity=point.emphasis,
        background_color=style.fill_color,
        border_color=style.border_color,
    )


def build_chart_payload(
    chart: BubbleChart | None,
    family: str | None,
    width: int = 1,
    height: int = 1,
) -> ChartPayload:
    """Serialize the chart's points with the styles of its latest redraw.

    With no chart the payload is empty and ``width``/``height`` describe the
    blank canvas.
    """
    if chart is None:
        return ChartPayload(
            family=family,
            revision=0,
            width=width,
            height=height,
            chart_area=(0.0, 0.0, float(width), float(height)),
            data=[],
            options=chart_options(),
        )

    points: Sequence[Point] = chart.points
    data = [_bubble(point, style) for point, style in zip(points, chart.styles)]
    return ChartPayload(
        family=family,
        revision=chart.revision,
        width=chart.canvas.width,
        height=chart.canvas.height,
        chart_area=chart.chart_area,
        data=data,
        options=chart_options(chart.x_range, chart.y_range, chart.padding),
    )


__all__ = ["AXIS_TITLES", "build_chart_payload", "chart_options"]
