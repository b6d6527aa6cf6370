"""Application state for one explorer: dataset, filters, chart and router.

Load policy per field when a new family is committed:

- points, category index and chart are replaced wholesale;
- the category selection is reset to every category of the new dataset;
- the search text is kept unless ``reset_search_on_load`` is set.

Each load takes a generation number when it is issued. A load whose fetch
resolves after a newer load was issued is discarded without touching state.
"""

from __future__ import annotations

import logging
from enum import Enum

from atlas.builder import build_points
from atlas.categories import CategoryIndex
from atlas.chart import BubbleChart, Canvas, PointerEvent
from atlas.errors import DatasetError, UnknownCategoryError
from atlas.interaction import (
    CLICK,
    MOUSE_MOVE,
    InteractionRouter,
    Navigate,
    TooltipState,
    line_wrapped_height,
    open_in_new_tab,
)
from atlas.loader import DataSource, DatasetLoader, create_data_source
from atlas.relevance import recompute, style_for
from types_models import ExplorerConfig, FilterState, Point

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    COMMITTED = "committed"
    FAILED = "failed"
    STALE = "stale"


class ExplorerSession:
    """Owns everything one user interacts with."""

    def __init__(
        self,
        config_obj: ExplorerConfig,
        *,
        source: DataSource | None = None,
        navigate: Navigate | None = open_in_new_tab,
    ) -> None:
        super().__init__()
        self.config = config_obj
        self.loader = DatasetLoader(
            source if source is not None else create_data_source(config_obj),
            config_obj.families,
        )
        self.canvas = Canvas(config_obj.chart_width, config_obj.chart_height)
        self.router = InteractionRouter(
            offset_x=config_obj.tooltip_offset_x,
            offset_y=config_obj.tooltip_offset_y,
            measure_height=line_wrapped_height(
                config_obj.tooltip_line_height, config_obj.tooltip_chars_per_line
            ),
            navigate=navigate,
        )
        self.filters = FilterState()
        self.points: list[Point] = []
        self.categories = CategoryIndex()
        self.chart: BubbleChart | None = None
        self.family: str | None = None
        self.last_error: str | None = None
        self.relevant_count = 0
        self._generation = 0

    @property
    def loaded(self) -> bool:
        return self.chart is not None

    # ===============================
    # Loading
    # ===============================
    def select_family(self, family: str) -> None:
        """Validate a family choice and hide the tooltip ahead of a load."""
        self.loader.check_family(family)
        self.router.hide_tooltip()

    async def load_family(self, family: str) -> LoadStatus:
        """Load ``family`` and rebuild the chart.

        Fetch and alignment errors are logged and recorded in ``last_error``
        (``FAILED``); the previous chart stays in place. A load superseded by
        a newer one while in flight returns ``STALE`` and changes nothing.

        Raises:
            UnknownFamilyError: ``family`` is not configured.
        """
        self.loader.check_family(family)
        self._generation += 1
        generation = self._generation

        try:
            raw = await self.loader.fetch(family)
        except DatasetError as exc:
            if generation != self._generation:
                logger.info("Ignoring failed stale load of %s: %s", family, exc)
                return LoadStatus.STALE
            self._report_failure(family, exc)
            return LoadStatus.FAILED

        if generation != self._generation:
            logger.info(
                "Discarding stale load of %s (generation %d, current %d)",
                family,
                generation,
                self._generation,
            )
            return LoadStatus.STALE

        try:
            built = build_points(
                raw.umap.embeddings,
                raw.umap.additional_info,
                raw.clusters.clusters,
                radius=self.config.point_radius,
                link_template=self.config.link_template,
            )
        except DatasetError as exc:
            self._report_failure(family, exc)
            return LoadStatus.FAILED

        self._commit(family, built.points, CategoryIndex(built.categories))
        return LoadStatus.COMMITTED

    def _report_failure(self, family: str, exc: DatasetError) -> None:
        logger.error("❌ Error loading UMAP and cluster data for %s: %s", family, exc)
        self.last_error = str(exc)

    def _commit(self, family: str, points: list[Point], categories: CategoryIndex) -> None:
        if self.chart is not None:
            self.chart.destroy()

        self.points = points
        self.categories = categories
        self.family = family
        self.last_error = None
        self.filters = FilterState(
            search_text="" if self.config.reset_search_on_load else self.filters.search_text,
            selected_categories=categories.all_selected(),
        )
        self.router.hide_tooltip()

        self.chart = BubbleChart(
            self.canvas, self.points, style_for, padding=self.config.chart_padding
        )
        self.router.attach(self.chart)
        self.refresh()

        logger.info(
            "✅ Loaded %s: %d papers, %d categories",
            family,
            len(self.points),
            len(self.categories),
        )

    # ===============================
    # Filters
    # ===============================
    def refresh(self) -> int:
        """Recompute every point's relevance and redraw the chart."""
        self.relevant_count = recompute(
            self.points, self.filters.search_text, self.filters.selected_categories
        )
        if self.chart is not None:
            self.chart.update()
        return self.relevant_count

    def set_search_text(self, text: str) -> int:
        self.filters.search_text = text
        return self.refresh()

    def select_all_categories(self) -> int:
        self.filters.selected_categories = self.categories.all_selected()
        return self.refresh()

    def select_no_categories(self) -> int:
        self.filters.selected_categories = self.categories.none_selected()
        return self.refresh()

    def toggle_category(self, token: str, selected: bool | None = None) -> int:
        """Flip one category, or force it on/off when ``selected`` is given."""
        if token not in self.categories:
            raise UnknownCategoryError(token)

        current = self.filters.selected_categories
        if selected is None:
            selected = token not in current

        if selected:
            current.add(token)
        else:
            current.discard(token)
        return self.refresh()

    # ===============================
    # Pointer events
    # ===============================
    def pointer_move(self, event: PointerEvent) -> TooltipState:
        self.canvas.dispatch(MOUSE_MOVE, event)
        return self.router.tooltip

    def pointer_click(self, event: PointerEvent) -> str | None:
        results = self.canvas.dispatch(CLICK, event)
        links = [link for link in results if isinstance(link, str)]
        return links[0] if links else None


__all__ = ["ExplorerSession", "LoadStatus"]
