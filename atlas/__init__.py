"""Core building blocks for the UMAP atlas explorer.

This package re-exports the main entry points. Importing the chart adapter
pulls in numpy, and the loader pulls in requests, so names are resolved
lazily on first access to keep configuration-only imports light.
"""

from __future__ import annotations

import importlib
from typing import Any, TYPE_CHECKING

__version__ = "0.3.0"

if TYPE_CHECKING:
    from .builder import build_points, parse_categories
    from .categories import CategoryIndex
    from .chart import BubbleChart, Canvas, PointerEvent
    from .configuration import DEFAULT_CONFIG, validate_config
    from .interaction import InteractionRouter, TooltipState
    from .loader import DatasetLoader
    from .relevance import recompute, style_for
    from .session import ExplorerSession

__all__ = [
    "BubbleChart",
    "Canvas",
    "CategoryIndex",
    "DEFAULT_CONFIG",
    "DatasetLoader",
    "ExplorerSession",
    "InteractionRouter",
    "PointerEvent",
    "TooltipState",
    "__version__",
    "build_points",
    "parse_categories",
    "recompute",
    "style_for",
    "validate_config",
]

_IMPORT_MAP = {
    "DEFAULT_CONFIG": ("atlas.configuration", "DEFAULT_CONFIG"),
    "validate_config": ("atlas.configuration", "validate_config"),
    "build_points": ("atlas.builder", "build_points"),
    "parse_categories": ("atlas.builder", "parse_categories"),
    "CategoryIndex": ("atlas.categories", "CategoryIndex"),
    "BubbleChart": ("atlas.chart", "BubbleChart"),
    "Canvas": ("atlas.chart", "Canvas"),
    "PointerEvent": ("atlas.chart", "PointerEvent"),
    "InteractionRouter": ("atlas.interaction", "InteractionRouter"),
    "TooltipState": ("atlas.interaction", "TooltipState"),
    "DatasetLoader": ("atlas.loader", "DatasetLoader"),
    "recompute": ("atlas.relevance", "recompute"),
    "style_for": ("atlas.relevance", "style_for"),
    "ExplorerSession": ("atlas.session", "ExplorerSession"),
}


def __getattr__(name: str) -> Any:
    """Lazily resolve re-exported names to avoid eager heavy imports."""
    try:
        module_name, attr_name = _IMPORT_MAP[name]
    except KeyError as exc:
        raise AttributeError(f"module 'atlas' has no attribute '{name}'") from exc

    module = importlib.import_module(module_name)
    attr = getattr(module, attr_name)
    globals()[name] = attr
    return attr


def __dir__() -> list[str]:
    return sorted(__all__)
