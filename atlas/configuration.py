"""Configuration helpers for the atlas explorer."""

from __future__ import annotations
from pathlib import Path

import config
from types_models import ExplorerConfig


# Seed runtime defaults from the shared config module so CLI scripts can hydrate config quickly.
DEFAULT_CONFIG = ExplorerConfig(
    data_dir=Path(config.DATA_DIR),
    data_base_url=config.DATA_BASE_URL,
    request_timeout=config.REQUEST_TIMEOUT,
    families=list(config.CATEGORY_FAMILIES),
    default_family=config.DEFAULT_CATEGORY_FAMILY,
    point_radius=config.POINT_RADIUS,
    link_template=config.ARXIV_URL_TEMPLATE,
    chart_width=config.CHART_WIDTH,
    chart_height=config.CHART_HEIGHT,
    chart_padding=config.CHART_PADDING,
    tooltip_offset_x=config.TOOLTIP_OFFSET_X,
    tooltip_offset_y=config.TOOLTIP_OFFSET_Y,
    tooltip_line_height=config.TOOLTIP_LINE_HEIGHT,
    tooltip_chars_per_line=config.TOOLTIP_CHARS_PER_LINE,
    reset_search_on_load=config.RESET_SEARCH_ON_LOAD,
)


def validate_config(config_obj: ExplorerConfig) -> None:
    """Perform runtime validation on top of Pydantic checks."""
    if len(set(config_obj.families)) != len(config_obj.families):
        raise ValueError("families must not contain duplicates")

    if config_obj.default_family not in config_obj.families:
        raise ValueError(
            f"default_family '{config_obj.default_family}' is not one of "
            + f"{config_obj.families}"
        )

    if "{arxiv_id}" not in config_obj.link_template:
        raise ValueError("link_template must contain an {arxiv_id} placeholder")

    if 2 * config_obj.chart_padding >= min(
        config_obj.chart_width, config_obj.chart_height
    ):
        raise ValueError("chart_padding leaves no drawable area")

    if config_obj.data_base_url is None and not config_obj.data_dir.is_dir():
        # Without an HTTP source every load would fail, so escalate early.
        raise FileNotFoundError(
            f"Dataset directory not found at {config_obj.data_dir}. "
            + "Set DATA_DIR or DATA_BASE_URL in config.py."
        )


__all__ = ["DEFAULT_CONFIG", "validate_config"]
