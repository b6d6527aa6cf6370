# ======================================
# Config for the UMAP atlas explorer
# Default: local JSON files under ./data, served on localhost
# ======================================

from typing import List

# Dataset location
DATA_DIR: str = "data"
DATA_BASE_URL: str = ""  # e.g. "https://example.org/atlas"; empty = read DATA_DIR
REQUEST_TIMEOUT: int = 30

# Category families (one umap_data_/cluster_data_ pair per token)
CATEGORY_FAMILIES: List[str] = [
    "Computer_Science",
    "Economics",
    "Electrical_Engineering",
    "Mathematics",
    "Physics",
    "Quantitative_Biology",
    "Quantitative_Finance",
    "Statistics",
]
DEFAULT_CATEGORY_FAMILY: str = "Computer_Science"

# Points
POINT_RADIUS: float = 10.0
ARXIV_URL_TEMPLATE: str = "https://arxiv.org/abs/{arxiv_id}"

# Chart surface (pixels)
CHART_WIDTH: int = 1200
CHART_HEIGHT: int = 800
CHART_PADDING: int = 40

# Tooltip placement (pixels, relative to the cursor)
TOOLTIP_OFFSET_X: int = 20
TOOLTIP_OFFSET_Y: int = 20
TOOLTIP_LINE_HEIGHT: int = 18
TOOLTIP_CHARS_PER_LINE: int = 60

# Filter state policy across loads
RESET_SEARCH_ON_LOAD: bool = False

# Server and logging
SERVER_HOST: str = "0.0.0.0"
SERVER_PORT: int = 8000
SERVER_LOG_FILE: str = "atlas_server.log"


def validate_config() -> None:
    """Validate configuration values at startup."""
    positive_int_configs = [
        ("REQUEST_TIMEOUT", REQUEST_TIMEOUT),
        ("CHART_WIDTH", CHART_WIDTH),
        ("CHART_HEIGHT", CHART_HEIGHT),
        ("TOOLTIP_LINE_HEIGHT", TOOLTIP_LINE_HEIGHT),
        ("TOOLTIP_CHARS_PER_LINE", TOOLTIP_CHARS_PER_LINE),
        ("SERVER_PORT", SERVER_PORT),
    ]

    for config_name, config_val in positive_int_configs:
        if not isinstance(config_val, int) or config_val <= 0:
            raise ValueError(
                f"{config_name} must be a positive integer, got: {config_val}"
            )

    if not isinstance(CHART_PADDING, int) or CHART_PADDING < 0:
        raise ValueError(
            f"CHART_PADDING must be a non-negative integer, got: {CHART_PADDING}"
        )

    if 2 * CHART_PADDING >= min(CHART_WIDTH, CHART_HEIGHT):
        raise ValueError("CHART_PADDING leaves no drawable area")

    if not isinstance(POINT_RADIUS, (int, float)) or POINT_RADIUS <= 0:
        raise ValueError(f"POINT_RADIUS must be positive, got: {POINT_RADIUS}")

    # String configs
    string_configs = [
        ("DATA_DIR", DATA_DIR),
        ("DEFAULT_CATEGORY_FAMILY", DEFAULT_CATEGORY_FAMILY),
        ("ARXIV_URL_TEMPLATE", ARXIV_URL_TEMPLATE),
        ("SERVER_HOST", SERVER_HOST),
        ("SERVER_LOG_FILE", SERVER_LOG_FILE),
    ]

    for config_name, config_val in string_configs:
        if not isinstance(config_val, str) or not config_val.strip():
            raise ValueError(
                f"{config_name} must be a non-empty string, got: {config_val}"
            )

    if "{arxiv_id}" not in ARXIV_URL_TEMPLATE:
        raise ValueError("ARXIV_URL_TEMPLATE must contain an {arxiv_id} placeholder")

    if not CATEGORY_FAMILIES or len(set(CATEGORY_FAMILIES)) != len(CATEGORY_FAMILIES):
        raise ValueError("CATEGORY_FAMILIES must be a non-empty list of unique tokens")

    if DEFAULT_CATEGORY_FAMILY not in CATEGORY_FAMILIES:
        raise ValueError(
            f"DEFAULT_CATEGORY_FAMILY must be one of {CATEGORY_FAMILIES}, "
            + f"got: {DEFAULT_CATEGORY_FAMILY}"
        )


# Validate on import
validate_config()
