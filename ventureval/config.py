"""
Configuration Module
====================

Centralizes the constants used by the valuation engine: forecast horizon,
quality-dimension weights, blending factors, numerical tolerances, the default
comparable set and logging setup.
"""

import logging
from types import MappingProxyType


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logger(name: str = "ventureval", level: int = logging.INFO) -> logging.Logger:
    """
    Attach a formatted stream handler to a logger. Opt-in for host scripts;
    the library itself never calls it.
    """
    logger = logging.getLogger(name)
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


# silent unless the host configures logging
LOGGER = logging.getLogger("ventureval")
LOGGER.addHandler(logging.NullHandler())


# =============================================================================
# PROJECTION
# =============================================================================

FORECAST_YEARS: int = 5                  # explicit forecast years after year 0

# =============================================================================
# RISK ADJUSTMENT
# =============================================================================

SINGULARITY_TOLERANCE: float = 1e-12     # |1 - f| below this is treated as 0

# =============================================================================
# QUALITY ADJUSTMENT
# =============================================================================

NEUTRAL_SCORE: int = 3
MIN_SCORE: int = 1
MAX_SCORE: int = 5

# Max +/- adjustment per dimension; sums to 0.80, each dimension scales around 1.0
QUALITY_WEIGHTS = MappingProxyType({
    "team": 0.20,
    "product": 0.20,
    "market": 0.15,
    "traction": 0.15,
    "defensibility": 0.10,
})

# =============================================================================
# BLENDING
# =============================================================================

BLEND_LOW_FACTOR: float = 0.8            # comparable haircut for the low end
BLEND_HIGH_COMPARABLE_FACTOR: float = 1.2
BLEND_HIGH_DCF_FACTOR: float = 0.8
DIVERGENCE_THRESHOLD: float = 1.5        # one method > 1.5x the other

# =============================================================================
# DISPLAY
# =============================================================================

CURRENCY_SYMBOL: str = "£"

# =============================================================================
# DEFAULT COMPARABLES  (valuation, revenue in £m)
# =============================================================================

DEFAULT_COMPARABLES = (
    {"name": "Comparable A", "valuation": 50.0, "revenue": 5.0, "stage": "Series A"},
    {"name": "Comparable B", "valuation": 80.0, "revenue": 8.0, "stage": "Series A"},
    {"name": "Comparable C", "valuation": 120.0, "revenue": 15.0, "stage": "Series B"},
)
