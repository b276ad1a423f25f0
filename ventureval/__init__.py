from .engine import evaluate
from .exceptions import (
    DivisionSingularityError,
    InvalidHorizonError,
    InvalidParameterError,
    UnknownStageError,
    ValuationError,
)
from .config import setup_logger
from .formatting import format_multiple, format_pct, format_value
from .models import valuation as _valuation
from .models.valuation import *

__version__ = "0.1.0"

__all__ = [
    "evaluate",
    "ValuationError",
    "InvalidParameterError",
    "InvalidHorizonError",
    "DivisionSingularityError",
    "UnknownStageError",
    "format_value",
    "format_pct",
    "format_multiple",
    "setup_logger",
] + _valuation.__all__
