"""
Startup mortality risk adjustment.

A horizon survival probability s over n years implies a constant annual
failure hazard f = 1 - s^(1/n). Folding that hazard into the required return

    r_adj = (r + f) / (1 - f)

gives the rate that, applied to "no failure" cash flows, recovers the same
present value as weighting each year's flow by its cumulative survival
probability (1 - f)^t and discounting at r.
"""
from typing import List

from ...config import LOGGER, SINGULARITY_TOLERANCE
from ...exceptions import DivisionSingularityError, InvalidHorizonError, InvalidParameterError
from .utils import check_rate

def derive_failure_rate(survival_rate: float, years: float) -> float:
    """
    Annual failure rate implied by a horizon survival probability.

    Parameters
    ----------
    survival_rate : float
        Probability (fraction in [0, 1]) of reaching the established stage.
        0 gives f = 1 (certain annual failure), which is a valid result.
    years : float
        Horizon in years, must be > 0.
    """
    if years is None or years <= 0:
        raise InvalidHorizonError(years)
    s = float(survival_rate)
    if not (0.0 <= s <= 1.0):
        raise InvalidParameterError(f"survival_rate must be in [0, 1] (got {s}).")
    return 1.0 - s ** (1.0 / float(years))

def adjust_discount_rate(base_rate: float, failure_rate: float) -> float:
    """
    Risk-adjusted discount rate (r + f) / (1 - f).

    Raises DivisionSingularityError when 1 - f is numerically zero.
    """
    check_rate(base_rate, "base_rate")
    f = float(failure_rate)
    surviving = 1.0 - f
    if abs(surviving) <= SINGULARITY_TOLERANCE:
        raise DivisionSingularityError(f)
    r_adj = (float(base_rate) + f) / surviving
    LOGGER.debug(f"risk adjustment: r={base_rate:.4f} f={f:.4f} -> r_adj={r_adj:.4f}")
    return r_adj

def survival_curve(failure_rate: float, years: int) -> List[float]:
    """Cumulative survival (1 - f)^t for t = 0..years."""
    if years is None or years <= 0:
        raise InvalidHorizonError(years)
    keep = 1.0 - float(failure_rate)
    return [keep ** t for t in range(int(years) + 1)]
