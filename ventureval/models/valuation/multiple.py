from typing import Dict, Iterable, List, Mapping, Optional, Sequence
import numpy as np

from ...config import LOGGER, NEUTRAL_SCORE
from ...exceptions import InvalidParameterError
from .base import BaseValuation
from .schemas import Comparable, QualityDimension, QualityFactor, QualityScores
from .utils import require

def multiples_of(comparables: Iterable[Comparable]) -> List[float]:
    """
    Valuation / revenue for every valid comparable, in input order.
    Rows with revenue <= 0 or valuation <= 0 are skipped.
    """
    return [c.valuation / c.revenue for c in comparables if c.is_valid]

def median_multiple(multiples: Sequence[float], fallback: float) -> float:
    """
    Element at index floor(n/2) of the ascending-sorted multiples.

    No interpolation for even n: [2, 4, 6, 8] gives 6. Returns ``fallback``
    (the terminal multiple) when there are no multiples.
    """
    if len(multiples) == 0:
        return float(fallback)
    arr = np.sort(np.asarray(multiples, dtype=float))
    return float(arr[arr.size // 2])

def average_multiple(multiples: Sequence[float], fallback: float) -> float:
    """Arithmetic mean, or ``fallback`` when there are no multiples."""
    if len(multiples) == 0:
        return float(fallback)
    return float(np.mean(np.asarray(multiples, dtype=float)))

def quality_multiplier(score: float, weight: float) -> float:
    """
    Linear per-dimension adjustment centred on the neutral score:
      1 + ((score - 3) / 2) * weight
    Score 1 -> 1 - weight, 3 -> 1.0, 5 -> 1 + weight.
    """
    return 1.0 + ((float(score) - NEUTRAL_SCORE) / 2.0) * float(weight)

def quality_factors(scores: QualityScores) -> Dict[QualityDimension, QualityFactor]:
    return {
        dim: QualityFactor(
            dimension=dim,
            score=score,
            weight=dim.weight,
            multiplier=quality_multiplier(score, dim.weight),
        )
        for dim, score in scores.items()
    }

def total_quality_multiplier(factors: Mapping[QualityDimension, QualityFactor]) -> float:
    """
    Product of the per-dimension multipliers, so weaknesses compound rather
    than average out against a single strong dimension.
    """
    total = 1.0
    for factor in factors.values():
        total *= factor.multiplier
    return total


class ComparableValuation(BaseValuation):
    """
    Comparable-transaction (EV/Revenue) valuation with a quality overlay.

    Multiple source
    ---------------
      • 'comparables' : sequence of Comparable; invalid rows are excluded.
      • The median multiple (index floor(n/2) of the sorted list) is applied
        to current revenue. With no valid comparable both statistics fall
        back to the terminal multiple.

    Inputs to evaluate()
    --------------------
      - current_revenue   : float
      - comparables       : sequence of Comparable
      - terminal_multiple : float (fallback; may also be set at construction)
      - quality           : QualityScores (optional, neutral if omitted)

    Returns
    -------
    dict
      {
        'multiples'                 : list[float],
        'median_multiple'           : float,
        'average_multiple'          : float,
        'quality_factors'           : dict[QualityDimension, QualityFactor],
        'total_quality_multiplier'  : float,
        'comparable_base_value'     : float,
        'comparable_adjusted_value' : float,
        'meta'                      : dict   # counts, source
      }
    """

    def __init__(self, fallback_multiple: Optional[float] = None):
        """
        Parameters
        ----------
        fallback_multiple : float, optional
            Multiple used when no valid comparable exists. Overridden by the
            'terminal_multiple' input when given.
        """
        self.fallback_multiple = float(fallback_multiple) if fallback_multiple is not None else None

    @classmethod
    def from_params(cls, params: Dict) -> "ComparableValuation":
        """
        Expected keys
        -------------
          - fallback_multiple : float (optional)
        """
        return cls(fallback_multiple=params.get("fallback_multiple", None))

    # ---------- helpers ----------
    def _fallback(self, inputs: Dict) -> float:
        m = inputs.get("terminal_multiple")
        if m is None:
            m = self.fallback_multiple
        if m is None:
            raise InvalidParameterError("Missing 'terminal_multiple' (fallback multiple).")
        return float(m)

    # ---------- core ----------
    def evaluate(self, inputs: Dict) -> Dict:
        """
        Compute the base and quality-adjusted comparable value.

        Parameters
        ----------
        inputs : dict
            See class docstring.

        Returns
        -------
        dict  (see class docstring)
        """
        revenue = float(require(inputs, "current_revenue"))
        comparables = list(inputs.get("comparables") or [])
        quality = inputs.get("quality") or QualityScores()
        fallback = self._fallback(inputs)

        multiples = multiples_of(comparables)
        excluded = len(comparables) - len(multiples)
        if excluded:
            LOGGER.debug(f"Excluded {excluded} comparable(s) with non-positive revenue or valuation.")
        if not multiples:
            LOGGER.info(f"No valid comparables; falling back to terminal multiple {fallback:.2f}x.")

        median = median_multiple(multiples, fallback)
        average = average_multiple(multiples, fallback)

        factors = quality_factors(quality)
        total = total_quality_multiplier(factors)

        base_value = revenue * median
        adjusted_value = base_value * total

        return {
            "multiples": multiples,
            "median_multiple": median,
            "average_multiple": average,
            "quality_factors": factors,
            "total_quality_multiplier": total,
            "comparable_base_value": base_value,
            "comparable_adjusted_value": adjusted_value,
            "meta": {
                "n_comparables": len(comparables),
                "n_valid": len(multiples),
                "source": "peers" if multiples else "terminal_multiple",
            },
        }
