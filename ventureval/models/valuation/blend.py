"""
Blending of the risk-adjusted DCF and the quality-adjusted comparable value.

The range is a heuristic envelope, not a confidence interval: the low end
leans on the more pessimistic method, the high end sits 20% above the more
optimistic one. low <= mid <= high is not guaranteed.
"""
from ...config import (
    BLEND_HIGH_COMPARABLE_FACTOR,
    BLEND_HIGH_DCF_FACTOR,
    BLEND_LOW_FACTOR,
    DIVERGENCE_THRESHOLD,
)
from .schemas import DivergenceSignal, ValuationRange

def blend(adjusted_dcf: float, base_dcf: float, comparable_adjusted_value: float) -> ValuationRange:
    """
    low  = min(adjusted_dcf, comparable * 0.8)
    mid  = (adjusted_dcf + comparable) / 2
    high = max(base_dcf * 0.8, comparable * 1.2)
    """
    comp = float(comparable_adjusted_value)
    return ValuationRange(
        low=min(float(adjusted_dcf), comp * BLEND_LOW_FACTOR),
        mid=(float(adjusted_dcf) + comp) / 2.0,
        high=max(float(base_dcf) * BLEND_HIGH_DCF_FACTOR, comp * BLEND_HIGH_COMPARABLE_FACTOR),
    )

def divergence_signal(adjusted_dcf: float, comparable_adjusted_value: float) -> DivergenceSignal:
    """Flag when one method exceeds the other by more than 1.5x."""
    if adjusted_dcf > comparable_adjusted_value * DIVERGENCE_THRESHOLD:
        return DivergenceSignal.DCF_ABOVE_COMPARABLES
    if comparable_adjusted_value > adjusted_dcf * DIVERGENCE_THRESHOLD:
        return DivergenceSignal.COMPARABLES_ABOVE_DCF
    return DivergenceSignal.CONSISTENT
