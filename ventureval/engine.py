"""
Startup valuation engine entry point.

``evaluate`` is a pure function of a parameter snapshot and a comparable
list: it runs the risk-adjusted DCF and the comparable valuation, blends
them into a range and returns an immutable ValuationResult. Nothing is
cached or retained between calls.
"""

from types import MappingProxyType
from typing import Iterable, Optional

from .config import LOGGER
from .exceptions import InvalidHorizonError
from .models.valuation.blend import blend, divergence_signal
from .models.valuation.cash_flow import RiskAdjustedDCFValuation
from .models.valuation.multiple import ComparableValuation
from .models.valuation.schemas import (
    Comparable,
    ValuationParameters,
    ValuationResult,
    default_comparables,
)


def evaluate(
    parameters: ValuationParameters,
    comparables: Optional[Iterable[Comparable]] = None,
) -> ValuationResult:
    """
    Value a company from its parameters and a comparable set.

    Parameters
    ----------
    parameters : ValuationParameters
        Percent-denominated snapshot (see ValuationParameters).
    comparables : iterable of Comparable, optional
        Peer transactions; the default set is used when None. Pass an empty
        list to force the terminal-multiple fallback.

    Returns
    -------
    ValuationResult
        ``tractable`` is False when the survival rate implies certain annual
        failure; the risk-adjusted fields and the range are then None.

    Raises
    ------
    InvalidHorizonError
        years_to_established <= 0.
    InvalidParameterError
        Malformed inputs (e.g. survival rate outside 0..100).
    """
    if parameters.years_to_established <= 0:
        raise InvalidHorizonError(parameters.years_to_established)

    comps = default_comparables() if comparables is None else list(comparables)
    base_rate = parameters.base_discount_rate / 100.0

    dcf = RiskAdjustedDCFValuation(strict=False).evaluate({
        "current_revenue": parameters.current_revenue,
        "growth_rates": parameters.growth_rates,
        "gross_margin": parameters.gross_margin / 100.0,
        "opex_pct": parameters.opex_pct_of_revenue / 100.0,
        "terminal_multiple": parameters.terminal_multiple,
        "base_rate": base_rate,
        "survival_rate": parameters.survival_rate / 100.0,
        "years": parameters.years_to_established,
    })

    comp = ComparableValuation(fallback_multiple=parameters.terminal_multiple).evaluate({
        "current_revenue": parameters.current_revenue,
        "comparables": comps,
        "quality": parameters.quality,
    })

    if dcf["tractable"]:
        valuation_range = blend(dcf["adjusted_dcf"], dcf["base_dcf"], comp["comparable_adjusted_value"])
        divergence = divergence_signal(dcf["adjusted_dcf"], comp["comparable_adjusted_value"])
        LOGGER.debug(
            f"Valuation range: low={valuation_range.low:,.1f} "
            f"mid={valuation_range.mid:,.1f} high={valuation_range.high:,.1f}"
        )
    else:
        valuation_range = None
        divergence = None

    return ValuationResult(
        revenues=tuple(dcf["revenues"]),
        cash_flows=tuple(dcf["cash_flows"]),
        terminal_value=dcf["terminal_value"],
        annual_failure_rate=dcf["annual_failure_rate"],
        adjusted_discount_rate=dcf["adjusted_discount_rate"],
        base_discount_rate=base_rate,
        base_dcf=dcf["base_dcf"],
        adjusted_dcf=dcf["adjusted_dcf"],
        discount_impact=dcf["discount_impact"],
        multiples=tuple(comp["multiples"]),
        median_multiple=comp["median_multiple"],
        average_multiple=comp["average_multiple"],
        quality_factors=MappingProxyType(comp["quality_factors"]),
        total_quality_multiplier=comp["total_quality_multiplier"],
        comparable_base_value=comp["comparable_base_value"],
        comparable_adjusted_value=comp["comparable_adjusted_value"],
        valuation_range=valuation_range,
        divergence=divergence,
        tractable=dcf["tractable"],
    )
