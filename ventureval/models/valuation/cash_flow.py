from typing import Dict, List, Optional, Sequence
import numpy as np

from ...config import FORECAST_YEARS, LOGGER
from ...exceptions import DivisionSingularityError, InvalidParameterError
from .base import BaseValuation
from .projection import project_revenue
from .risk import adjust_discount_rate, derive_failure_rate
from .utils import as_array, check_rate, pick_first, require

def compute_cash_flows(revenues: Sequence[float], gross_margin: float, opex_pct: float) -> List[float]:
    """
    Simplified operating cash flow for each forecast year: gross profit - opex.

    Parameters
    ----------
    revenues : sequence of 6 floats
        Year 0..5 revenue; year 0 produces no cash flow.
    gross_margin, opex_pct : float
        Fractions of the same year's revenue.

    Returns
    -------
    list of 5 floats (may be negative: cash burn)
    """
    rev = as_array(revenues, FORECAST_YEARS + 1, "revenues")[1:]
    cf = rev * float(gross_margin) - rev * float(opex_pct)
    return [float(x) for x in cf]

def compute_terminal_value(final_revenue: float, terminal_multiple: float) -> float:
    """
    Exit-multiple terminal value on final-year revenue:
      TV = revenue_T * multiple
    """
    return float(final_revenue) * float(terminal_multiple)

def _pv_factors(rate: float, T: int) -> np.ndarray:
    """
    Present value factors (1 + r)^-t for periods 1..T.
    """
    t = np.arange(1, T + 1, dtype=float)
    return (1.0 + float(rate)) ** (-t)

def present_value(cash_flows: Sequence[float], terminal_value: float, rate: float) -> float:
    """
    PV = sum_t CF_t / (1+r)^t  +  TV / (1+r)^T,   t = 1..T (T = 5).
    """
    check_rate(rate, "rate")
    cf = as_array(cash_flows, FORECAST_YEARS, "cash_flows")
    pv_f = _pv_factors(rate, cf.size)
    return float(np.sum(cf * pv_f) + float(terminal_value) * pv_f[-1])

def discount_impact(base_dcf: float, adjusted_dcf: float) -> float:
    """
    Percentage of base DCF value removed by the risk adjustment.
    Defined as 0 when the base DCF is zero or negative.
    """
    if base_dcf <= 0:
        return 0.0
    return (base_dcf - adjusted_dcf) / base_dcf * 100.0


class RiskAdjustedDCFValuation(BaseValuation):
    """
    Two-rate Discounted Cash Flow valuation for early-stage companies.

    The same projected cash flows and exit-multiple terminal value are
    discounted twice:
      • at the base required return r            -> base_dcf
      • at the mortality-adjusted rate r_adj     -> adjusted_dcf
    where r_adj = (r + f) / (1 - f) and f = 1 - s^(1/n) (see risk.py).

    Expected inputs to `evaluate()`:
    --------------------------------
      Revenue path (one of):
        - 'revenues' : 6 floats (year 0..5)
        - OR 'current_revenue' and 'growth_rates' (5 percentages)
      - gross_margin      : float  (fraction)
      - opex_pct          : float  (fraction of revenue)
      - terminal_multiple : float
      - base_rate         : float  (fraction; alias 'r')
      - survival_rate     : float  (fraction; alias 's')
      - years             : int    (alias 'years_to_established')

    Returns (dict):
    ---------------
      {
        'revenues'              : list[6],
        'cash_flows'            : list[5],
        'terminal_value'        : float,
        'annual_failure_rate'   : float,
        'adjusted_discount_rate': float or None,
        'base_dcf'              : float,
        'adjusted_dcf'          : float or None,
        'discount_impact'       : float or None,
        'tractable'             : bool,
        'breakdown': {
            'base'    : {'PV_CF': float, 'PV_Terminal': float},
            'adjusted': {'PV_CF': float, 'PV_Terminal': float} or None,
        }
      }

    Notes
    -----
    • strict=True (default) lets DivisionSingularityError propagate when the
      failure rate is 1. With strict=False the adjusted fields are None and
      'tractable' is False; the base DCF is still reported.
    • Terminal value is revenue_5 * multiple, not a perpetuity-growth model.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict

    @classmethod
    def from_params(cls, params: Dict) -> "RiskAdjustedDCFValuation":
        """
        Parameters
        ----------
        params : dict
          Keys:
            - strict : bool
        """
        return cls(strict=bool(params.get("strict", True)))

    # ---------- helpers ----------
    @staticmethod
    def _revenues(inputs: Dict) -> List[float]:
        if inputs.get("revenues") is not None:
            return [float(x) for x in as_array(inputs["revenues"], FORECAST_YEARS + 1, "revenues")]
        return project_revenue(
            float(require(inputs, "current_revenue")),
            require(inputs, "growth_rates"),
        )

    @staticmethod
    def _breakdown(cash_flows: Sequence[float], tv: float, rate: float) -> Dict[str, float]:
        pv_f = _pv_factors(rate, len(cash_flows))
        return {
            "PV_CF": float(np.sum(np.asarray(cash_flows, dtype=float) * pv_f)),
            "PV_Terminal": float(tv * pv_f[-1]),
        }

    # ---------- core ----------
    def evaluate(self, inputs: Dict) -> Dict:
        """
        Run the base and risk-adjusted DCF.

        Parameters
        ----------
        inputs : dict
            See class docstring for accepted keys.

        Returns
        -------
        dict  (see class docstring)
        """
        revenues = self._revenues(inputs)

        r = pick_first(inputs, ["base_rate", "r"])
        s = pick_first(inputs, ["survival_rate", "s"])
        n = pick_first(inputs, ["years", "years_to_established"])
        if r is None or s is None or n is None:
            raise InvalidParameterError("Require base_rate, survival_rate and years.")
        check_rate(r, "base_rate")

        cash_flows = compute_cash_flows(
            revenues,
            float(require(inputs, "gross_margin")),
            float(require(inputs, "opex_pct")),
        )
        tv = compute_terminal_value(revenues[-1], float(require(inputs, "terminal_multiple")))

        # -------- risk adjustment --------
        f = derive_failure_rate(s, n)
        try:
            r_adj: Optional[float] = adjust_discount_rate(r, f)
        except DivisionSingularityError:
            if self.strict:
                raise
            LOGGER.warning(
                f"Annual failure rate {f:.4f} makes the risk-adjusted DCF intractable; "
                "reporting base DCF only."
            )
            r_adj = None

        # -------- discounting --------
        base_dcf = present_value(cash_flows, tv, r)
        if r_adj is not None:
            adjusted_dcf = present_value(cash_flows, tv, r_adj)
            impact = discount_impact(base_dcf, adjusted_dcf)
            adj_breakdown = self._breakdown(cash_flows, tv, r_adj)
        else:
            adjusted_dcf = impact = adj_breakdown = None

        LOGGER.debug(f"DCF: base={base_dcf:,.1f} adjusted={adjusted_dcf}")

        return {
            "revenues": revenues,
            "cash_flows": cash_flows,
            "terminal_value": tv,
            "annual_failure_rate": f,
            "adjusted_discount_rate": r_adj,
            "base_dcf": base_dcf,
            "adjusted_dcf": adjusted_dcf,
            "discount_impact": impact,
            "tractable": r_adj is not None,
            "breakdown": {
                "base": self._breakdown(cash_flows, tv, r),
                "adjusted": adj_breakdown,
            },
        }
