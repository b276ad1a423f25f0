from dataclasses import dataclass, field, asdict, replace as dc_replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from ...config import (
    DEFAULT_COMPARABLES,
    FORECAST_YEARS,
    MAX_SCORE,
    MIN_SCORE,
    NEUTRAL_SCORE,
    QUALITY_WEIGHTS,
)
from ...exceptions import InvalidHorizonError, InvalidParameterError


class QualityDimension(Enum):
    """Qualitative scoring dimensions and their fixed weights."""
    TEAM = "team"
    PRODUCT = "product"
    MARKET = "market"
    TRACTION = "traction"
    DEFENSIBILITY = "defensibility"

    @property
    def weight(self) -> float:
        return QUALITY_WEIGHTS[self.value]


@dataclass(frozen=True)
class QualityScores:
    """
    One 1..5 score per quality dimension. 3 is neutral.
    """
    team: int = NEUTRAL_SCORE
    product: int = NEUTRAL_SCORE
    market: int = NEUTRAL_SCORE
    traction: int = NEUTRAL_SCORE
    defensibility: int = NEUTRAL_SCORE

    def __post_init__(self):
        for dim in QualityDimension:
            score = getattr(self, dim.value)
            if isinstance(score, bool) or int(score) != score or not (MIN_SCORE <= score <= MAX_SCORE):
                raise InvalidParameterError(
                    f"Quality score '{dim.value}' must be an integer in "
                    f"[{MIN_SCORE},{MAX_SCORE}] (got {score!r})."
                )

    def score(self, dimension: QualityDimension) -> int:
        return int(getattr(self, dimension.value))

    def items(self) -> List[Tuple[QualityDimension, int]]:
        return [(dim, self.score(dim)) for dim in QualityDimension]

    @classmethod
    def uniform(cls, score: int) -> "QualityScores":
        return cls(**{dim.value: score for dim in QualityDimension})


@dataclass(frozen=True)
class StagePreset:
    """Default risk/revenue parameters for a named funding stage."""
    key: str
    name: str
    survival_rate: float          # fraction, 0..1
    years_to_established: int
    base_discount_rate: float     # fraction, 0..1
    typical_revenue: float        # £k
    typical_multiple: float
    description: str = ""


@dataclass(frozen=True)
class ValuationParameters:
    """
    Immutable input snapshot for one valuation.

    Percent-denominated fields hold percent numbers (70 means 70%), the way a
    host form collects them. Range limits such as margin <= 100 are the host's
    responsibility; only structural invariants are checked here.

    Defaults reproduce a Series A company with 1.5m revenue.
    """
    current_revenue: float = 1500.0
    growth_rates: Tuple[float, ...] = (100.0, 80.0, 60.0, 40.0, 30.0)
    gross_margin: float = 70.0
    opex_pct_of_revenue: float = 90.0
    terminal_multiple: float = 10.0
    base_discount_rate: float = 15.0
    survival_rate: float = 35.0
    years_to_established: int = 4
    quality: QualityScores = field(default_factory=QualityScores)

    def __post_init__(self):
        rates = tuple(float(g) for g in self.growth_rates)
        if len(rates) != FORECAST_YEARS:
            raise InvalidParameterError(
                f"Expected {FORECAST_YEARS} annual growth rates, got {len(rates)}."
            )
        # frozen: bypass __setattr__ to normalise the tuple
        object.__setattr__(self, "growth_rates", rates)
        if self.years_to_established <= 0:
            raise InvalidHorizonError(self.years_to_established)
        if self.terminal_multiple <= 0:
            raise InvalidParameterError(
                f"terminal_multiple must be > 0 (got {self.terminal_multiple})."
            )

    def replace(self, **changes) -> "ValuationParameters":
        """Return a new snapshot with the given fields overwritten."""
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["growth_rates"] = list(self.growth_rates)
        return out


@dataclass(frozen=True)
class Comparable:
    """
    A comparable-company transaction. ``name`` and ``stage`` are labels only.

    A row with non-positive revenue or valuation is kept for display but
    excluded from the multiple statistics. Its display ``multiple`` is still
    shown whenever revenue is positive (a zero valuation reads 0.0x).
    """
    name: str
    valuation: float
    revenue: float
    stage: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.revenue > 0 and self.valuation > 0

    @property
    def multiple(self) -> Optional[float]:
        if self.revenue <= 0:
            return None
        return self.valuation / self.revenue


def default_comparables() -> List[Comparable]:
    return [Comparable(**row) for row in DEFAULT_COMPARABLES]


def comparables_from_frame(df: pd.DataFrame) -> List[Comparable]:
    """
    Build comparables from a DataFrame.

    Parameters
    ----------
    df : DataFrame
        Columns 'valuation' and 'revenue' are required; 'name' and 'stage'
        are optional labels. Missing numbers are read as 0 (invalid row).

    Returns
    -------
    list of Comparable, in row order
    """
    missing = [c for c in ("valuation", "revenue") if c not in df.columns]
    if missing:
        raise InvalidParameterError(f"Missing required comparable columns: {missing}")

    values = df[["valuation", "revenue"]].apply(pd.to_numeric, errors="coerce").fillna(0.0)
    names = df["name"] if "name" in df.columns else pd.Series(
        [f"Comparable {i + 1}" for i in range(len(df))], index=df.index
    )
    stages = df["stage"] if "stage" in df.columns else pd.Series([None] * len(df), index=df.index, dtype=object)

    out = []
    for idx in df.index:
        stage = stages.loc[idx]
        out.append(Comparable(
            name=str(names.loc[idx]),
            valuation=float(values.at[idx, "valuation"]),
            revenue=float(values.at[idx, "revenue"]),
            stage=None if pd.isna(stage) else str(stage),
        ))
    return out


@dataclass(frozen=True)
class QualityFactor:
    dimension: QualityDimension
    score: int
    weight: float
    multiplier: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "weight": self.weight,
            "multiplier": self.multiplier,
        }


@dataclass(frozen=True)
class ValuationRange:
    """Heuristic low/mid/high envelope. Ordering is not guaranteed."""
    low: float
    mid: float
    high: float

    def to_dict(self) -> Dict[str, float]:
        return {"low": self.low, "mid": self.mid, "high": self.high}


class DivergenceSignal(Enum):
    """How far the two valuation methods disagree."""
    CONSISTENT = "consistent"
    DCF_ABOVE_COMPARABLES = "dcf_above_comparables"
    COMPARABLES_ABOVE_DCF = "comparables_above_dcf"

    @property
    def note(self) -> str:
        return _DIVERGENCE_NOTES[self]


_DIVERGENCE_NOTES = {
    DivergenceSignal.CONSISTENT: "",
    DivergenceSignal.DCF_ABOVE_COMPARABLES:
        "DCF significantly exceeds comparables; projections may be optimistic.",
    DivergenceSignal.COMPARABLES_ABOVE_DCF:
        "Comparables exceed DCF; either the market is frothy or projections are conservative.",
}


@dataclass(frozen=True)
class ValuationResult:
    """
    Full output of one engine evaluation.

    When ``tractable`` is False the risk adjustment hit its singularity
    (failure rate of 1): the risk-adjusted fields, the range and the
    divergence signal are None while the base DCF and comparable valuation
    are still reported.
    """
    revenues: Tuple[float, ...]
    cash_flows: Tuple[float, ...]
    terminal_value: float
    annual_failure_rate: float
    adjusted_discount_rate: Optional[float]
    base_discount_rate: float
    base_dcf: float
    adjusted_dcf: Optional[float]
    discount_impact: Optional[float]
    multiples: Tuple[float, ...]
    median_multiple: float
    average_multiple: float
    quality_factors: Mapping[QualityDimension, QualityFactor]
    total_quality_multiplier: float
    comparable_base_value: float
    comparable_adjusted_value: float
    valuation_range: Optional[ValuationRange]
    divergence: Optional[DivergenceSignal] = None
    tractable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python representation (lists, floats, str keys) for export."""
        return {
            "revenues": list(self.revenues),
            "cash_flows": list(self.cash_flows),
            "terminal_value": self.terminal_value,
            "annual_failure_rate": self.annual_failure_rate,
            "adjusted_discount_rate": self.adjusted_discount_rate,
            "base_discount_rate": self.base_discount_rate,
            "base_dcf": self.base_dcf,
            "adjusted_dcf": self.adjusted_dcf,
            "discount_impact": self.discount_impact,
            "multiples": list(self.multiples),
            "median_multiple": self.median_multiple,
            "average_multiple": self.average_multiple,
            "quality_factors": {dim.value: f.to_dict() for dim, f in self.quality_factors.items()},
            "total_quality_multiplier": self.total_quality_multiplier,
            "comparable_base_value": self.comparable_base_value,
            "comparable_adjusted_value": self.comparable_adjusted_value,
            "valuation_range": self.valuation_range.to_dict() if self.valuation_range else None,
            "divergence": self.divergence.value if self.divergence else None,
            "tractable": self.tractable,
        }

    def projection_frame(self) -> pd.DataFrame:
        """
        Year-by-year projection table.

        Returns
        -------
        DataFrame indexed by year 0..5 with columns
          ['revenue', 'cash_flow', 'df_base', 'pv_base', 'df_adjusted', 'pv_adjusted'].
        Year 0 carries no cash flow; the terminal value is not included.
        """
        years = np.arange(len(self.revenues))
        cash_flow = np.concatenate([[np.nan], np.asarray(self.cash_flows, dtype=float)])
        df_base = (1.0 + self.base_discount_rate) ** (-years.astype(float))
        out = pd.DataFrame(
            {
                "revenue": np.asarray(self.revenues, dtype=float),
                "cash_flow": cash_flow,
                "df_base": df_base,
                "pv_base": cash_flow * df_base,
            },
            index=pd.Index(years, name="year"),
        )
        if self.adjusted_discount_rate is not None:
            df_adj = (1.0 + self.adjusted_discount_rate) ** (-years.astype(float))
            out["df_adjusted"] = df_adj
            out["pv_adjusted"] = cash_flow * df_adj
        else:
            out["df_adjusted"] = np.nan
            out["pv_adjusted"] = np.nan
        return out
