from .base import BaseValuation
from .blend import blend, divergence_signal
from .cash_flow import (
    RiskAdjustedDCFValuation,
    compute_cash_flows,
    compute_terminal_value,
    discount_impact,
    present_value,
)
from .multiple import (
    ComparableValuation,
    average_multiple,
    median_multiple,
    multiples_of,
    quality_factors,
    quality_multiplier,
    total_quality_multiplier,
)
from .presets import STAGE_PRESETS, apply_preset, available_stages, preset_for
from .projection import project_revenue
from .risk import adjust_discount_rate, derive_failure_rate, survival_curve
from .schemas import (
    Comparable,
    DivergenceSignal,
    QualityDimension,
    QualityFactor,
    QualityScores,
    StagePreset,
    ValuationParameters,
    ValuationRange,
    ValuationResult,
    comparables_from_frame,
    default_comparables,
)

__all__ = [
    "BaseValuation",
    "RiskAdjustedDCFValuation",
    "ComparableValuation",
    "blend",
    "divergence_signal",
    "compute_cash_flows",
    "compute_terminal_value",
    "discount_impact",
    "present_value",
    "average_multiple",
    "median_multiple",
    "multiples_of",
    "quality_factors",
    "quality_multiplier",
    "total_quality_multiplier",
    "STAGE_PRESETS",
    "apply_preset",
    "available_stages",
    "preset_for",
    "project_revenue",
    "adjust_discount_rate",
    "derive_failure_rate",
    "survival_curve",
    "Comparable",
    "DivergenceSignal",
    "QualityDimension",
    "QualityFactor",
    "QualityScores",
    "StagePreset",
    "ValuationParameters",
    "ValuationRange",
    "ValuationResult",
    "comparables_from_frame",
    "default_comparables",
]
