from types import MappingProxyType
from typing import List

from ...config import LOGGER
from ...exceptions import UnknownStageError
from .schemas import StagePreset, ValuationParameters

_PRESETS = (
    StagePreset(
        key="pre_seed", name="Pre-Seed",
        survival_rate=0.10, years_to_established=6, base_discount_rate=0.20,
        typical_revenue=0.0, typical_multiple=20.0,
        description="Idea stage. High uncertainty, minimal traction. 10% survive to established.",
    ),
    StagePreset(
        key="seed", name="Seed",
        survival_rate=0.20, years_to_established=5, base_discount_rate=0.18,
        typical_revenue=200.0, typical_multiple=15.0,
        description="Early product, initial customers. 20% survival rate over 5 years.",
    ),
    StagePreset(
        key="series_a", name="Series A",
        survival_rate=0.35, years_to_established=4, base_discount_rate=0.15,
        typical_revenue=1500.0, typical_multiple=12.0,
        description="Product-market fit emerging. 35% reach established stage.",
    ),
    StagePreset(
        key="series_b", name="Series B",
        survival_rate=0.50, years_to_established=3, base_discount_rate=0.12,
        typical_revenue=8000.0, typical_multiple=10.0,
        description="Scaling operations. 50% survival, more predictable trajectory.",
    ),
    StagePreset(
        key="growth", name="Growth",
        survival_rate=0.70, years_to_established=2, base_discount_rate=0.10,
        typical_revenue=30000.0, typical_multiple=8.0,
        description="Proven model, scaling aggressively. 70% reach exit/establishment.",
    ),
)

STAGE_PRESETS = MappingProxyType({p.key: p for p in _PRESETS})

# camelCase keys used by front-end hosts
_ALIASES = MappingProxyType({
    "preSeed": "pre_seed",
    "seriesA": "series_a",
    "seriesB": "series_b",
})

def available_stages() -> List[str]:
    return list(STAGE_PRESETS)

def preset_for(stage_key: str) -> StagePreset:
    try:
        return STAGE_PRESETS[_ALIASES.get(stage_key, stage_key)]
    except (KeyError, TypeError):
        raise UnknownStageError(stage_key, STAGE_PRESETS) from None

def apply_preset(stage_key: str, parameters: ValuationParameters) -> ValuationParameters:
    """
    New parameter snapshot seeded from a stage preset.

    Revenue, survival rate, horizon, base discount rate and terminal multiple
    are overwritten (fractions become percent); growth, margin, opex and
    quality scores are kept. ``parameters`` itself is not modified.
    """
    preset = preset_for(stage_key)
    LOGGER.debug(f"Applying stage preset '{preset.key}' ({preset.name}).")
    return parameters.replace(
        current_revenue=preset.typical_revenue,
        survival_rate=preset.survival_rate * 100.0,
        years_to_established=preset.years_to_established,
        base_discount_rate=preset.base_discount_rate * 100.0,
        terminal_multiple=preset.typical_multiple,
    )
