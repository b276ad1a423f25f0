import json

import pandas as pd
import pytest

from ventureval import (
    Comparable,
    DivergenceSignal,
    InvalidParameterError,
    QualityDimension,
    QualityScores,
    ValuationParameters,
    apply_preset,
    evaluate,
    present_value,
)


def test_series_a_scenario():
    result = evaluate(ValuationParameters())

    assert result.tractable
    assert result.revenues == pytest.approx((1500, 3000, 5400, 8640, 12096, 15724.8))
    assert len(result.cash_flows) == 5
    assert result.terminal_value == pytest.approx(157248)
    assert result.annual_failure_rate == pytest.approx(1 - 0.35 ** 0.25)
    assert result.adjusted_discount_rate == pytest.approx(0.4951, abs=1e-3)
    assert result.base_dcf == pytest.approx(72758.7, rel=1e-3)
    assert result.adjusted_dcf == pytest.approx(
        present_value(result.cash_flows, result.terminal_value, result.adjusted_discount_rate)
    )

    assert result.multiples == pytest.approx((10.0, 10.0, 8.0))
    assert result.median_multiple == 10.0
    assert result.total_quality_multiplier == 1.0
    assert result.comparable_base_value == pytest.approx(15000)
    assert result.comparable_adjusted_value == pytest.approx(15000)

    r = result.valuation_range
    assert r.low == pytest.approx(min(result.adjusted_dcf, 15000 * 0.8))
    assert r.mid == pytest.approx((result.adjusted_dcf + 15000) / 2)
    assert r.high == pytest.approx(max(result.base_dcf * 0.8, 15000 * 1.2))
    assert result.divergence is DivergenceSignal.CONSISTENT


def test_identical_inputs_give_identical_results():
    params = ValuationParameters(quality=QualityScores(team=4, market=2))
    assert evaluate(params).to_dict() == evaluate(params).to_dict()


def test_empty_comparables_fall_back_to_terminal_multiple():
    result = evaluate(ValuationParameters(terminal_multiple=7.5), comparables=[])
    assert result.multiples == ()
    assert result.median_multiple == 7.5
    assert result.average_multiple == 7.5
    assert result.comparable_base_value == pytest.approx(1500 * 7.5)


def test_only_invalid_comparables_fall_back():
    comps = [Comparable("Dead", 0, 5), Comparable("Pre-revenue", 40, 0)]
    result = evaluate(ValuationParameters(), comparables=comps)
    assert result.median_multiple == 10.0


def test_zero_survival_is_intractable_not_an_error():
    result = evaluate(ValuationParameters(survival_rate=0))
    assert not result.tractable
    assert result.annual_failure_rate == 1.0
    assert result.adjusted_discount_rate is None
    assert result.adjusted_dcf is None
    assert result.discount_impact is None
    assert result.valuation_range is None
    assert result.divergence is None
    assert result.base_dcf == pytest.approx(72758.7, rel=1e-3)
    assert result.to_dict()["valuation_range"] is None


def test_certain_survival_has_no_discount_impact():
    result = evaluate(ValuationParameters(survival_rate=100))
    assert result.annual_failure_rate == 0.0
    assert result.adjusted_dcf == pytest.approx(result.base_dcf)
    assert result.discount_impact == pytest.approx(0.0)


def test_survival_above_hundred_percent_rejected():
    with pytest.raises(InvalidParameterError):
        evaluate(ValuationParameters(survival_rate=120))


def test_negative_base_dcf_has_zero_impact():
    params = ValuationParameters(opex_pct_of_revenue=400, terminal_multiple=0.1)
    result = evaluate(params)
    assert result.base_dcf < 0
    assert result.discount_impact == 0.0


def test_quality_factors_reported_per_dimension():
    result = evaluate(ValuationParameters(quality=QualityScores.uniform(1)))
    team = result.quality_factors[QualityDimension.TEAM]
    assert team.score == 1
    assert team.weight == 0.20
    assert team.multiplier == pytest.approx(0.80)
    assert result.total_quality_multiplier == pytest.approx(0.8 * 0.8 * 0.85 * 0.85 * 0.9)


def test_preset_then_evaluate():
    params = apply_preset("seed", ValuationParameters())
    result = evaluate(params)
    assert result.revenues[0] == 200
    assert result.annual_failure_rate == pytest.approx(1 - 0.2 ** (1 / 5))
    assert result.comparable_base_value == pytest.approx(200 * 10.0)


def test_to_dict_is_json_serialisable():
    payload = evaluate(ValuationParameters()).to_dict()
    decoded = json.loads(json.dumps(payload))
    assert decoded["quality_factors"]["team"]["multiplier"] == 1.0
    assert decoded["divergence"] == "consistent"
    assert len(decoded["revenues"]) == 6


def test_projection_frame():
    result = evaluate(ValuationParameters())
    frame = result.projection_frame()
    assert list(frame.index) == [0, 1, 2, 3, 4, 5]
    assert frame.index.name == "year"
    assert pd.isna(frame.loc[0, "cash_flow"])
    assert frame.loc[1, "cash_flow"] == pytest.approx(-600)
    assert frame.loc[5, "df_base"] == pytest.approx(1.15 ** -5)
    pv_cf = frame["pv_adjusted"].sum()
    pv_tv = result.terminal_value * frame.loc[5, "df_adjusted"]
    assert pv_cf + pv_tv == pytest.approx(result.adjusted_dcf)
