import pytest

from ventureval import (
    Comparable,
    ComparableValuation,
    QualityDimension,
    QualityScores,
    average_multiple,
    default_comparables,
    median_multiple,
    multiples_of,
    quality_factors,
    quality_multiplier,
    total_quality_multiplier,
)


def _comps(*rows):
    return [Comparable(f"C{i}", valuation, revenue) for i, (valuation, revenue) in enumerate(rows)]


def test_default_set_multiples_and_median():
    multiples = multiples_of(_comps((50, 5), (80, 8), (120, 15)))
    assert multiples == pytest.approx([10.0, 10.0, 8.0])
    assert median_multiple(multiples, fallback=12) == 10.0
    assert average_multiple(multiples, fallback=12) == pytest.approx(28 / 3)


def test_invalid_comparables_are_excluded():
    comps = _comps((50, 5), (80, 0), (0, 8), (120, -15), (-10, -2))
    assert multiples_of(comps) == [10.0]
    assert [c.is_valid for c in comps] == [True, False, False, False, False]
    assert comps[1].multiple is None


def test_display_multiple_shown_whenever_revenue_positive():
    comps = _comps((0, 8), (-16, 8), (120, -15), (80, 0))
    assert comps[0].multiple == 0.0
    assert comps[1].multiple == pytest.approx(-2.0)
    assert comps[2].multiple is None
    assert comps[3].multiple is None
    assert multiples_of(comps) == []


def test_even_count_takes_index_n_over_two():
    assert median_multiple([8, 2, 6, 4], fallback=0) == 6
    assert median_multiple([3, 1], fallback=0) == 3


def test_empty_set_falls_back_to_terminal_multiple():
    assert median_multiple([], fallback=12.5) == 12.5
    assert average_multiple([], fallback=12.5) == 12.5


def test_quality_multiplier_endpoints():
    assert quality_multiplier(3, 0.2) == 1.0
    assert quality_multiplier(1, 0.2) == pytest.approx(0.8)
    assert quality_multiplier(5, 0.2) == pytest.approx(1.2)
    assert quality_multiplier(4, 0.1) == pytest.approx(1.05)


def test_neutral_scores_give_exactly_one():
    assert total_quality_multiplier(quality_factors(QualityScores())) == 1.0


def test_top_scores_compound():
    factors = quality_factors(QualityScores.uniform(5))
    assert factors[QualityDimension.TEAM].multiplier == pytest.approx(1.20)
    assert factors[QualityDimension.DEFENSIBILITY].multiplier == pytest.approx(1.10)
    total = total_quality_multiplier(factors)
    assert total == pytest.approx(1.20 * 1.20 * 1.15 * 1.15 * 1.10)
    assert total == pytest.approx(2.0948, abs=1e-4)


def test_weights_sum_to_080():
    assert sum(dim.weight for dim in QualityDimension) == pytest.approx(0.80)


def test_evaluate_applies_quality_to_median_value():
    scores = QualityScores(team=5, product=1)
    out = ComparableValuation().evaluate({
        "current_revenue": 1500,
        "comparables": default_comparables(),
        "terminal_multiple": 10,
        "quality": scores,
    })
    assert out["median_multiple"] == 10.0
    assert out["comparable_base_value"] == pytest.approx(15000)
    assert out["total_quality_multiplier"] == pytest.approx(1.2 * 0.8)
    assert out["comparable_adjusted_value"] == pytest.approx(15000 * 0.96)
    assert out["meta"]["source"] == "peers"


def test_evaluate_with_no_valid_comparables_uses_fallback():
    out = ComparableValuation.from_params({"fallback_multiple": 12}).evaluate({
        "current_revenue": 200,
        "comparables": _comps((10, 0)),
    })
    assert out["multiples"] == []
    assert out["median_multiple"] == 12
    assert out["average_multiple"] == 12
    assert out["comparable_base_value"] == pytest.approx(2400)
    assert out["meta"]["source"] == "terminal_multiple"
