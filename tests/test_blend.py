import pytest

from ventureval import DivergenceSignal, blend, divergence_signal


def test_blend_formulas():
    r = blend(adjusted_dcf=18000, base_dcf=70000, comparable_adjusted_value=15000)
    assert r.low == pytest.approx(min(18000, 15000 * 0.8))
    assert r.mid == pytest.approx((18000 + 15000) / 2)
    assert r.high == pytest.approx(max(70000 * 0.8, 15000 * 1.2))


def test_blend_high_from_comparables():
    r = blend(adjusted_dcf=1000, base_dcf=2000, comparable_adjusted_value=5000)
    assert r.low == 1000
    assert r.mid == 3000
    assert r.high == pytest.approx(6000)


def test_blend_is_not_an_ordered_interval():
    # tiny base DCF with a large adjusted DCF: high falls below mid
    r = blend(adjusted_dcf=10000, base_dcf=100, comparable_adjusted_value=100)
    assert r.low == pytest.approx(80)
    assert r.mid == pytest.approx(5050)
    assert r.high == pytest.approx(120)
    assert r.high < r.mid


@pytest.mark.parametrize("dcf, comp, expected", [
    (16000, 10000, DivergenceSignal.DCF_ABOVE_COMPARABLES),
    (10000, 16000, DivergenceSignal.COMPARABLES_ABOVE_DCF),
    (15000, 10000, DivergenceSignal.CONSISTENT),
    (10000, 12000, DivergenceSignal.CONSISTENT),
])
def test_divergence_signal(dcf, comp, expected):
    assert divergence_signal(dcf, comp) is expected


def test_divergence_notes():
    assert DivergenceSignal.CONSISTENT.note == ""
    assert "optimistic" in DivergenceSignal.DCF_ABOVE_COMPARABLES.note
    assert "frothy" in DivergenceSignal.COMPARABLES_ABOVE_DCF.note
