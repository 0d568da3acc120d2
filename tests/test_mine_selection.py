import pytest

from rockfall.risk_scoring import Reading, SelectionScorer, assess_mine_selection


def reading(slope, vibration=5.0, rainfall=10.0, temperature=25.0):
    return Reading(slope=slope, vibration=vibration, rainfall=rainfall, temperature=temperature)


def test_probability_is_uncapped_sum():
    result = assess_mine_selection(reading(40, vibration=5, rainfall=10), "Active")
    # 40*2 + 10*1.5 + 5*3
    assert result.probability == 110
    assert result.factors.to_dict() == {
        "slopeInstability": 80,
        "vibrationPatterns": 40,
        "weatherConditions": 30,
    }


@pytest.mark.parametrize("slope,level", [
    (35.5, "High"),
    (35, "Medium"),
    (25.1, "Medium"),
    (25, "Low"),
    (5, "Low"),
])
def test_level_follows_slope(slope, level):
    assert assess_mine_selection(reading(slope), "Active").level == level


def test_sites_under_construction_are_medium():
    assert assess_mine_selection(reading(48), "Under Construction").level == "Medium"
    assert assess_mine_selection(reading(6), "Under Construction").level == "Medium"


def test_default_formula_is_weighted():
    scorer = SelectionScorer()
    assert scorer.formula == "weighted"
    result = scorer.assess(reading(40, vibration=60, rainfall=15, temperature=30), "Under Construction")
    assert result.probability == 55
    assert result.level == "Medium"


def test_legacy_formula_can_be_selected():
    scorer = SelectionScorer("LEGACY")
    assert scorer.assess(reading(40), "Active").level == "High"


def test_unknown_formula_is_rejected():
    with pytest.raises(ValueError):
        SelectionScorer("neural")
