import math

import pandas as pd
import pytest

from rockfall import InvalidInputError, Reading, RiskScorer, assess_risk
from rockfall.risk_scoring import classify_probability, summarize_assessments
from rockfall.risk_scoring.risk_scorer import round_half_up


def test_calm_reading_is_safe():
    result = assess_risk({"slope": 0, "vibration": 0, "rainfall": 0, "temperature": 25})
    assert result.probability == 0
    assert result.level == "Safe"
    assert result.factors.to_dict() == {
        "slopeInstability": 0,
        "vibrationPatterns": 0,
        "weatherConditions": 0,
    }


def test_extreme_reading_saturates_every_factor():
    result = assess_risk(Reading(slope=90, vibration=200, rainfall=100, temperature=25))
    assert result.factors.slope_instability == 100
    assert result.factors.vibration_patterns == 100
    assert result.factors.weather_conditions == 100
    assert result.probability == 100
    assert result.level == "High"


def test_reference_scenario():
    result = assess_risk({"slope": 40, "vibration": 60, "rainfall": 15, "temperature": 30})
    assert result.factors.slope_instability == 67
    assert result.factors.vibration_patterns == 60
    assert result.factors.weather_conditions == 33
    assert result.probability == 55
    assert result.level == "Medium"


def test_to_dict_uses_wire_names():
    result = assess_risk({"slope": 40, "vibration": 60, "rainfall": 15, "temperature": 30})
    assert result.to_dict() == {
        "probability": 55,
        "level": "Medium",
        "factors": {"slopeInstability": 67, "vibrationPatterns": 60, "weatherConditions": 33},
    }


def test_cold_weather_counts_towards_weather_factor():
    # |5 - 25| = 20 -> 20 / 60 * 100
    result = assess_risk({"slope": 0, "vibration": 0, "rainfall": 0, "temperature": 5})
    assert result.factors.weather_conditions == 33


@pytest.mark.parametrize("probability,level", [
    (100, "High"),
    (75, "High"),
    (74, "Medium"),
    (50, "Medium"),
    (49, "Low"),
    (25, "Low"),
    (24, "Safe"),
    (0, "Safe"),
])
def test_band_boundaries(probability, level):
    assert classify_probability(probability) == level


def test_probability_never_decreases_with_slope():
    previous = -1
    for tenth in range(0, 901, 5):
        slope = tenth / 10
        probability = assess_risk({"slope": slope, "vibration": 35, "rainfall": 12, "temperature": 31}).probability
        assert probability >= previous
        previous = probability


@pytest.mark.parametrize("slope", [0, 7.5, 30, 44.9, 59.99, 60, 75, 90])
def test_slope_factor_ignores_other_inputs(slope):
    expected = round_half_up(min(max(slope / 60 * 100, 0), 100))
    for other in ({"vibration": 0, "rainfall": 0, "temperature": 25},
                  {"vibration": 500, "rainfall": 80, "temperature": -10}):
        result = assess_risk({"slope": slope, **other})
        assert result.factors.slope_instability == expected


def test_round_half_up():
    assert round_half_up(54.5) == 55
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(54.49) == 54


@pytest.mark.parametrize("field,value", [
    ("slope", -1),
    ("slope", 90.5),
    ("vibration", -0.1),
    ("rainfall", -5),
    ("temperature", "warm"),
    ("slope", None),
    ("vibration", True),
    ("rainfall", math.nan),
    ("temperature", math.inf),
])
def test_invalid_readings_are_rejected(field, value):
    data = {"slope": 10, "vibration": 10, "rainfall": 10, "temperature": 20}
    data[field] = value
    with pytest.raises(InvalidInputError) as excinfo:
        assess_risk(data)
    assert excinfo.value.field == field


def test_missing_field_is_rejected():
    with pytest.raises(InvalidInputError, match="rainfall"):
        assess_risk({"slope": 10, "vibration": 10, "temperature": 20})


def test_non_mapping_is_rejected():
    with pytest.raises(InvalidInputError):
        assess_risk([10, 10, 10, 20])


def test_negative_temperature_is_allowed():
    result = assess_risk({"slope": 10, "vibration": 10, "rainfall": 0, "temperature": -20})
    assert result.factors.weather_conditions == 75


def test_invalid_input_error_is_a_value_error():
    with pytest.raises(ValueError):
        Reading(slope=-3, vibration=0, rainfall=0, temperature=25)


def test_custom_weights_are_normalized():
    scorer = RiskScorer({"slope": 2, "vibration": 1, "weather": 1})
    assert scorer.weights == pytest.approx({"slope": 0.5, "vibration": 0.25, "weather": 0.25})

    # slope only: 50% of weight on a factor of 100
    result = scorer.assess({"slope": 60, "vibration": 0, "rainfall": 0, "temperature": 25})
    assert result.probability == 50
    assert result.level == "Medium"


def test_default_weights_are_kept():
    assert RiskScorer().weights == RiskScorer.DEFAULT_WEIGHTS


def test_unknown_weight_is_rejected():
    with pytest.raises(ValueError):
        RiskScorer({"slope": 0.5, "dust": 0.5})


def test_zero_weights_are_rejected():
    with pytest.raises(ValueError):
        RiskScorer({"slope": 0, "vibration": 0, "weather": 0})


def test_assess_frame_matches_row_by_row():
    readings = pd.DataFrame({
        "slope": [0, 40, 90, 22.5, 59.7, 33],
        "vibration": [0, 60, 200, 7.3, 99.6, 41],
        "rainfall": [0, 15, 100, 18.2, 0.4, 12],
        "temperature": [25, 30, 25, 33.1, -4, 21],
    })

    scored = RiskScorer().assess_frame(readings)

    for row in scored.itertuples():
        expected = assess_risk({
            "slope": row.slope,
            "vibration": row.vibration,
            "rainfall": row.rainfall,
            "temperature": row.temperature,
        })
        assert row.probability == expected.probability
        assert row.level == expected.level
        assert row.slope_instability == expected.factors.slope_instability
        assert row.vibration_patterns == expected.factors.vibration_patterns
        assert row.weather_conditions == expected.factors.weather_conditions


def test_assess_frame_does_not_modify_input():
    readings = pd.DataFrame({"slope": [10], "vibration": [10], "rainfall": [10], "temperature": [20]})
    RiskScorer().assess_frame(readings)
    assert list(readings.columns) == ["slope", "vibration", "rainfall", "temperature"]


def test_assess_frame_empty():
    readings = pd.DataFrame(columns=["slope", "vibration", "rainfall", "temperature"])
    scored = RiskScorer().assess_frame(readings)
    assert scored.empty
    assert "probability" in scored.columns
    assert "level" in scored.columns


def test_assess_frame_rejects_missing_column():
    with pytest.raises(InvalidInputError, match="temperature"):
        RiskScorer().assess_frame(pd.DataFrame({"slope": [1], "vibration": [1], "rainfall": [1]}))


def test_assess_frame_rejects_negative_values():
    readings = pd.DataFrame({"slope": [10, 12], "vibration": [5, -1], "rainfall": [0, 0], "temperature": [20, 20]})
    with pytest.raises(InvalidInputError, match="vibration"):
        RiskScorer().assess_frame(readings)


def test_summarize_assessments():
    readings = [
        {"slope": 0, "vibration": 0, "rainfall": 0, "temperature": 25},
        {"slope": 40, "vibration": 60, "rainfall": 15, "temperature": 30},
        {"slope": 90, "vibration": 200, "rainfall": 100, "temperature": 25},
    ]
    summary = summarize_assessments([assess_risk(r) for r in readings], top=2)

    assert summary["count"] == 3
    assert summary["average_probability"] == round((0 + 55 + 100) / 3, 1)
    assert summary["risk_distribution"] == {"High": 1, "Medium": 1, "Low": 0, "Safe": 1}
    assert summary["highest_risk"] == [2, 1]


def test_summarize_no_assessments():
    summary = summarize_assessments([])
    assert summary["count"] == 0
    assert summary["average_probability"] == 0.0
    assert summary["highest_risk"] == []
