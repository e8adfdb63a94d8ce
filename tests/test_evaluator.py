"""
Unit tests for the threshold evaluator

Tests cover:
- Inclusive ideal boundaries for every metric
- Warning vs critical just outside each band
- NaN / infinity handling
- Alternate tables
- Property-based invariants
"""
import math

import pytest
from hypothesis import given, strategies as st

from soilwatch.evaluator import (
    AlertCandidate,
    Severity,
    classify,
    evaluate,
    format_message,
    level_labels,
)
from soilwatch.thresholds import DEFAULT_THRESHOLDS, METRICS, ThresholdTable

IDEAL = {
    "soilHumidity": 40.0,
    "temperature": 24.0,
    "condutivity": 1.0,
    "ph": 6.5,
    "nitrogen": 35.0,
    "phosphorus": 25.0,
    "potassium": 200.0,
}


def with_value(metric, value):
    values = dict(IDEAL)
    values[metric] = value
    return values


# ============================================================
# Boundaries
# ============================================================

@pytest.mark.parametrize("metric", METRICS)
def test_ideal_boundaries_produce_no_alert(metric):
    ideal = DEFAULT_THRESHOLDS[metric].ideal
    assert evaluate(with_value(metric, ideal.low), DEFAULT_THRESHOLDS) == []
    assert evaluate(with_value(metric, ideal.high), DEFAULT_THRESHOLDS) == []


@pytest.mark.parametrize("metric", METRICS)
def test_just_outside_ideal_is_alerta(metric):
    ideal = DEFAULT_THRESHOLDS[metric].ideal

    for value in (math.nextafter(ideal.low, -math.inf), math.nextafter(ideal.high, math.inf)):
        candidates = evaluate(with_value(metric, value), DEFAULT_THRESHOLDS)
        assert len(candidates) == 1
        assert candidates[0].metric == metric
        assert candidates[0].level is Severity.ALERT


@pytest.mark.parametrize("metric", METRICS)
def test_warning_boundaries_are_alerta(metric):
    low_band, high_band = DEFAULT_THRESHOLDS[metric].warning
    assert classify(low_band.low, DEFAULT_THRESHOLDS[metric]) is Severity.ALERT
    assert classify(high_band.high, DEFAULT_THRESHOLDS[metric]) is Severity.ALERT


@pytest.mark.parametrize("metric", METRICS)
def test_beyond_warning_is_critico(metric):
    low_band, high_band = DEFAULT_THRESHOLDS[metric].warning

    for value in (math.nextafter(low_band.low, -math.inf), math.nextafter(high_band.high, math.inf)):
        candidates = evaluate(with_value(metric, value), DEFAULT_THRESHOLDS)
        assert [c.level for c in candidates] == [Severity.CRITICAL]


def test_shared_boundary_prefers_ideal():
    # 20 closes the low warning band and opens the ideal band
    assert classify(20, DEFAULT_THRESHOLDS["soilHumidity"]) is Severity.IDEAL
    assert classify(7.0, DEFAULT_THRESHOLDS["ph"]) is Severity.IDEAL


# ============================================================
# Scenarios
# ============================================================

def test_dry_soil_is_single_critical_alert():
    candidates = evaluate(with_value("soilHumidity", 10), DEFAULT_THRESHOLDS)

    assert candidates == [
        AlertCandidate(
            metric="soilHumidity",
            value=10,
            level=Severity.CRITICAL,
            message="soilHumidity fora do intervalo ideal (10)",
        )
    ]


def test_cool_temperature_is_single_warning():
    candidates = evaluate(with_value("temperature", 16), DEFAULT_THRESHOLDS)

    assert len(candidates) == 1
    assert candidates[0].metric == "temperature"
    assert candidates[0].level is Severity.ALERT
    assert candidates[0].level.value == "Alerta"


def test_all_ideal_produces_nothing():
    assert evaluate(IDEAL, DEFAULT_THRESHOLDS) == []


def test_candidates_follow_table_order():
    values = dict(IDEAL, potassium=1000.0, soilHumidity=0.0, ph=5.8)
    candidates = evaluate(values, DEFAULT_THRESHOLDS)

    assert [c.metric for c in candidates] == ["soilHumidity", "ph", "potassium"]
    assert [c.level for c in candidates] == [Severity.CRITICAL, Severity.ALERT, Severity.CRITICAL]


def test_message_names_metric_and_value():
    assert format_message("ph", 8.25) == "ph fora do intervalo ideal (8.25)"


def test_message_drops_trailing_zero_for_whole_values():
    assert format_message("soilHumidity", 10.0) == "soilHumidity fora do intervalo ideal (10)"
    assert format_message("temperature", -3.0) == "temperature fora do intervalo ideal (-3)"
    assert format_message("ph", math.inf) == "ph fora do intervalo ideal (inf)"


def test_level_labels_cover_every_metric():
    labels = level_labels(dict(IDEAL, temperature=31.0, nitrogen=70.0), DEFAULT_THRESHOLDS)

    assert set(labels) == set(METRICS)
    assert labels["temperature"] is Severity.ALERT
    assert labels["nitrogen"] is Severity.CRITICAL
    assert labels["ph"] is Severity.IDEAL


# ============================================================
# Non-finite input
# ============================================================

@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_values_are_critical(value):
    candidates = evaluate(with_value("nitrogen", value), DEFAULT_THRESHOLDS)

    assert len(candidates) == 1
    assert candidates[0].level is Severity.CRITICAL


# ============================================================
# Alternate tables
# ============================================================

def test_alternate_table_changes_outcome():
    data = DEFAULT_THRESHOLDS.to_dict()
    data["temperature"] = {"ideal": [10, 20], "warning": [[5, 10], [20, 25]]}
    table = ThresholdTable.from_dict(data)

    assert evaluate(with_value("temperature", 16), table) == []
    assert [c.level for c in evaluate(with_value("temperature", 24), table)] == [Severity.ALERT]
    # Default table untouched
    assert [c.level for c in evaluate(with_value("temperature", 16), DEFAULT_THRESHOLDS)] == [Severity.ALERT]


# ============================================================
# Property Tests
# ============================================================

finite_floats = st.floats(allow_nan=False, allow_infinity=False, min_value=-1e6, max_value=1e6)


@pytest.mark.property
@given(metric=st.sampled_from(METRICS), value=finite_floats)
def test_one_metric_out_gives_at_most_one_candidate(metric, value):
    """Property: metrics are evaluated independently"""
    candidates = evaluate(with_value(metric, value), DEFAULT_THRESHOLDS)

    assert len(candidates) <= 1
    for candidate in candidates:
        assert candidate.metric == metric
        assert candidate.level is classify(value, DEFAULT_THRESHOLDS[metric])
        assert candidate.level in (Severity.ALERT, Severity.CRITICAL)


@pytest.mark.property
@given(metric=st.sampled_from(METRICS), value=finite_floats)
def test_ideal_iff_no_candidate(metric, value):
    """Property: a candidate exists exactly when the value is outside the ideal band"""
    ideal = DEFAULT_THRESHOLDS[metric].ideal
    candidates = evaluate(with_value(metric, value), DEFAULT_THRESHOLDS)

    assert (candidates == []) == (ideal.low <= value <= ideal.high)


@pytest.mark.property
@given(values=st.fixed_dictionaries({metric: finite_floats for metric in METRICS}))
def test_evaluate_is_deterministic_and_agrees_with_labels(values):
    """Property: same input, same output; candidates are the non-ideal labels"""
    first = evaluate(values, DEFAULT_THRESHOLDS)
    assert first == evaluate(values, DEFAULT_THRESHOLDS)

    labels = level_labels(values, DEFAULT_THRESHOLDS)
    assert {c.metric: c.level for c in first} == {
        metric: level for metric, level in labels.items() if level is not Severity.IDEAL
    }
