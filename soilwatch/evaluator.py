"""
Threshold evaluator

Classifies each metric of a reading independently:

    inside the ideal band            -> no alert      (Severity.IDEAL)
    inside either warning band       -> "Alerta"      (Severity.ALERT)
    anything else, on either side    -> "Crítico"     (Severity.CRITICAL)

Bands are inclusive and checked ideal first, so a value sitting on a shared
boundary (e.g. soilHumidity == 20) lands in the more ideal band.

Everything here is pure. NaN and infinities classify as critical rather
than raising; rejecting them is the job of input validation.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping

from .thresholds import MetricThreshold, ThresholdTable


class Severity(str, Enum):
    IDEAL = "Ideal"
    ALERT = "Alerta"
    CRITICAL = "Crítico"


# Levels an Alert row may carry
ALERT_LEVELS = (Severity.ALERT, Severity.CRITICAL)

MESSAGE_TEMPLATE = "{metric} fora do intervalo ideal ({value})"


@dataclass(frozen=True)
class AlertCandidate:
    """One metric outside its ideal band"""
    metric: str
    value: float
    level: Severity
    message: str


def classify(value: float, threshold: MetricThreshold) -> Severity:
    if threshold.ideal.contains(value):
        return Severity.IDEAL
    if any(band.contains(value) for band in threshold.warning):
        return Severity.ALERT
    return Severity.CRITICAL


def format_message(metric: str, value: float) -> str:
    # Whole numbers render as 10, not 10.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return MESSAGE_TEMPLATE.format(metric=metric, value=value)


def level_labels(values: Mapping[str, float], thresholds: ThresholdTable) -> Dict[str, Severity]:
    """Tier of every metric, including the ideal ones"""
    return {metric: classify(values[metric], thresholds[metric]) for metric in thresholds}


def evaluate(values: Mapping[str, float], thresholds: ThresholdTable) -> List[AlertCandidate]:
    """
    Produce alert candidates for one reading

    Args:
        values: Metric name -> value; must hold every metric in ``thresholds``
        thresholds: Table to evaluate against

    Returns:
        One candidate per metric outside its ideal band, in table order
    """
    candidates = []
    for metric, threshold in thresholds.items():
        value = values[metric]
        level = classify(value, threshold)
        if level is Severity.IDEAL:
            continue
        candidates.append(AlertCandidate(
            metric=metric,
            value=value,
            level=level,
            message=format_message(metric, value),
        ))
    return candidates
