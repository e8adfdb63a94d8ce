"""
Threshold Table

Per-metric health bands used by the evaluator. Every band is inclusive on
both ends. Each metric has one ideal band and two warning bands (one below
and one above the ideal band); anything outside all three is critical.

The table is an immutable value. The application builds it once at start-up
(either the built-in defaults or a JSON file named by THRESHOLDS_FILE) and
hands it to the evaluator explicitly.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple, Union

from .exceptions import ConfigurationError

# Metric names as they appear on the wire and in alert messages
SOIL_HUMIDITY = "soilHumidity"
TEMPERATURE = "temperature"
CONDUTIVITY = "condutivity"
PH = "ph"
NITROGEN = "nitrogen"
PHOSPHORUS = "phosphorus"
POTASSIUM = "potassium"

METRICS: Tuple[str, ...] = (
    SOIL_HUMIDITY,
    TEMPERATURE,
    CONDUTIVITY,
    PH,
    NITROGEN,
    PHOSPHORUS,
    POTASSIUM,
)


@dataclass(frozen=True)
class Band:
    """Closed interval [low, high]"""
    low: float
    high: float

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def as_list(self) -> list:
        return [self.low, self.high]


@dataclass(frozen=True)
class MetricThreshold:
    """Ideal band plus the warning bands that surround it"""
    ideal: Band
    warning: Tuple[Band, Band]


class ThresholdTable(Mapping[str, MetricThreshold]):
    """
    Read-only mapping of metric name to MetricThreshold

    Iteration order is the order metrics were supplied in, which is also the
    order the evaluator reports alert candidates.
    """

    def __init__(self, thresholds: Mapping[str, MetricThreshold]):
        missing = [metric for metric in METRICS if metric not in thresholds]
        if missing:
            raise ConfigurationError(f"Threshold table is missing metrics: {', '.join(missing)}")
        unknown = [metric for metric in thresholds if metric not in METRICS]
        if unknown:
            raise ConfigurationError(f"Threshold table has unknown metrics: {', '.join(unknown)}")
        self._thresholds = MappingProxyType(dict(thresholds))

    def __getitem__(self, metric: str) -> MetricThreshold:
        return self._thresholds[metric]

    def __iter__(self) -> Iterator[str]:
        return iter(self._thresholds)

    def __len__(self) -> int:
        return len(self._thresholds)

    def __repr__(self) -> str:
        return f"<ThresholdTable metrics={list(self._thresholds)}>"

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "ThresholdTable":
        """
        Build a table from plain data

        Expected shape per metric:
            {"ideal": [low, high], "warning": [[low, high], [low, high]]}

        Raises:
            ConfigurationError: On a malformed entry or an inverted band
        """
        thresholds: Dict[str, MetricThreshold] = {}
        for metric, entry in data.items():
            try:
                ideal = _band(entry["ideal"])
                warning_bands = entry["warning"]
                if len(warning_bands) != 2:
                    raise ValueError("expected exactly two warning bands")
                warning = (_band(warning_bands[0]), _band(warning_bands[1]))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid thresholds for '{metric}': {e}") from e
            thresholds[metric] = MetricThreshold(ideal=ideal, warning=warning)
        return cls(thresholds)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {
            metric: {
                "ideal": threshold.ideal.as_list(),
                "warning": [band.as_list() for band in threshold.warning],
            }
            for metric, threshold in self._thresholds.items()
        }


def _band(bounds: Sequence[Union[int, float]]) -> Band:
    if len(bounds) != 2:
        raise ValueError(f"band must have two bounds, got {list(bounds)}")
    low, high = float(bounds[0]), float(bounds[1])
    if low > high:
        raise ValueError(f"band low {low} is greater than high {high}")
    return Band(low, high)


DEFAULT_THRESHOLDS = ThresholdTable.from_dict({
    SOIL_HUMIDITY: {"ideal": [20, 60], "warning": [[15, 20], [60, 65]]},
    TEMPERATURE: {"ideal": [18, 30], "warning": [[15, 18], [30, 33]]},
    CONDUTIVITY: {"ideal": [0.2, 2.0], "warning": [[0.15, 0.2], [2.0, 2.5]]},
    PH: {"ideal": [6.0, 7.0], "warning": [[5.5, 6.0], [7.0, 7.5]]},
    NITROGEN: {"ideal": [20, 50], "warning": [[15, 20], [50, 60]]},
    PHOSPHORUS: {"ideal": [15, 40], "warning": [[10, 15], [40, 50]]},
    POTASSIUM: {"ideal": [100, 300], "warning": [[80, 100], [300, 350]]},
})


def load_threshold_table(path: Union[str, Path, None] = None) -> ThresholdTable:
    """
    Load the threshold table used for the lifetime of the process

    Args:
        path: JSON file in the from_dict() shape; None selects the defaults

    Raises:
        ConfigurationError: If the file cannot be read or is invalid
    """
    if path is None:
        return DEFAULT_THRESHOLDS

    try:
        data = json.loads(Path(path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot load thresholds file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Thresholds file {path} must contain a JSON object")

    return ThresholdTable.from_dict(data)
