"""
Run instrumentation: metric sinks that receive (name, value) pairs at the end of a search.

A successful search reports, in this order:
    searchTime, maxOpenSetSize, predecessorMapSize, pathDistance
A search that finds no path reports searchTime only. All values are strings;
times are milliseconds and distances are formatted with two decimals.
"""

import logging
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

SEARCH_TIME = "searchTime"
MAX_OPEN_SET_SIZE = "maxOpenSetSize"
PREDECESSOR_MAP_SIZE = "predecessorMapSize"
PATH_DISTANCE = "pathDistance"

METRIC_NAMES = (SEARCH_TIME, MAX_OPEN_SET_SIZE, PREDECESSOR_MAP_SIZE, PATH_DISTANCE)


@runtime_checkable
class MetricsSink(Protocol):
    def __call__(self, name: str, value: str) -> None: ...


class NullMetricsSink:
    """Discards every metric"""

    def __call__(self, name: str, value: str) -> None:
        pass


class MetricsRecorder:
    """Keeps the most recent value of each metric, plus the order they arrived in"""

    def __init__(self):
        self.metrics: Dict[str, str] = {}
        self.calls = []

    def __call__(self, name: str, value: str) -> None:
        self.metrics[name] = value
        self.calls.append((name, value))

    def __getitem__(self, name: str) -> str:
        return self.metrics[name]

    def __contains__(self, name: str) -> bool:
        return name in self.metrics

    def clear(self):
        self.metrics.clear()
        self.calls.clear()


class LoggingMetricsSink:
    """Writes each metric to a logger"""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def __call__(self, name: str, value: str) -> None:
        self.log.log(self.level, f"{name}: {value}")


class CompositeMetricsSink:
    """Fans each metric out to several sinks"""

    def __init__(self, sinks: Iterable[MetricsSink]):
        self.sinks = list(sinks)

    def __call__(self, name: str, value: str) -> None:
        for sink in self.sinks:
            sink(name, value)


def format_milliseconds(seconds: float) -> str:
    return f"{seconds * 1000:.2f}"


def format_distance(distance: float) -> str:
    return f"{distance:.2f}"


def report_success(sink: MetricsSink, elapsed: float, max_open_set_size: int,
                   predecessor_map_size: int, path_distance: float) -> Dict[str, str]:
    """Emit the full success sequence and return it as a dict"""
    metrics = {
        SEARCH_TIME: format_milliseconds(elapsed),
        MAX_OPEN_SET_SIZE: str(max_open_set_size),
        PREDECESSOR_MAP_SIZE: str(predecessor_map_size),
        PATH_DISTANCE: format_distance(path_distance),
    }
    for name, value in metrics.items():
        sink(name, value)
    return metrics


def report_failure(sink: MetricsSink, elapsed: float) -> Dict[str, str]:
    metrics = {SEARCH_TIME: format_milliseconds(elapsed)}
    sink(SEARCH_TIME, metrics[SEARCH_TIME])
    return metrics
