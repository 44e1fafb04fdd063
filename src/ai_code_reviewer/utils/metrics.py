"""In-process metrics for observability.

Counters, a gauge and histograms for review activity, exportable in
Prometheus text format.
"""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from threading import Lock
from typing import Any

LabelKey = tuple[tuple[str, str], ...]


def _label_key(labels: dict[str, str] | None) -> LabelKey:
    return tuple(sorted(labels.items())) if labels else ()


class MetricType(StrEnum):
    """Types of metrics."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"


@dataclass
class MetricValue:
    """A single metric value with metadata."""

    name: str
    type: MetricType
    value: float
    labels: dict[str, str] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    help_text: str = ""


class Counter:
    """A monotonically increasing counter.

    Example:
        counter = Counter("analyses_total", "Analyses requested")
        counter.inc()
        counter.inc(labels={"outcome": "success"})
    """

    def __init__(self, name: str, help_text: str = "") -> None:
        self.name = name
        self.help_text = help_text
        self._values: dict[LabelKey, float] = defaultdict(float)
        self._lock = Lock()

    def inc(self, value: float = 1, labels: dict[str, str] | None = None) -> None:
        """Increment the counter."""
        if value < 0:
            raise ValueError("Counter can only increase")

        with self._lock:
            self._values[_label_key(labels)] += value

    def get(self, labels: dict[str, str] | None = None) -> float:
        """Get current counter value for the given labels."""
        with self._lock:
            return self._values.get(_label_key(labels), 0)

    def get_all(self) -> list[MetricValue]:
        """Get all counter values with their labels."""
        with self._lock:
            return [
                MetricValue(
                    name=self.name,
                    type=MetricType.COUNTER,
                    value=value,
                    labels=dict(label_key),
                    help_text=self.help_text,
                )
                for label_key, value in self._values.items()
            ]


class Gauge:
    """A metric that can go up or down."""

    def __init__(self, name: str, help_text: str = "") -> None:
        self.name = name
        self.help_text = help_text
        self._values: dict[LabelKey, float] = defaultdict(float)
        self._lock = Lock()

    def set(self, value: float, labels: dict[str, str] | None = None) -> None:
        """Set the gauge value."""
        with self._lock:
            self._values[_label_key(labels)] = value

    def get(self, labels: dict[str, str] | None = None) -> float:
        """Get current gauge value."""
        with self._lock:
            return self._values.get(_label_key(labels), 0)

    def get_all(self) -> list[MetricValue]:
        """Get all gauge values with their labels."""
        with self._lock:
            return [
                MetricValue(
                    name=self.name,
                    type=MetricType.GAUGE,
                    value=value,
                    labels=dict(label_key),
                    help_text=self.help_text,
                )
                for label_key, value in self._values.items()
            ]


@dataclass
class _HistogramSeries:
    """Running aggregates for one label set."""

    bucket_counts: list[int]
    count: int = 0
    total: float = 0.0
    minimum: float = float("inf")
    maximum: float = float("-inf")


class Histogram:
    """A histogram metric for tracking value distributions.

    Observations are folded into per-label aggregates as they arrive, so
    memory stays constant however many values are recorded.
    """

    # Model calls take seconds, not milliseconds
    DEFAULT_BUCKETS = (0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0, 120.0, float("inf"))

    def __init__(
        self,
        name: str,
        help_text: str = "",
        buckets: tuple[float, ...] | None = None,
    ) -> None:
        self.name = name
        self.help_text = help_text
        self._buckets = buckets or self.DEFAULT_BUCKETS
        self._series: dict[LabelKey, _HistogramSeries] = {}
        self._lock = Lock()

    def observe(self, value: float, labels: dict[str, str] | None = None) -> None:
        """Record an observation."""
        with self._lock:
            series = self._series.get(_label_key(labels))
            if series is None:
                series = _HistogramSeries(bucket_counts=[0] * len(self._buckets))
                self._series[_label_key(labels)] = series

            series.count += 1
            series.total += value
            series.minimum = min(series.minimum, value)
            series.maximum = max(series.maximum, value)
            for i, bucket in enumerate(self._buckets):
                if value <= bucket:
                    series.bucket_counts[i] += 1
                    break

    @staticmethod
    def _stats(series: list[_HistogramSeries]) -> dict[str, float]:
        count = sum(s.count for s in series)
        if not count:
            return {"count": 0, "sum": 0, "min": 0, "max": 0, "mean": 0}

        total = sum(s.total for s in series)
        return {
            "count": count,
            "sum": total,
            "min": min(s.minimum for s in series),
            "max": max(s.maximum for s in series),
            "mean": total / count,
        }

    def get_stats(self, labels: dict[str, str] | None = None) -> dict[str, float]:
        """Get count, sum, min, max and mean for the given labels."""
        with self._lock:
            series = self._series.get(_label_key(labels))
            return self._stats([series] if series else [])

    def get_total_stats(self) -> dict[str, float]:
        """Get count, sum, min, max and mean across every label set."""
        with self._lock:
            return self._stats(list(self._series.values()))

    def get_buckets(self, labels: dict[str, str] | None = None) -> dict[float, int]:
        """Get non-cumulative bucket counts."""
        with self._lock:
            series = self._series.get(_label_key(labels))
            counts = series.bucket_counts if series else [0] * len(self._buckets)
            return dict(zip(self._buckets, counts, strict=True))

    def get_all(self) -> list[tuple[dict[str, str], dict[str, float]]]:
        """Get (labels, stats) for every label set observed."""
        with self._lock:
            return [
                (dict(label_key), self._stats([series]))
                for label_key, series in self._series.items()
            ]


class MetricsRegistry:
    """Registry for all application metrics.

    Example:
        registry = MetricsRegistry.get_instance()
        registry.analyses_requested.inc()
    """

    _instance: MetricsRegistry | None = None
    _lock = Lock()

    def __init__(self) -> None:
        self.analyses_requested = Counter(
            "ai_code_reviewer_analyses_requested_total",
            "Total analyze calls accepted or rejected",
        )
        self.analyses_completed = Counter(
            "ai_code_reviewer_analyses_completed_total",
            "Total analyses reaching a terminal state, by outcome",
        )
        self.analyses_rejected_busy = Counter(
            "ai_code_reviewer_analyses_rejected_busy_total",
            "Analyze calls rejected because a request was in flight",
        )
        self.analyses_in_flight = Gauge(
            "ai_code_reviewer_analyses_in_flight",
            "Requests currently awaiting the model",
        )
        self.llm_request_duration = Histogram(
            "ai_code_reviewer_llm_request_duration_seconds",
            "Model request duration in seconds",
        )

        self._start_time = time.time()

    @classmethod
    def get_instance(cls) -> MetricsRegistry:
        """Get the singleton metrics registry instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Discard the singleton so the next access starts from zero."""
        with cls._lock:
            cls._instance = None

    def get_uptime_seconds(self) -> float:
        """Get process uptime in seconds."""
        return time.time() - self._start_time

    def get_all_metrics(self) -> dict[str, Any]:
        """Get all metrics as a dictionary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "analyses": {
                "requested": self.analyses_requested.get(),
                "rejected_busy": self.analyses_rejected_busy.get(),
                "in_flight": self.analyses_in_flight.get(),
                "completed": {
                    m.labels.get("outcome", ""): m.value
                    for m in self.analyses_completed.get_all()
                },
            },
            "llm": {
                "duration_stats": self.llm_request_duration.get_total_stats(),
                "duration_by_model": {
                    labels.get("model", ""): stats
                    for labels, stats in self.llm_request_duration.get_all()
                },
            },
        }

    def to_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        lines: list[str] = []

        for metric, kind in (
            (self.analyses_requested, MetricType.COUNTER),
            (self.analyses_completed, MetricType.COUNTER),
            (self.analyses_rejected_busy, MetricType.COUNTER),
            (self.analyses_in_flight, MetricType.GAUGE),
        ):
            if metric.help_text:
                lines.append(f"# HELP {metric.name} {metric.help_text}")
            lines.append(f"# TYPE {metric.name} {kind}")
            for value in metric.get_all():
                if value.labels:
                    label_str = ",".join(f'{k}="{v}"' for k, v in value.labels.items())
                    lines.append(f"{metric.name}{{{label_str}}} {value.value}")
                else:
                    lines.append(f"{metric.name} {value.value}")

        histogram = self.llm_request_duration
        if histogram.help_text:
            lines.append(f"# HELP {histogram.name} {histogram.help_text}")
        lines.append(f"# TYPE {histogram.name} {MetricType.HISTOGRAM}")
        for labels, stats in histogram.get_all():
            label_str = ",".join(f'{k}="{v}"' for k, v in labels.items())
            suffix = f"{{{label_str}}}" if label_str else ""
            lines.append(f"{histogram.name}_count{suffix} {stats['count']}")
            lines.append(f"{histogram.name}_sum{suffix} {stats['sum']}")

        lines.append("# HELP ai_code_reviewer_uptime_seconds Process uptime in seconds")
        lines.append("# TYPE ai_code_reviewer_uptime_seconds gauge")
        lines.append(f"ai_code_reviewer_uptime_seconds {self.get_uptime_seconds()}")

        return "\n".join(lines)


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    return MetricsRegistry.get_instance()


class Timer:
    """Context manager for timing operations.

    Example:
        with Timer(metrics.llm_request_duration, labels={"model": "claude"}):
            ...
    """

    def __init__(
        self,
        histogram: Histogram,
        labels: dict[str, str] | None = None,
    ) -> None:
        self._histogram = histogram
        self._labels = labels
        self._start: float | None = None
        self.elapsed: float = 0.0

    def __enter__(self) -> Timer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        if self._start is not None:
            self.elapsed = time.perf_counter() - self._start
            self._histogram.observe(self.elapsed, labels=self._labels)
