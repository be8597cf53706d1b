"""
Metrics Collection Module for SchemaForge
Provides metrics collection, aggregation, and export capabilities
"""
from __future__ import annotations

import json
import statistics
import threading
from collections import defaultdict
from typing import Any, Dict, List, Optional


class Histogram:
    """Histogram for tracking value distributions"""

    DEFAULT_BUCKETS = [0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 30.0]

    def __init__(self, name: str, buckets: Optional[List[float]] = None, labels: Optional[Dict[str, str]] = None):
        self.name = name
        self.labels = labels or {}
        self.buckets = sorted(buckets or self.DEFAULT_BUCKETS)
        self._counts = {b: 0 for b in self.buckets}
        self._counts[float('inf')] = 0
        self._sum = 0.0
        self._count = 0
        self._lock = threading.Lock()

    def observe(self, value: float) -> None:
        """Record an observation"""
        with self._lock:
            self._sum += value
            self._count += 1
            for bucket in self.buckets:
                if value <= bucket:
                    self._counts[bucket] += 1
            self._counts[float('inf')] += 1

    def get_percentile(self, percentile: float) -> float:
        """Get approximate percentile value"""
        if self._count == 0:
            return 0.0

        target_count = percentile * self._count
        for bucket in self.buckets:
            if self._counts[bucket] >= target_count:
                return bucket
        return self.buckets[-1] if self.buckets else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": "histogram",
            "labels": self.labels,
            "buckets": {str(k): v for k, v in self._counts.items()},
            "sum": self._sum,
            "count": self._count,
            "p50": self.get_percentile(0.5),
            "p99": self.get_percentile(0.99),
        }


class MetricsCollector:
    """Thread-safe metrics collector"""

    _instance: Optional["MetricsCollector"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "MetricsCollector":
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._counters: Dict[str, float] = defaultdict(float)
        self._histograms: Dict[str, Histogram] = {}
        self._timers: Dict[str, List[float]] = defaultdict(list)
        self._data_lock = threading.Lock()
        self._enabled = True
        self._initialized = True

    def enable(self) -> None:
        """Enable metrics collection"""
        self._enabled = True

    def disable(self) -> None:
        """Disable metrics collection"""
        self._enabled = False

    def counter(self, name: str, value: float = 1.0, labels: Optional[Dict[str, str]] = None) -> None:
        """Increment a counter"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            self._counters[key] += value

    def histogram(self, name: str, value: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Record a histogram observation"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            if key not in self._histograms:
                self._histograms[key] = Histogram(name, labels=labels)
            self._histograms[key].observe(value)

    def timer(self, name: str, duration: float, labels: Optional[Dict[str, str]] = None) -> None:
        """Record a timer value"""
        if not self._enabled:
            return

        key = self._make_key(name, labels)
        with self._data_lock:
            self._timers[key].append(duration)

        self.histogram(f"{name}_histogram", duration, labels)

    def _make_key(self, name: str, labels: Optional[Dict[str, str]] = None) -> str:
        """Create a unique key for metric with labels"""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_metrics(self) -> Dict[str, Any]:
        """Get all collected metrics"""
        with self._data_lock:
            metrics = {
                "counters": dict(self._counters),
                "histograms": {k: v.to_dict() for k, v in self._histograms.items()},
                "timers": {},
            }

            for key, values in self._timers.items():
                if values:
                    metrics["timers"][key] = {
                        "count": len(values),
                        "sum": sum(values),
                        "min": min(values),
                        "max": max(values),
                        "mean": statistics.mean(values),
                        "median": statistics.median(values),
                    }

            return metrics

    def reset(self) -> None:
        """Reset all metrics"""
        with self._data_lock:
            self._counters.clear()
            self._histograms.clear()
            self._timers.clear()

    def export_json(self) -> str:
        """Export metrics as JSON string"""
        return json.dumps(self.get_metrics(), indent=2, default=str)


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance"""
    return MetricsCollector()


def counter(name: str, value: float = 1.0, labels: Optional[Dict[str, str]] = None) -> None:
    """Increment a counter"""
    get_metrics_collector().counter(name, value, labels)


def timer(name: str, duration: float, labels: Optional[Dict[str, str]] = None) -> None:
    """Record a timer value"""
    get_metrics_collector().timer(name, duration, labels)


class SchemaForgeMetrics:
    """SchemaForge specific metrics helper"""

    @staticmethod
    def record_parse(duration: float, input_format: str, model_count: int) -> None:
        """Record schema parsing metrics"""
        labels = {"format": input_format}
        timer("schema_parse_duration", duration, labels)
        counter("schema_parse_total", 1.0, labels)
        counter("schema_models_parsed_total", float(model_count), labels)
        if model_count == 0:
            counter("schema_parse_empty_total", 1.0, labels)

    @staticmethod
    def record_generation(duration: float, target: str, deterministic: bool) -> None:
        """Record code generation metrics"""
        labels = {"target": target, "deterministic": str(deterministic).lower()}
        timer("code_generation_duration", duration, labels)
        counter("code_generation_total", 1.0, labels)

    @staticmethod
    def record_llm_call(duration: float, model_id: str, input_tokens: int, output_tokens: int) -> None:
        """Record LLM call metrics"""
        labels = {"model_id": model_id}
        timer("llm_call_duration", duration, labels)
        counter("llm_call_total", 1.0, labels)
        counter("llm_input_tokens_total", float(input_tokens), labels)
        counter("llm_output_tokens_total", float(output_tokens), labels)

    @staticmethod
    def record_error(error_type: str, category: str) -> None:
        """Record error metrics"""
        counter("errors_total", 1.0, {"error_type": error_type, "category": category})
