"""Request and throughput metrics with Prometheus text export."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time view of the collected metrics."""

    total_requests: int
    successful_requests: int
    failed_requests: int
    total_tokens: int
    total_inference_time_us: int
    uptime_secs: int
    requests_per_sec: float
    tokens_per_sec: float
    avg_latency_ms: float
    error_rate: float


def _to_micros(duration: timedelta | float) -> int:
    if isinstance(duration, timedelta):
        return duration // timedelta(microseconds=1)
    return int(round(duration * 1_000_000))


class MetricsCollector:
    """Thread-safe counters for requests, tokens and inference time."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._start = time.monotonic()
        self._total_requests = 0
        self._successful_requests = 0
        self._failed_requests = 0
        self._total_tokens = 0
        self._total_inference_time_us = 0

    def record_success(self, tokens: int, duration: timedelta | float) -> None:
        """Record a successful request; a plain number is taken as seconds."""
        micros = _to_micros(duration)
        with self._lock:
            self._total_requests += 1
            self._successful_requests += 1
            self._total_tokens += tokens
            self._total_inference_time_us += micros

    def record_failure(self) -> None:
        """Record a failed request."""
        with self._lock:
            self._total_requests += 1
            self._failed_requests += 1

    def snapshot(self) -> MetricsSnapshot:
        """Return the current values and the rates derived from them."""
        with self._lock:
            total = self._total_requests
            successful = self._successful_requests
            failed = self._failed_requests
            tokens = self._total_tokens
            time_us = self._total_inference_time_us
        elapsed = time.monotonic() - self._start
        uptime_secs = int(elapsed)
        has_uptime = uptime_secs > 0

        return MetricsSnapshot(
            total_requests=total,
            successful_requests=successful,
            failed_requests=failed,
            total_tokens=tokens,
            total_inference_time_us=time_us,
            uptime_secs=uptime_secs,
            requests_per_sec=total / elapsed if has_uptime else 0.0,
            tokens_per_sec=tokens / elapsed if has_uptime else 0.0,
            avg_latency_ms=(time_us / 1000.0) / successful if successful else 0.0,
            error_rate=failed / total if total else 0.0,
        )

    def to_prometheus(self) -> str:
        """Render the metrics in the Prometheus text exposition format."""
        s = self.snapshot()
        entries = [
            ("realizar_requests_total", "Total number of requests", "counter",
             str(s.total_requests)),
            ("realizar_requests_successful", "Successful requests", "counter",
             str(s.successful_requests)),
            ("realizar_requests_failed", "Failed requests", "counter",
             str(s.failed_requests)),
            ("realizar_tokens_generated", "Total tokens generated", "counter",
             str(s.total_tokens)),
            ("realizar_inference_time_seconds", "Total inference time", "counter",
             f"{s.total_inference_time_us / 1_000_000.0:.6f}"),
            ("realizar_requests_per_second", "Request rate", "gauge",
             f"{s.requests_per_sec:.2f}"),
            ("realizar_tokens_per_second", "Token generation rate", "gauge",
             f"{s.tokens_per_sec:.2f}"),
            ("realizar_avg_latency_ms", "Average latency in milliseconds", "gauge",
             f"{s.avg_latency_ms:.2f}"),
            ("realizar_error_rate", "Error rate (0.0-1.0)", "gauge",
             f"{s.error_rate:.4f}"),
            ("realizar_uptime_seconds", "Uptime in seconds", "counter",
             str(s.uptime_secs)),
        ]
        return "".join(
            f"# HELP {name} {help_text}\n# TYPE {name} {kind}\n{name} {value}\n"
            for name, help_text, kind, value in entries
        )

    def reset(self) -> None:
        """Zero every counter; the uptime clock keeps running."""
        with self._lock:
            self._total_requests = 0
            self._successful_requests = 0
            self._failed_requests = 0
            self._total_tokens = 0
            self._total_inference_time_us = 0