import threading
import time
from datetime import timedelta

import pytest

from realizar.metrics import MetricsCollector


def test_metrics_collector_creation():
    snapshot = MetricsCollector().snapshot()
    assert snapshot.total_requests == 0
    assert snapshot.successful_requests == 0
    assert snapshot.failed_requests == 0
    assert snapshot.total_tokens == 0
    assert snapshot.total_inference_time_us == 0


def test_record_success():
    metrics = MetricsCollector()
    metrics.record_success(10, timedelta(milliseconds=100))
    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 1
    assert snapshot.successful_requests == 1
    assert snapshot.failed_requests == 0
    assert snapshot.total_tokens == 10
    assert snapshot.total_inference_time_us >= 100_000


def test_record_success_seconds_number():
    metrics = MetricsCollector()
    metrics.record_success(1, 0.1)
    assert metrics.snapshot().total_inference_time_us == 100_000


def test_record_failure():
    metrics = MetricsCollector()
    metrics.record_failure()
    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 1
    assert snapshot.successful_requests == 0
    assert snapshot.failed_requests == 1
    assert snapshot.error_rate == pytest.approx(1.0)


def test_multiple_requests():
    metrics = MetricsCollector()
    metrics.record_success(5, timedelta(milliseconds=50))
    metrics.record_success(10, timedelta(milliseconds=100))
    metrics.record_failure()
    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 3
    assert snapshot.successful_requests == 2
    assert snapshot.failed_requests == 1
    assert snapshot.total_tokens == 15
    assert snapshot.error_rate == pytest.approx(1.0 / 3.0)


def test_avg_latency_calculation():
    metrics = MetricsCollector()
    metrics.record_success(1, timedelta(milliseconds=100))
    metrics.record_success(1, timedelta(milliseconds=200))
    assert abs(metrics.snapshot().avg_latency_ms - 150.0) < 1.0


def test_tokens_per_second():
    metrics = MetricsCollector()
    time.sleep(1.05)
    metrics.record_success(100, timedelta(milliseconds=10))
    snapshot = metrics.snapshot()
    assert snapshot.tokens_per_sec > 0.0
    assert snapshot.tokens_per_sec <= 100.0
    assert snapshot.uptime_secs >= 1


def test_prometheus_format():
    metrics = MetricsCollector()
    metrics.record_success(10, timedelta(milliseconds=100))
    metrics.record_failure()
    prom = metrics.to_prometheus()
    assert "realizar_requests_total 2" in prom
    assert "realizar_requests_successful 1" in prom
    assert "realizar_requests_failed 1" in prom
    assert "realizar_tokens_generated 10" in prom
    assert "realizar_error_rate 0.5000" in prom
    assert "realizar_inference_time_seconds 0.100000" in prom


def test_prometheus_has_help_and_type_lines():
    prom = MetricsCollector().to_prometheus()
    lines = prom.splitlines()
    assert len(lines) == 30
    assert lines[0] == "# HELP realizar_requests_total Total number of requests"
    assert lines[1] == "# TYPE realizar_requests_total counter"
    assert prom.endswith("\n")


def test_reset_metrics():
    metrics = MetricsCollector()
    metrics.record_success(10, timedelta(milliseconds=100))
    metrics.record_failure()
    metrics.reset()
    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 0
    assert snapshot.successful_requests == 0
    assert snapshot.failed_requests == 0
    assert snapshot.total_tokens == 0
    assert snapshot.total_inference_time_us == 0


def test_concurrent_updates():
    metrics = MetricsCollector()

    def worker():
        for _ in range(100):
            metrics.record_success(1, timedelta(microseconds=100))

    thread = threading.Thread(target=worker)
    thread.start()
    worker()
    thread.join()

    snapshot = metrics.snapshot()
    assert snapshot.total_requests == 200
    assert snapshot.successful_requests == 200
    assert snapshot.total_tokens == 200


def test_zero_division_safety():
    snapshot = MetricsCollector().snapshot()
    assert snapshot.requests_per_sec == pytest.approx(0.0)
    assert snapshot.tokens_per_sec == pytest.approx(0.0)
    assert snapshot.avg_latency_ms == pytest.approx(0.0)
    assert snapshot.error_rate == pytest.approx(0.0)