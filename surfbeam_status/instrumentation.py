"""
Performance Instrumentation for SurfBeam Modem Status Client
============================================================

This module records timing metrics for status fetches, document decoding and
whole poll cycles so slow modems and flaky links show up in the output.

Operation names follow a prefix convention:

* ``fetch_<page>``: one GET of a CGI status page
* ``decode_<endpoint>``: one decode of a received document
* ``poll_complete``: one poll of both endpoints
* ``http_request``: one request as seen by the session adapter

License: MIT
"""

import logging
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from .models import TimingMetrics

logger = logging.getLogger("surfbeam-status")

SLOW_FETCH_SECONDS = 2.0
FAST_FETCH_SECONDS = 0.5
HIGH_ERROR_RATE = 0.1

PERCENTILES = (50, 90, 95, 99)

# Metrics kept per session; older ones are dropped so --watch stays bounded
MAX_TIMING_METRICS = 1000


def _percentile(ordered: List[float], pct: int) -> float:
    """Nearest-rank percentile of an already sorted list."""
    return ordered[min(len(ordered) - 1, len(ordered) * pct // 100)]


def _operation_stats(metrics: List[TimingMetrics]) -> Dict[str, Any]:
    durations = [m.duration for m in metrics]
    return {
        "count": len(metrics),
        "total_time": sum(durations),
        "avg_time": sum(durations) / len(durations),
        "min_time": min(durations),
        "max_time": max(durations),
        "success_rate": sum(1 for m in metrics if m.success) / len(metrics),
        "bytes": sum(m.response_size for m in metrics),
    }


class PerformanceInstrumentation:
    """
    Performance instrumentation for the SurfBeam client.

    Tracks timing metrics for:
    - Individual status page requests
    - Document decoding per endpoint
    - Complete poll cycles (concurrent or serial)
    """

    def __init__(self, max_metrics: int = MAX_TIMING_METRICS) -> None:
        self.session_start_time = time.time()
        self.max_metrics = max_metrics
        self.timing_metrics: Deque[TimingMetrics] = deque(maxlen=max_metrics)
        self.request_metrics: Dict[str, Deque[float]] = {}

    def start_timer(self, operation: str) -> float:
        return time.time()

    def record_timing(
        self,
        operation: str,
        start_time: float,
        success: bool = True,
        error_type: Optional[str] = None,
        retry_count: int = 0,
        http_status: Optional[int] = None,
        response_size: int = 0,
    ) -> TimingMetrics:
        """Record one finished operation started at ``start_time``."""
        end_time = time.time()
        metric = TimingMetrics(
            operation=operation,
            start_time=start_time,
            end_time=end_time,
            duration=end_time - start_time,
            success=success,
            error_type=error_type,
            retry_count=retry_count,
            http_status=http_status,
            response_size=response_size,
        )

        self.timing_metrics.append(metric)
        self.request_metrics.setdefault(operation, deque(maxlen=self.max_metrics)).append(metric.duration)

        status = "ok" if success else f"failed ({error_type})"
        logger.debug(f"📊 {operation}: {metric.duration_ms:.1f}ms {status}")
        return metric

    def _metrics_by_operation(self) -> Dict[str, List[TimingMetrics]]:
        grouped: Dict[str, List[TimingMetrics]] = {}
        for metric in self.timing_metrics:
            grouped.setdefault(metric.operation, []).append(metric)
        return grouped

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Summarize the retained operations.

        Returns:
            Dictionary with session totals, a per-operation breakdown,
            response time percentiles of successful operations and a list
            of human-readable insights
        """
        if not self.timing_metrics:
            return {"error": "No timing metrics recorded"}

        breakdown = {operation: _operation_stats(metrics) for operation, metrics in self._metrics_by_operation().items()}

        succeeded = sorted(m.duration for m in self.timing_metrics if m.success)
        percentiles = {f"p{pct}": _percentile(succeeded, pct) if succeeded else 0 for pct in PERCENTILES}

        failed = [m for m in self.timing_metrics if not m.success]

        return {
            "session_metrics": {
                "total_session_time": time.time() - self.session_start_time,
                "total_operations": len(self.timing_metrics),
                "successful_operations": len(self.timing_metrics) - len(failed),
                "failed_operations": len(failed),
                "retried_operations": sum(1 for m in self.timing_metrics if m.retry_count > 0),
            },
            "operation_breakdown": breakdown,
            "response_time_percentiles": percentiles,
            "performance_insights": self._generate_performance_insights(breakdown, len(failed)),
        }

    def _generate_performance_insights(self, breakdown: Dict[str, Any], failed: int) -> List[str]:
        insights = []

        fetches = {op: stats for op, stats in breakdown.items() if op.startswith("fetch_")}
        if fetches:
            slowest = max(fetches, key=lambda op: fetches[op]["avg_time"])
            avg_time = fetches[slowest]["avg_time"]
            if avg_time > SLOW_FETCH_SECONDS:
                insights.append(f"{slowest} averaging {avg_time:.2f}s - modem web interface is slow")
            elif avg_time < FAST_FETCH_SECONDS:
                insights.append(f"Fast status pages: slowest {slowest} averages {avg_time * 1000:.0f}ms")

        for op, stats in breakdown.items():
            if op.startswith("decode_") and stats["success_rate"] < 1.0:
                rejected = (1 - stats["success_rate"]) * 100
                insights.append(f"{op} rejected {rejected:.0f}% of documents - check firmware version")

        error_rate = failed / len(self.timing_metrics)
        if error_rate > HIGH_ERROR_RATE:
            insights.append(f"High error rate: {error_rate * 100:.1f}%")
        elif failed == 0:
            insights.append("Perfect reliability: 0% error rate")

        return insights


__all__ = ["PerformanceInstrumentation"]
