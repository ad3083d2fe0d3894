"""
NetPerfCompare - Selector Timing

Records how long each selector recomputation takes so that slow
derivations (large cross products, long hourly series) are visible in
the logs and in the end-of-run report.
"""

import logging
import time
from collections import deque
from functools import wraps
from typing import Any, Callable, Deque, Dict, Optional

logger = logging.getLogger(__name__)


class PerformanceMetrics:
    """Rolling window of recomputation times, keyed by operation name."""

    def __init__(self, max_samples: int = 100):
        self.max_samples = max_samples
        self._samples: Dict[str, Deque[float]] = {}

    def record(self, operation: str, elapsed_ms: float) -> None:
        window = self._samples.get(operation)
        if window is None:
            window = self._samples[operation] = deque(maxlen=self.max_samples)
        window.append(elapsed_ms)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """
        Summarize the samples of one operation.

        Args:
            operation: Operation name, e.g. "selector.combined_items"

        Returns:
            Dict with count, avg, max and total (all 0 when never recorded)
        """
        window = self._samples.get(operation)
        if not window:
            return {"count": 0, "avg": 0.0, "max": 0.0, "total": 0.0}

        total = sum(window)
        return {
            "count": len(window),
            "avg": total / len(window),
            "max": max(window),
            "total": total
        }

    def operations(self):
        return list(self._samples)


class PerformanceTimer:
    """
    Times one block and reports it.

    Durations at or above log_threshold_ms are logged as warnings, the
    rest at debug level. When a collector is given the duration is also
    recorded there.
    """

    def __init__(
        self,
        operation: str,
        log_threshold_ms: float = 100.0,
        metrics: Optional[PerformanceMetrics] = None
    ):
        self.operation = operation
        self.log_threshold_ms = log_threshold_ms
        self.metrics = metrics
        self.elapsed_ms = 0.0
        self._started = 0.0

    def __enter__(self) -> "PerformanceTimer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000.0

        if self.metrics is not None:
            self.metrics.record(self.operation, self.elapsed_ms)

        message = f"[PERF] {self.operation} took {self.elapsed_ms:.1f}ms"
        if self.elapsed_ms >= self.log_threshold_ms:
            logger.warning(f"{message} (threshold {self.log_threshold_ms:.0f}ms)")
        else:
            logger.debug(message)


def timed(operation: str, log_threshold_ms: float = 100.0) -> Callable:
    """Decorator form of PerformanceTimer."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            with PerformanceTimer(operation, log_threshold_ms):
                return func(*args, **kwargs)
        return wrapper
    return decorator


def format_perf_report(metrics: PerformanceMetrics) -> str:
    """
    Render the collected timings, most expensive operation first.

    Returns:
        Multi-line report string
    """
    operations = metrics.operations()
    if not operations:
        return "[PERF] No selector recomputations recorded"

    stats = {operation: metrics.get_stats(operation) for operation in operations}
    ranked = sorted(stats, key=lambda operation: stats[operation]["total"], reverse=True)

    lines = [f"[PERF] Selector timings ({len(ranked)} operations)"]
    for operation in ranked:
        entry = stats[operation]
        lines.append(
            f"  {operation:<40} runs={entry['count']:<4} "
            f"total={entry['total']:.1f}ms avg={entry['avg']:.1f}ms max={entry['max']:.1f}ms"
        )
    return "\n".join(lines)
