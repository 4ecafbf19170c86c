from collections.abc import Iterator
from contextlib import contextmanager
import time

from prometheus_client import Counter, Gauge, Histogram


class SeatingMetrics:
    """Booking, attendance and scheduler metrics exposed on /metrics"""

    def __init__(self) -> None:
        # ========== Booking Operations ==========
        self.booking_requests = Counter(
            'seating_booking_requests_total',
            'Seat scheduling operations by outcome',
            ['operation', 'result'],  # result: ok / error class name
        )

        self.booking_operation_duration = Histogram(
            'seating_booking_operation_duration_seconds',
            'Seat scheduling operation duration',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        # ========== Locking ==========
        self.lock_wait = Histogram(
            'seating_lock_wait_seconds',
            'Time spent waiting for seat locks',
            ['backend'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

        # ========== Attendance / Auto-cancel ==========
        self.auto_cancel = Counter(
            'seating_auto_cancel_total',
            'Attendance deadline evaluations by outcome',
            ['result'],  # cancelled / skipped / missing / retry
        )

        self.pending_deadlines = Gauge(
            'seating_pending_attendance_deadlines',
            'Attendance deadlines seen in the last scheduler poll',
        )

    def record_booking_operation(self, *, operation: str, result: str, duration: float) -> None:
        self.booking_requests.labels(operation=operation, result=result).inc()
        self.booking_operation_duration.labels(operation=operation).observe(duration)

    @contextmanager
    def track_booking_operation(self, operation: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.record_booking_operation(
                operation=operation, result=type(e).__name__, duration=time.perf_counter() - start
            )
            raise
        self.record_booking_operation(
            operation=operation, result='ok', duration=time.perf_counter() - start
        )

    def record_lock_wait(self, *, backend: str, duration: float) -> None:
        self.lock_wait.labels(backend=backend).observe(duration)

    def record_auto_cancel(self, *, result: str) -> None:
        self.auto_cancel.labels(result=result).inc()


# Global metrics instance
metrics = SeatingMetrics()
