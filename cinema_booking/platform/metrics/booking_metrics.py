from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Seat reservation core metrics

    Tracks reservation outcomes (including storage-level conflicts that slipped
    past the availability check), lifecycle transitions and payment results.
    """

    def __init__(self) -> None:
        # ========== Seat Reservation Metrics ==========
        self.seat_reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Total seat reservation requests',
            ['hall_id', 'result'],  # result: success/invalid_request/invalid_seats/conflict/...
        )

        self.seat_reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Seat reservation processing time',
            ['hall_id'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.seat_conflicts_at_commit = Counter(
            'seat_conflicts_at_commit_total',
            'Reservations rejected by the booking_seat unique constraint',
        )

        # ========== Lifecycle Metrics ==========
        self.booking_transitions = Counter(
            'booking_transitions_total',
            'Booking lifecycle transitions',
            ['transition'],  # cancelled_by_user/cancelled_by_admin/removed
        )

        # ========== Payment Metrics ==========
        self.payment_operations = Counter(
            'payment_operations_total',
            'Payment gateway operations',
            ['operation', 'result'],  # operation: initiate/verify
        )

    # ========== Helper Methods ==========

    def record_seat_reservation(self, *, hall_id: str, result: str, duration: float) -> None:
        self.seat_reservation_requests.labels(hall_id=hall_id, result=result).inc()
        self.seat_reservation_duration.labels(hall_id=hall_id).observe(duration)

    def record_commit_conflict(self) -> None:
        self.seat_conflicts_at_commit.inc()

    def record_transition(self, *, transition: str) -> None:
        self.booking_transitions.labels(transition=transition).inc()

    def record_payment(self, *, operation: str, result: str) -> None:
        self.payment_operations.labels(operation=operation, result=result).inc()


# Global metrics instance
metrics = BookingMetrics()
