from prometheus_client import Counter, Histogram


class BookingMetrics:
    """
    Booking core metrics collector

    Tracks booking outcomes, lifecycle transitions and seat-ledger repairs
    """

    def __init__(self):
        # ========== Booking Creation ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Total booking creation requests',
            ['result'],  # result: success / rejected
        )

        self.booking_duration = Histogram(
            'booking_duration_seconds',
            'Booking creation processing time',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.tickets_booked = Counter('tickets_booked_total', 'Total tickets booked')

        # ========== Lifecycle ==========
        self.booking_cancellations = Counter(
            'booking_cancellations_total', 'Total cancelled bookings'
        )

        self.payments = Counter(
            'booking_payments_total',
            'Payment attempts',
            ['result'],  # result: paid / rejected
        )

        # ========== Seat Ledger ==========
        self.seat_ledger_repairs = Counter(
            'seat_ledger_repairs_total',
            'Seat ledger rebuilds that changed the cached ledger or counters',
            ['source'],  # source: availability / reconcile
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, tickets: int = 0, duration: float = 0.0) -> None:
        self.booking_requests.labels(result=result).inc()
        if result == 'success':
            self.tickets_booked.inc(tickets)
            self.booking_duration.observe(duration)

    def record_cancellation(self) -> None:
        self.booking_cancellations.inc()

    def record_payment(self, *, result: str) -> None:
        self.payments.labels(result=result).inc()

    def record_ledger_repair(self, *, source: str) -> None:
        self.seat_ledger_repairs.labels(source=source).inc()


# Global metrics instance
metrics = BookingMetrics()
