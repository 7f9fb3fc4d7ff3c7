"""Prometheus metrics for availability checks and notifications."""

from prometheus_client import Counter

availability_checks_total = Counter(
    "availability_checks_total",
    "Total availability checks by resulting status",
    ["status"],
)

availability_conflicts_total = Counter(
    "availability_conflicts_total",
    "Total conflicts detected by type",
    ["type"],
)

notifications_generated_total = Counter(
    "notifications_generated_total",
    "Total notifications created by type",
    ["type"],
)

notifications_dispatched_total = Counter(
    "notifications_dispatched_total",
    "Total notifications marked sent",
)

notifications_quiet_deferred_total = Counter(
    "notifications_quiet_deferred_total",
    "Due notifications held back by quiet hours",
)


class PrometheusPlannerMetrics:
    """Prometheus-based metrics implementation."""

    def record_availability(self, status: str, conflict_types: list[str]) -> None:
        """Count a check and its conflicts."""
        availability_checks_total.labels(status=status).inc()
        for conflict_type in conflict_types:
            availability_conflicts_total.labels(type=conflict_type).inc()

    def record_generated(self, types: list[str]) -> None:
        """Count created notifications."""
        for notification_type in types:
            notifications_generated_total.labels(type=notification_type).inc()

    def record_dispatch(self, sent: int, deferred: int) -> None:
        """Count a dispatch pass."""
        if sent:
            notifications_dispatched_total.inc(sent)
        if deferred:
            notifications_quiet_deferred_total.inc(deferred)


planner_metrics = PrometheusPlannerMetrics()
