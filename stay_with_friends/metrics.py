"""
Prometheus metrics for calendar, booking and social-graph state transitions.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Metric Types:
    - Counter: Cumulative metrics that only increase (e.g., total approvals)
    - Histogram: Observations bucketed by value (e.g., enumerated window size)

Example:
    >>> from stay_with_friends.metrics import booking_transitions
    >>> booking_transitions.labels(status="approved").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Availability Metrics
# =============================================================================

availability_intervals_created = Counter(
    "swf_availability_intervals_created_total",
    "Total availability intervals inserted",
    ["status"],
)
"""
Counter for inserted availability rows.

Labels:
    status: available, booked or blocked
"""

date_enumeration_days = Histogram(
    "swf_date_enumeration_days",
    "Number of calendar days in a date-enumeration query window",
    buckets=(1, 7, 14, 31, 62, 92, 183, 366, float("inf")),
)

# =============================================================================
# State Machine Metrics
# =============================================================================

booking_transitions = Counter(
    "swf_booking_transitions_total",
    "Total booking request transitions (creation counts as pending)",
    ["status"],
)

connection_transitions = Counter(
    "swf_connection_transitions_total",
    "Total connection transitions (creation counts as pending, removal as deleted)",
    ["status"],
)

invitation_transitions = Counter(
    "swf_invitation_transitions_total",
    "Total invitation transitions (creation counts as pending)",
    ["status"],
)
"""
Counter for invitation transitions.

Labels:
    status: pending, connection-sent, accepted, expired or cancelled
"""
