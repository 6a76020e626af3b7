"""
Prometheus Metrics Registration.

Counters for registration and authorization decisions. The host exposes
them through whatever prometheus_client exporter it already runs.
"""

from prometheus_client import Counter

# ============================================================================
# COUNTERS
# ============================================================================

authorization_checks_total = Counter(
    "authorization_checks_total",
    "Authorization decisions",
    ["result"],  # allowed, denied
)

registrations_total = Counter(
    "registrations_total",
    "Successful registrations",
    ["kind"],  # permission, role, grant
)

registration_conflicts_total = Counter(
    "registration_conflicts_total",
    "Rejected registrations",
    ["kind"],  # permission, role, grant
)
