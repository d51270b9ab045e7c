"""
Prometheus metrics for the marketplace.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Registry metrics
assets_registered_total = Counter(
    "assets_registered_total",
    "Total IP assets registered",
    ["category"],
)

# License workflow metrics
license_applications_total = Counter(
    "license_applications_total",
    "Total license applications submitted",
    ["outcome"],
)

license_decisions_total = Counter(
    "license_decisions_total",
    "Total license decisions",
    ["decision"],
)

license_capacity_conflicts_total = Counter(
    "license_capacity_conflicts_total",
    "Approvals refused because license terms were at capacity",
)

# Purchase and settlement metrics
purchases_total = Counter(
    "purchases_total",
    "Total purchase attempts",
    ["outcome"],
)

settlement_outcomes_total = Counter(
    "settlement_outcomes_total",
    "Total payment settlement outcomes",
    ["outcome"],
)

# Authorization chain metrics
chain_issuance_total = Counter(
    "chain_issuance_total",
    "Total authorization chain issuance runs",
    ["outcome"],
)

chain_verifications_total = Counter(
    "chain_verifications_total",
    "Total authorization chain verifications",
    ["result"],
)

# Background work metrics
notifications_total = Counter(
    "notifications_total",
    "Total notifications handed to the notifier",
    ["event", "outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
