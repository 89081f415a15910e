# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "resource_requests_total",
    "Total HTTP requests to the resource-management service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "resource_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "resource_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
WORK_ITEMS_CREATED = Counter(
    "resource_work_items_created_total",
    "Total work items created",
    ["type"],
)
ALLOCATIONS_CREATED = Counter(
    "resource_allocations_created_total",
    "Total allocations created",
)
TEAM_MEMBERS_DEACTIVATED = Counter(
    "resource_team_members_deactivated_total",
    "Total team members soft-deleted",
)
VALIDATION_FAILURES = Counter(
    "resource_validation_failures_total",
    "Writes rejected by business-rule validation",
    ["entity", "field"],
)
