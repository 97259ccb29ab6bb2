"""Prometheus metrics for the Remote State Reconciler.

Alert rules should be configured for:
- retry_exhausted_total (retry windows closing without success)
- retry_attempts_total{kind="rate_limited"} (sustained API throttling)
"""

from prometheus_client import Counter, Histogram

# === Reconciler Metrics ===

remote_operations_total = Counter(
    "remote_operations_total",
    "Reconciler operations by resource type, operation and outcome",
    ["resource", "operation", "outcome"],
)
"""
Reconciler operation counter.

Labels:
- resource: service_integration, addon, schedule, ...
- operation: create, read, update, delete, import, lookup
- outcome: success, gone (resource deleted out-of-band before a read or import), error
"""

# === Retry Metrics ===

retry_attempts_total = Counter(
    "retry_attempts_total",
    "Retried remote calls by operation and error kind",
    ["operation", "kind"],
)
"""
Retry counter, incremented once per scheduled retry.

Labels:
- operation: Free-form operation label (e.g., "read service_integration")
- kind: rate_limited, not_found, conflict, transient_server, permanent

Alert thresholds:
- WARN: rate_limited retries > 1/min sustained
"""

retry_exhausted_total = Counter(
    "retry_exhausted_total",
    "Retry loops that gave up, by operation and final error kind",
    ["operation", "kind"],
)

# === Remote Call Metrics ===

remote_call_latency_seconds = Histogram(
    "remote_call_latency_seconds",
    "Remote API call latency in seconds",
    ["method", "success"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)
"""
Remote API call latency histogram.

Labels:
- method: list, get, create, update, delete
- success: true (2xx), false (error or transport failure)
"""
