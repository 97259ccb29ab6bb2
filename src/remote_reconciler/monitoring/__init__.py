"""Monitoring and metrics instrumentation for the Remote State Reconciler.

Exports Prometheus metrics for operational monitoring and alerting.
"""

from remote_reconciler.monitoring.metrics import (
    remote_call_latency_seconds,
    remote_operations_total,
    retry_attempts_total,
    retry_exhausted_total,
)

__all__ = [
    "remote_operations_total",
    "retry_attempts_total",
    "retry_exhausted_total",
    "remote_call_latency_seconds",
]
