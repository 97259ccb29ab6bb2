"""
Remote State Reconciler.

Keeps locally declared resource configuration convergent with resources held
by a rate-limited, eventually-consistent HTTP API (PagerDuty REST API v2):
- Error classification of remote failures (rate limit, not found, conflict, ...)
- Time-bounded retry with fixed, classification-driven delays
- Generic create/read/update/delete lifecycle per resource instance
- Composite-ID import and exact-match lookup by name

Architecture: httpx remote client + retry controller + per-resource reconcilers
"""

__version__ = "0.1.0"
