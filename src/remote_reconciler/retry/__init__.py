"""
Bounded-time retry with classification-driven delays.

Main Components:
    - RetryController: Runs one remote operation under a policy
    - RetryPolicy: Window, fixed delays and retryable predicate
    - retry_any / retry_conflicts / retry_rate_limited: Standard predicates

Usage:
    >>> from remote_reconciler.retry import RetryController, RetryPolicy
    >>> controller = RetryController()
    >>> remote = await controller.run(RetryPolicy.read(settings), fetch)
"""

from remote_reconciler.retry.controller import RetryController
from remote_reconciler.retry.policy import (
    RetryPolicy,
    RetryPredicate,
    retry_any,
    retry_conflicts,
    retry_rate_limited,
)

__all__ = [
    "RetryController",
    "RetryPolicy",
    "RetryPredicate",
    "retry_any",
    "retry_conflicts",
    "retry_rate_limited",
]
