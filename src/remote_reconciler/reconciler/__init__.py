"""
Reconcilers: the per-resource lifecycle state machine and its helpers.

Components:
- ResourceReconciler: Generic create/read/update/delete engine
- Importer: Composite import ID parsing and existence check
- LookupReconciler: Read-only find-by-filter with exact matching
"""

from remote_reconciler.reconciler.base import ResourceReconciler
from remote_reconciler.reconciler.importer import Importer
from remote_reconciler.reconciler.lookup import LookupReconciler, select_exact

__all__ = [
    "ResourceReconciler",
    "Importer",
    "LookupReconciler",
    "select_exact",
]
