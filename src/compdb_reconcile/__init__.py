from compdb_reconcile.database import Command, DatabaseFormatError, read, write
from compdb_reconcile.reconcile import (
    RETENTION_SECONDS,
    ReconcileStats,
    full_path,
    reconcile,
    reconcile_with_stats,
)

__all__ = [
    "Command",
    "DatabaseFormatError",
    "RETENTION_SECONDS",
    "ReconcileStats",
    "full_path",
    "read",
    "reconcile",
    "reconcile_with_stats",
    "write",
]
