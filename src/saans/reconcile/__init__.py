"""Import reconciliation of spreadsheet rows against the schema."""

from .matching import match_field, normalize_header
from .models import (
    Advisory,
    FieldMatch,
    ImportRow,
    MatchTier,
    ReconcileReport,
    ReconcileResult,
)
from .reconciler import ImportReconciler

__all__ = [
    "match_field",
    "normalize_header",
    "Advisory",
    "FieldMatch",
    "ImportRow",
    "MatchTier",
    "ReconcileReport",
    "ReconcileResult",
    "ImportReconciler",
]
