"""Reconcile decoded spreadsheet rows into schema records."""

import logging
from typing import Optional, Sequence

from ..schema import Schema, default_schema
from .matching import match_field
from .models import Advisory, ImportRow, MatchTier, ReconcileReport, ReconcileResult

logger = logging.getLogger(__name__)


class ImportReconciler:
    """Maps arbitrary spreadsheet headers onto schema fields, best effort."""

    def __init__(self, schema: Optional[Schema] = None):
        self.schema = schema if schema is not None else default_schema()

    def reconcile(self, rows: Sequence[ImportRow]) -> ReconcileResult:
        """
        Produce one full record per import row.

        Rows are never rejected: fields without a matching header are left
        empty, so a row that matches nothing still yields an all-empty record.
        An empty input yields no records and the NO_DATA_FOUND advisory.
        """
        if not rows:
            logger.info("No rows to reconcile")
            return ReconcileResult(
                advisory=Advisory.NO_DATA_FOUND,
                report=ReconcileReport(unmatched_labels=self.schema.labels),
            )

        report = ReconcileReport(row_count=len(rows))
        matched_keys: set[str] = set()
        records = []

        for row in rows:
            record = self.schema.empty_record()
            for field in self.schema:
                match = match_field(field, row)
                report.tier_counts[match.tier] += 1
                if match.matched:
                    record[field.key] = match.value
                    matched_keys.add(field.key)
            records.append(record)

        report.unmatched_labels = [f.label for f in self.schema if f.key not in matched_keys]

        logger.info(
            f"Reconciled {len(records)} rows: "
            f"{report.tier_counts[MatchTier.EXACT_LABEL]} label, "
            f"{report.tier_counts[MatchTier.EXACT_KEY]} key, "
            f"{report.tier_counts[MatchTier.NORMALIZED_LABEL]} normalized, "
            f"{report.tier_counts[MatchTier.NONE]} unmatched field values"
        )
        if report.unmatched_labels:
            logger.info(f"Fields with no source column: {report.unmatched_labels}")

        return ReconcileResult(records=records, report=report)
