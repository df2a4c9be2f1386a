"""Tests for export serialization."""

import pytest

from saans.errors import AdvisoryCondition, EmptyInputError
from saans.export import ExportSerializer
from saans.reconcile import ImportReconciler


class TestExportSerializer:
    """Schema-exact export rows."""

    def test_empty_input_raises_advisory(self, small_schema):
        with pytest.raises(EmptyInputError):
            ExportSerializer(small_schema).serialize([])

    def test_empty_input_is_advisory(self, small_schema):
        with pytest.raises(AdvisoryCondition):
            ExportSerializer(small_schema).serialize([])

    def test_headers_are_labels_in_schema_order(self, schema):
        record = dict(reversed(list(schema.build_record({"month": "April"}).items())))

        rows = ExportSerializer(schema).serialize([record])

        assert list(rows[0].keys()) == schema.labels
        assert rows[0]["Month ……………"] == "April"

    def test_missing_keys_export_empty_and_extra_keys_dropped(self, small_schema):
        rows = ExportSerializer(small_schema).serialize([{"remarks": "r", "ghost": "g"}])

        assert rows == [
            {
                "Name of the Block": "",
                "No. of Doctors trained on SAANS?": "",
                "Remarks": "r",
            }
        ]

    def test_one_row_per_record_in_order(self, small_schema):
        records = [small_schema.build_record({"remarks": str(i)}) for i in range(3)]
        rows = ExportSerializer(small_schema).serialize(records)
        assert [row["Remarks"] for row in rows] == ["0", "1", "2"]

    def test_round_trip_through_reconciler(self, schema):
        source_rows = [
            {label: f"{i}-{n}" for n, label in enumerate(schema.labels)} for i in range(3)
        ]
        reconciler = ImportReconciler(schema)
        records = reconciler.reconcile(source_rows).records

        exported = ExportSerializer(schema).serialize(records)
        again = reconciler.reconcile(exported).records

        assert exported == source_rows
        assert again == records
