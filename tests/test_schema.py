"""Tests for the schema registry."""

import pytest

from saans.errors import (
    DuplicateFieldKeyError,
    DuplicateFieldLabelError,
    EmptyFieldKeyError,
    SchemaError,
)
from saans.schema import FIELD_LABELS, SchemaField, build_schema, default_schema, derive_key


class TestDeriveKey:
    """Test key derivation from labels."""

    def test_simple_label(self):
        assert derive_key("Name of the Block") == "name_of_the_block"

    def test_collapses_punctuation_runs(self):
        assert (
            derive_key("No. of Nursing Officers in PHCs, CHCs, Hospitals trained on SAANS?")
            == "no_of_nursing_officers_in_phcs_chcs_hospitals_trained_on_saans"
        )

    def test_trims_leading_and_trailing_separators(self):
        assert derive_key("  --Remarks!!  ") == "remarks"

    def test_non_ascii_punctuation(self):
        assert derive_key("Month ……………") == "month"

    def test_keeps_digits(self):
        assert derive_key("Number of infants given PCV-1") == "number_of_infants_given_pcv_1"

    def test_all_punctuation_derives_empty(self):
        assert derive_key("???  ...") == ""

    def test_deterministic(self):
        label = "Whether SAANS 2025-26 was inaugurated at District Level?"
        assert derive_key(label) == derive_key(label)

    @pytest.mark.parametrize("label", FIELD_LABELS)
    def test_idempotent_on_normalized_output(self, label):
        key = derive_key(label)
        assert derive_key(key) == key

    @pytest.mark.parametrize("label", FIELD_LABELS)
    def test_output_alphabet(self, label):
        key = derive_key(label)
        assert key
        assert "__" not in key
        assert not key.startswith("_") and not key.endswith("_")
        assert all(c.islower() or c.isdigit() or c == "_" for c in key)


class TestSchema:
    """Test schema construction and record helpers."""

    def test_default_schema_order(self):
        schema = default_schema()
        assert len(schema) == 23
        assert schema.labels == list(FIELD_LABELS)
        assert schema[0] == SchemaField(label="Month ……………", key="month")
        assert schema[1].key == "name_of_the_block"

    def test_default_schema_keys_unique(self):
        keys = default_schema().keys
        assert len(set(keys)) == len(keys)

    def test_default_schema_is_cached(self):
        assert default_schema() is default_schema()

    def test_key_collision_fails_fast(self):
        with pytest.raises(DuplicateFieldKeyError, match="name_of_block"):
            build_schema(["Name of Block", "Name-of-Block?"])

    def test_duplicate_label_fails_fast(self):
        with pytest.raises(DuplicateFieldLabelError):
            build_schema(["Remarks", "Remarks"])

    def test_empty_key_fails_fast(self):
        with pytest.raises(EmptyFieldKeyError):
            build_schema(["Remarks", "???"])

    def test_schema_errors_share_base(self):
        with pytest.raises(SchemaError):
            build_schema(["A", "a"])

    def test_field_is_immutable(self):
        field = SchemaField(label="Remarks", key="remarks")
        with pytest.raises(Exception):
            field.key = "other"

    def test_field_for_key(self, small_schema):
        assert small_schema.field_for_key("remarks").label == "Remarks"
        assert small_schema.field_for_key("missing") is None

    def test_empty_record(self, small_schema):
        assert small_schema.empty_record() == {
            "name_of_the_block": "",
            "no_of_doctors_trained_on_saans": "",
            "remarks": "",
        }

    def test_build_record_overlays_and_drops_unknown(self, small_schema):
        record = small_schema.build_record({"remarks": "ok", "bogus": "x"})
        assert record == {
            "name_of_the_block": "",
            "no_of_doctors_trained_on_saans": "",
            "remarks": "ok",
        }

    def test_build_record_coerces_text(self, small_schema):
        record = small_schema.build_record({"no_of_doctors_trained_on_saans": 12, "remarks": None})
        assert record["no_of_doctors_trained_on_saans"] == "12"
        assert record["remarks"] == ""
