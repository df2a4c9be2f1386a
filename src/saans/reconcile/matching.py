"""Tiered header matching between schema fields and import rows."""

from typing import Mapping, Any

from ..schema import SchemaField, to_text
from .models import FieldMatch, MatchTier


def normalize_header(header: str) -> str:
    """Lower-case and trim surrounding whitespace for loose comparison."""
    return header.strip().lower()


def match_field(field: SchemaField, row: Mapping[str, Any]) -> FieldMatch:
    """
    Resolve a single schema field against an import row.

    Tiers are tried in order and the first hit wins:
    1. a header equal to the field label
    2. a header equal to the field key
    3. the first header, in row order, equal to the label once both are
       lower-cased and trimmed

    A matched header keeps its value even when that value is empty. With no
    match the field resolves to the empty string.
    """
    if field.label in row:
        return FieldMatch(
            field_key=field.key,
            tier=MatchTier.EXACT_LABEL,
            header=field.label,
            value=to_text(row[field.label]),
        )

    if field.key in row:
        return FieldMatch(
            field_key=field.key,
            tier=MatchTier.EXACT_KEY,
            header=field.key,
            value=to_text(row[field.key]),
        )

    wanted = normalize_header(field.label)
    for header, value in row.items():
        if isinstance(header, str) and normalize_header(header) == wanted:
            return FieldMatch(
                field_key=field.key,
                tier=MatchTier.NORMALIZED_LABEL,
                header=header,
                value=to_text(value),
            )

    return FieldMatch(field_key=field.key, tier=MatchTier.NONE)
