"""Schema registry: the fixed SAANS field list and key derivation."""

import re
from functools import lru_cache
from typing import Iterable

from .models import Schema, SchemaField

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
KEY_SEPARATOR = "_"

FIELD_LABELS: tuple[str, ...] = (
    "Month ……………",
    "Name of the Block",
    "Name of Nodal Officer Incharge of SAANS 2025-26",
    "Whether SAANS 2025-26 was inaugurated at District Level?",
    "Number of Blocks that inaugurated SAANS 2025-26?",
    "No. of ASHAs trained on home visits for SAANS?",
    "No. of ANMS trained on SAANS?",
    "No. of Nursing Officers in PHCs, CHCs, Hospitals trained on SAANS?",
    "No. of Doctors trained on SAANS?",
    "No. of ASHAs that did house-to-house visits of under-five children?",
    "No. of under-five-children assessed by ASHAs for cough/difficulty in breathing/fast breathing?",
    "No. of under-five-children having symptoms and signs assessed by ANM/Staff Nurse/Medical Officer?",
    "No. of under-five-children administered pre-referral antibiotics/ORS/other medicines by ANM/Staff Nurse?",
    "No. of under-five-children referred to health facility by ASHA/ANM?",
    "No. of houses with at least 1 of the risk factors identified?",
    "No. of homes where counseling was done using M4M (Mother4Mother) approach?",
    "No. of under-five-children treated with cough syrup/ORS at community level?",
    "No. of under-five-children treated with Pneumonia treatment at community/PHC level?",
    "No. of under-five-children treated with Severe Pneumonia managed as per protocol?",
    "No. of under-five-children administered medications (antibiotics/ORS/other) as per guidelines?",
    "No. of Skill Station functional against approval",
    "Number of infants given PCV-1 vs number of infants eligible",
    "Number of infants given PCV-Booster vs number of infants eligible",
)


def derive_key(label: str) -> str:
    """
    Derive a stable machine key from a human-readable label.

    Lower-cases the label, collapses every run of non-alphanumeric characters
    into a single separator and trims separators from both ends. A label with
    no alphanumerics derives to the empty string.

    Examples:
        >>> derive_key("Name of the Block")
        'name_of_the_block'
        >>> derive_key("Month ……………")
        'month'
    """
    return _NON_ALNUM.sub(KEY_SEPARATOR, label.lower()).strip(KEY_SEPARATOR)


def build_schema(labels: Iterable[str]) -> Schema:
    """Build an ordered schema, failing fast on empty or colliding keys."""
    return Schema(SchemaField(label=label, key=derive_key(label)) for label in labels)


@lru_cache(maxsize=1)
def default_schema() -> Schema:
    """Return the SAANS 2025-26 reporting schema."""
    return build_schema(FIELD_LABELS)
