"""Data models for import reconciliation."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

ImportRow = dict[str, Any]


class MatchTier(str, Enum):
    """How a schema field was resolved against an import row's headers."""

    EXACT_LABEL = "exact_label"  # Header equals the field label byte for byte
    EXACT_KEY = "exact_key"  # Header equals the derived field key
    NORMALIZED_LABEL = "normalized_label"  # Header equals the label ignoring case/outer whitespace
    NONE = "none"  # No header matched; value defaults to empty


class Advisory(str, Enum):
    """Non-fatal conditions reported alongside a result."""

    NO_DATA_FOUND = "no_data_found"


class FieldMatch(BaseModel):
    """Resolution of one schema field against one import row."""

    field_key: str
    tier: MatchTier
    header: Optional[str] = None  # Source header, None when unmatched
    value: str = ""

    @property
    def matched(self) -> bool:
        return self.tier != MatchTier.NONE


class ReconcileReport(BaseModel):
    """Summary of how headers were matched across all rows."""

    row_count: int = 0
    tier_counts: dict[MatchTier, int] = Field(
        default_factory=lambda: {tier: 0 for tier in MatchTier}
    )
    unmatched_labels: list[str] = Field(default_factory=list)  # Labels never matched in any row


class ReconcileResult(BaseModel):
    """Records produced from import rows, in input order."""

    records: list[dict[str, str]] = Field(default_factory=list)
    advisory: Optional[Advisory] = None
    report: ReconcileReport = Field(default_factory=ReconcileReport)

    @property
    def no_data_found(self) -> bool:
        return self.advisory == Advisory.NO_DATA_FOUND
