"""SAANS Capture - schema-driven survey records with spreadsheet reconciliation."""

__version__ = "0.1.0"
