"""Configuration management for SAANS Capture."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Database path for the persisted record collection
    database_path: Path = Path(os.getenv("DATABASE_PATH", "data/saans.db"))

    # Fixed key the record collection is stored under
    storage_namespace: str = os.getenv("STORAGE_NAMESPACE", "saans_records_v1")

    # Spreadsheet export
    export_filename: Path = Path(os.getenv("EXPORT_FILENAME", "SAANS_Data.xlsx"))
    export_sheet_name: str = os.getenv("EXPORT_SHEET_NAME", "SAANS_Data")


settings = Settings()
