"""Exporter — Turn a record set into a spreadsheet or CSV download."""

from __future__ import annotations

import io
import re

import pandas as pd

from expo_scraper.models.schemas import ExhibitorRecord, ExportFormat
from expo_scraper.utils.logging import get_logger

log = get_logger(__name__)

COLUMNS: dict[str, int] = {
    "Company Name": 40,
    "Booth": 15,
    "Website": 40,
    "Source": 15,
}
SHEET_NAME = "Exhibitors"

MEDIA_TYPES = {
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv; charset=utf-8",
}

_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]+")


def to_rows(records: list[ExhibitorRecord]) -> list[dict[str, str]]:
    """Flatten records into the export's fixed column set."""
    return [
        {
            "Company Name": r.company_name,
            "Booth": r.booth or "",
            "Website": r.website or "",
            "Source": r.source.value,
        }
        for r in records
    ]


def safe_filename(name: str, fmt: ExportFormat) -> str:
    stem = _UNSAFE_FILENAME_RE.sub("_", (name or "").strip()).strip("._") or "exhibitors"
    suffix = f".{fmt.value}"
    if stem.lower().endswith(suffix):
        stem = stem[: -len(suffix)]
    return f"{stem}{suffix}"


def export_records(records: list[ExhibitorRecord], fmt: ExportFormat = ExportFormat.XLSX) -> bytes:
    df = pd.DataFrame(to_rows(records), columns=list(COLUMNS))
    if fmt == ExportFormat.CSV:
        payload = df.to_csv(index=False).encode("utf-8-sig")
    else:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
            sheet = writer.sheets[SHEET_NAME]
            for idx, width in enumerate(COLUMNS.values()):
                sheet.column_dimensions[chr(ord("A") + idx)].width = width
        payload = buffer.getvalue()

    log.info("Exported %d records as %s (%d bytes)", len(df), fmt.value, len(payload))
    return payload
