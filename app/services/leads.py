"""
CSV import of leads.

The first row holds the headers; they are matched case-insensitively and
only name, email, phone, company, source, status and notes are read. Rows
without a name are skipped and unknown statuses import as "new".
"""

import csv
import io
from typing import Dict, List, Tuple

from app.analytics.status import LEAD_STATUSES

IMPORT_COLUMNS = {
    "name": 255,
    "email": 255,
    "phone": 30,
    "company": 255,
    "source": 100,
    "notes": None,
}


class LeadImportError(ValueError):
    """The upload could not be turned into leads."""


def normalize_status(value) -> str:
    status = (value or "").strip().lower()
    return status if status in LEAD_STATUSES else "new"


def _clean(value, max_length):
    text = (value or "").strip()
    if not text:
        return None
    return text[:max_length] if max_length else text


def parse_lead_rows(content: str) -> Tuple[List[Dict], int]:
    """
    Turn CSV text into lead field dicts.

    Returns:
        (leads, skipped) where skipped counts rows without a name

    Raises:
        LeadImportError: If the file has no data rows or no row has a name
    """
    reader = csv.DictReader(io.StringIO(content))
    rows = [
        {(key or "").strip().lower(): value for key, value in row.items() if isinstance(value, str)}
        for row in reader
    ]
    if not rows:
        raise LeadImportError("The file appears to be empty.")

    leads = []
    for row in rows:
        lead = {field: _clean(row.get(field), max_length) for field, max_length in IMPORT_COLUMNS.items()}
        if not lead["name"]:
            continue
        lead["status"] = normalize_status(row.get("status"))
        leads.append(lead)

    if not leads:
        raise LeadImportError("No valid leads found. Make sure the file has a 'name' column.")
    return leads, len(rows) - len(leads)
