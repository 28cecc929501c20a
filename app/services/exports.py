"""
CSV export of record collections.
"""

import csv
import io
import json
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional


def _cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def export_csv(rows: Iterable[Dict], headers: Optional[List[str]] = None) -> str:
    """
    Build CSV text from dict rows.

    The header row comes from `headers` or the keys of the first row. None
    becomes an empty cell, dates are ISO formatted, dicts and lists are
    JSON-encoded. Cells containing commas, quotes or newlines are quoted.
    Returns an empty string when there are no rows.
    """
    rows = list(rows)
    if not rows:
        return ""
    headers = headers or list(rows[0].keys())

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([_cell(row.get(header)) for header in headers])
    return buffer.getvalue().rstrip("\n")


def export_filename(name: str, today: Optional[date] = None) -> str:
    return f"{name}_{(today or date.today()).isoformat()}.csv"
