from __future__ import annotations

import csv
import io
from typing import Iterable

from ..core.constants import EXPORT_HEADERS
from .model import ExportRow


def render_csv(rows: Iterable[ExportRow]) -> str:
    """Write export rows as CSV text with the fixed header row."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for row in rows:
        writer.writerow(row.as_list())
    return out.getvalue()
