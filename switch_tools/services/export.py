"""CSV export of the interface status table."""

from __future__ import annotations

import csv
import io
from datetime import datetime
from pathlib import Path
from typing import Iterable, TextIO

from switch_tools.models.interfaces import INTERFACE_STATUS_FIELDS, InterfaceStatus
from switch_tools.utils.logging import get_logger

log = get_logger(__name__)


def write_interface_csv(records: Iterable[InterfaceStatus], fp: TextIO) -> int:
    """Write a header row and one row per record; return the row count."""
    writer = csv.writer(fp)
    writer.writerow(INTERFACE_STATUS_FIELDS)
    count = 0
    for rec in records:
        writer.writerow(rec.as_row())
        count += 1
    return count


def interfaces_to_csv(records: Iterable[InterfaceStatus]) -> str:
    buf = io.StringIO()
    write_interface_csv(records, buf)
    return buf.getvalue()


def export_interface_csv(
    records: Iterable[InterfaceStatus],
    directory: str | Path,
) -> Path:
    """Write ``interfaces_<timestamp>.csv`` under *directory*."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"interfaces_{datetime.now().strftime('%Y%m%d-%H%M%S')}.csv"
    with path.open("w", newline="", encoding="utf-8") as fp:
        rows = write_interface_csv(records, fp)
    log.info("export.csv_written", path=str(path), rows=rows)
    return path
