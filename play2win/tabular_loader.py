"""Readers turning the raw match data file into header-keyed records."""
from __future__ import annotations

import csv
import io
import logging
from typing import Dict, List, Optional

from .config import setup_logger
from .errors import SourceUnavailableError

_logger = setup_logger(__name__)

Record = Dict[str, str]


def _split_lines(text: str) -> List[str]:
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").split("\n")


def parse_delimited(
    text: str,
    delimiter: str = ",",
    logger: Optional[logging.Logger] = None,
) -> List[Record]:
    """
    Split ``text`` into records keyed by the header row.

    Splitting is positional on ``delimiter``; quoting is not interpreted.
    Rows whose value count differs from the header are skipped with a
    warning, blank lines are skipped silently.
    """
    log = logger or _logger
    lines = _split_lines(text or "")
    if not lines or not lines[0].strip():
        return []

    headers = [h.strip() for h in lines[0].split(delimiter)]
    records: List[Record] = []

    for index, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        values = line.split(delimiter)
        if len(values) != len(headers):
            log.warning(
                "csv_row_skipped: line=%d expected=%d got=%d row=%r",
                index,
                len(headers),
                len(values),
                line,
            )
            continue
        records.append({header: values[pos].strip() for pos, header in enumerate(headers)})

    return records


def parse_csv_rows(text: str) -> List[Record]:
    """Parse quoted CSV into records, skipping empty lines.

    Short rows are padded with empty strings and surplus values are dropped,
    so every record carries exactly the header's keys.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    reader = csv.reader(io.StringIO(text))
    headers: Optional[List[str]] = None
    rows: List[Record] = []
    for values in reader:
        if not values or not any(v.strip() for v in values):
            continue
        if headers is None:
            headers = [h.strip() for h in values]
            continue
        padded = list(values[: len(headers)]) + [""] * (len(headers) - len(values))
        rows.append({header: padded[pos].strip() for pos, header in enumerate(headers)})
    return rows


def read_source_text(path: str) -> str:
    """Return the file content or raise SourceUnavailableError."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        _logger.error("match_data_read_failed: path=%s error=%s", path, exc)
        raise SourceUnavailableError(path, exc) from exc


def load_records(
    path: str,
    delimiter: str = ",",
    logger: Optional[logging.Logger] = None,
) -> List[Record]:
    return parse_delimited(read_source_text(path), delimiter=delimiter, logger=logger)


__all__ = [
    "Record",
    "load_records",
    "parse_csv_rows",
    "parse_delimited",
    "read_source_text",
]
