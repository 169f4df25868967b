"""Extraction of measurement rows from the scale monitoring page."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterator, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from models.records import MeasurementRecord

logger = logging.getLogger(__name__)

HEADER_ROW_COUNT = 2
EXPECTED_CELL_COUNT = 4

REASON_CELL_COUNT = "unexpected cell count"
REASON_DATE = "invalid date"
REASON_NUMBER = "invalid numeric value"
REASON_ERROR = "unexpected error"

_DATE_PATTERN = re.compile(r"(\d{4})\.(\d{2})\.(\d{2})\. (\d{2}):(\d{2}):(\d{2})")


@dataclass(frozen=True)
class ParsedRow:
    row_index: int
    record: MeasurementRecord


@dataclass(frozen=True)
class SkippedRow:
    row_index: int
    reason: str
    raw_text: str


RowOutcome = Union[ParsedRow, SkippedRow]


def parse_decimal(text: str) -> float:
    """Parse a decimal cell that may use a comma as the fractional separator.

    Raises ``ValueError`` when the value is not a finite number.
    """
    value = float(text.strip().replace(",", "."))
    if not math.isfinite(value):
        raise ValueError(f"Non-finite value {text!r}")
    return value


def parse_timestamp(text: str, tz: Optional[tzinfo] = None) -> int:
    """Convert ``YYYY.MM.DD. HH:MM:SS`` into epoch milliseconds.

    The components are wall-clock time in ``tz``, or in the process local
    time zone when ``tz`` is ``None``.
    """
    match = _DATE_PATTERN.search(text)
    if match is None:
        raise ValueError(f"Unrecognised date {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    moment = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    return int(round(moment.timestamp() * 1000))


def _row_text(row: Tag) -> str:
    return " ".join(row.get_text(" ").split())


def _parse_row(row_index: int, row: Tag, tz: Optional[tzinfo]) -> RowOutcome:
    cells = row.find_all("td")
    if len(cells) != EXPECTED_CELL_COUNT:
        return SkippedRow(row_index, REASON_CELL_COUNT, _row_text(row))

    date_text, weight_text, battery_text, temp_text = (cell.get_text().strip() for cell in cells)

    try:
        timestamp = parse_timestamp(date_text, tz)
    except ValueError:
        return SkippedRow(row_index, REASON_DATE, _row_text(row))

    try:
        weight = parse_decimal(weight_text)
        battery = parse_decimal(battery_text)
        temp = parse_decimal(temp_text)
    except ValueError:
        return SkippedRow(row_index, REASON_NUMBER, _row_text(row))

    record = MeasurementRecord.build(
        date=date_text,
        timestamp=timestamp,
        weight=weight,
        battery=battery,
        temp=temp,
    )
    return ParsedRow(row_index, record)


def iter_row_outcomes(html: str, tz: Optional[tzinfo] = None) -> Iterator[RowOutcome]:
    """Yield one outcome per data row of the last table on the page."""
    soup = BeautifulSoup(html, "html.parser")
    tables = soup.find_all("table")
    if not tables:
        return

    rows = tables[-1].find_all("tr")
    for row_index, row in enumerate(rows):
        if row_index < HEADER_ROW_COUNT:
            continue
        try:
            outcome = _parse_row(row_index, row, tz)
        except Exception:
            raw_text = _row_text(row)
            logger.exception("Error parsing row: %s", raw_text, extra={"row_index": row_index})
            outcome = SkippedRow(row_index, REASON_ERROR, raw_text)
        yield outcome


def parse_page(html: str, tz: Optional[tzinfo] = None) -> List[MeasurementRecord]:
    """Return the measurement records found on the page, in page order."""
    records: List[MeasurementRecord] = []
    for outcome in iter_row_outcomes(html, tz):
        if isinstance(outcome, ParsedRow):
            records.append(outcome.record)
            continue
        level = logging.DEBUG if outcome.reason == REASON_CELL_COUNT else logging.WARNING
        logger.log(
            level,
            "Skipping row: %s",
            outcome.raw_text,
            extra={"row_index": outcome.row_index, "reason": outcome.reason},
        )
    return records
