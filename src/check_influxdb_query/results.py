"""Interpretation of the CSV returned by the InfluxDB query API.

InfluxDB answers with one header row followed by data rows; each data row
starts with an empty cell and the result name (``_result``). Column positions
are not stable between versions and queries, so they are resolved from the
header on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence
import csv
import io
import logging
import math

from .exceptions import ResultError
from .models import ValuePoint

logger = logging.getLogger(__name__)

RESULT_MARKER = "_result"
# header + at most two more rows (data row and trailing blank line)
SINGLE_SERIES_MAX_ROWS = 3


@dataclass(frozen=True)
class ResultSchema:
    """Positions of the columns the plugin reads."""

    value: Optional[int] = None
    field: Optional[int] = None
    stop: Optional[int] = None
    time: Optional[int] = None

    _COLUMNS = {"_value": "value", "_field": "field", "_stop": "stop", "_time": "time"}

    @classmethod
    def from_header(cls, header: Sequence[str]) -> "ResultSchema":
        positions = {}
        for i, name in enumerate(header):
            attr = cls._COLUMNS.get(name)
            if attr and attr not in positions:
                positions[attr] = i
        return cls(**positions)

    def require(self, *names: str) -> None:
        missing = [f"_{n}" for n in names if getattr(self, n) is None]
        if missing:
            raise ResultError(f"Missing column(s) in answer: {', '.join(missing)}")


def is_empty_body(body: Optional[str]) -> bool:
    return not body or not body.strip()


def parse_table(body: str) -> List[List[str]]:
    try:
        rows = list(csv.reader(io.StringIO(body)))
    except csv.Error as exc:
        raise ResultError(f"Could not parse answer as CSV: {exc}") from exc
    if not rows:
        raise ResultError("Answer contains no rows")
    return rows


def extract_values(rows: List[List[str]], default_field: str) -> List[ValuePoint]:
    """Turn a parsed table into value points.

    A table with a single series yields exactly one point named after
    ``default_field``. Larger tables yield one point per ``_result`` row
    whose ``_stop`` equals its ``_time``, i.e. the last window of each series.
    """
    schema = ResultSchema.from_header(rows[0])
    logger.debug("Resolved columns: %s", schema)

    if len(rows) <= SINGLE_SERIES_MAX_ROWS:
        schema.require("value")
        if len(rows) < 2 or len(rows[1]) <= schema.value:
            raise ResultError("Answer contains no data row")
        return [_point(default_field, rows[1][schema.value])]

    schema.require("value", "field", "stop", "time")
    width = max(schema.value, schema.field, schema.stop, schema.time)
    points = []
    for row in rows:
        if len(row) < 2 or row[1] != RESULT_MARKER:
            continue
        if len(row) <= width:
            logger.debug("Skipping short row: %s", row)
            continue
        if row[schema.stop] != row[schema.time]:
            continue
        points.append(_point(row[schema.field], row[schema.value]))
    return points


def _point(field: str, raw: str) -> ValuePoint:
    return ValuePoint(field, _to_float(raw), raw=raw.strip())


def _to_float(raw: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ResultError(f"Value is not numeric: {raw!r}") from exc
    if not math.isfinite(value):
        raise ResultError(f"Value is not a finite number: {raw!r}")
    return value
