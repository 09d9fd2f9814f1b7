"""Data models for check_influxdb_query."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional


class Status(IntEnum):
    """Plugin status codes, ordered from best to worst."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class QuerySpec:
    """Everything needed to assemble one Flux query."""

    bucket: str
    measurement: str
    fields: List[str]
    host: str
    period: str
    aggregate: str
    fieldcon: str = ""
    tags: Dict[str, str] = field(default_factory=dict)
    fill: bool = True
    diff: bool = False


@dataclass(frozen=True)
class QueryResponse:
    """Raw outcome of the HTTP call."""

    success: bool
    body: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class ValuePoint:
    field: str
    value: float
    # cell text as InfluxDB sent it, used for plain output
    raw: str = field(default="", compare=False)


@dataclass(frozen=True)
class PluginResult:
    """Final check outcome, printed as one line."""

    status: Status
    label: str
    detail: str

    @property
    def line(self) -> str:
        return f"{self.label} {self.status.name}: {self.detail}"

    @property
    def exit_code(self) -> int:
        return int(self.status)
