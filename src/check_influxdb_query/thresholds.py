"""Threshold evaluation and output formatting."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from humanfriendly import format_size

from .models import Status, ValuePoint

SUM = "sum"


def _round2(value: float) -> float:
    return float(f"{value:.2f}")


def check_threshold(value: float, warning: float, critical: float) -> Status:
    """Compare one value at two decimal precision; equal is not a breach."""
    rounded = _round2(value)
    if rounded > _round2(critical):
        return Status.CRITICAL
    if rounded > _round2(warning):
        return Status.WARNING
    return Status.OK


def evaluate(
    points: List[ValuePoint],
    warning: float,
    critical: float,
    thresfun: Optional[str] = None,
) -> Status:
    """Worst status over all points, or the status of their sum in ``sum`` mode."""
    if not points:
        raise ValueError("points must contain at least one value")
    if len(points) > 1 and thresfun == SUM:
        return check_threshold(sum(p.value for p in points), warning, critical)
    return max(check_threshold(p.value, warning, critical) for p in points)


def format_value(value: float, as_bytes: bool = False) -> str:
    value = float(value)
    if value.is_integer():
        value = int(value)
    if as_bytes:
        sign = "-" if value < 0 else ""
        return sign + format_size(abs(value), binary=True)
    return str(value)


def format_result(points: Iterable[ValuePoint], as_bytes: bool = False) -> str:
    return ",".join([f"{p.field}={_render(p, as_bytes)}" for p in points])


def _render(point: ValuePoint, as_bytes: bool) -> str:
    if point.raw and not as_bytes:
        return point.raw
    return format_value(point.value, as_bytes)


def build_label(measurement: str, fields: Iterable[str], tags: Optional[Dict[str, str]] = None) -> str:
    """e.g. cpu, [usage_system], {cpu: cpu-total} -> CPU_USAGE_SYSTEM_CPU_CPU-TOTAL"""
    parts = [measurement, *fields]
    if tags:
        parts.extend([f"{k}_{v}" for k, v in tags.items()])
    return "_".join(parts).upper()
