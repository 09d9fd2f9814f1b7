"""Flux query builder."""

from __future__ import annotations

from typing import List

from .models import QuerySpec


def build_flux_query(spec: QuerySpec) -> str:
    """Assemble the Flux pipeline for a check.

    Clause order is fixed: bucket, range, measurement, fields, tags, host,
    then the optional fill and difference steps and the final aggregate.
    """
    query = [
        f'from(bucket:"{_quote(spec.bucket)}")',
        f"|> range(start: -{spec.period})",
        f'|> filter(fn: (r) => r["_measurement"] == "{_quote(spec.measurement)}")',
        f"|> filter(fn: (r) => {build_field_filter(spec.fields, spec.fieldcon)})",
    ]
    for k, v in spec.tags.items():
        query.append(f'|> filter(fn: (r) => r["{_quote(k)}"] == "{_quote(v)}")')
    query.append(f'|> filter(fn: (r) => r["host"] == "{_quote(spec.host)}")')
    if spec.fill:
        query.append('|> fill(column:"_value", value: 0)')
    if spec.diff:
        query.append('|> difference(nonNegative: false, columns: ["_value"])')
    query.append(f"|> aggregateWindow(every: {spec.period}, fn: {spec.aggregate})")
    return "\n".join(query)


def build_field_filter(fields: List[str], fieldcon: str = "") -> str:
    # fieldcon goes in verbatim, e.g. "or" / "and"
    return (fieldcon or "").join([f' r["_field"] == "{_quote(f)}" ' for f in fields])


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
