from __future__ import annotations

from check_influxdb_query.models import QuerySpec
from check_influxdb_query.query_builder import build_field_filter, build_flux_query


def _spec(**overrides) -> QuerySpec:
    values = dict(
        bucket="telegraf",
        measurement="cpu",
        fields=["usage_system"],
        host="web01",
        period="5m",
        aggregate="mean",
    )
    values.update(overrides)
    return QuerySpec(**values)


def test_flux_query_builder_default_shape() -> None:
    q = build_flux_query(_spec())

    assert q.splitlines() == [
        'from(bucket:"telegraf")',
        "|> range(start: -5m)",
        '|> filter(fn: (r) => r["_measurement"] == "cpu")',
        '|> filter(fn: (r) =>  r["_field"] == "usage_system" )',
        '|> filter(fn: (r) => r["host"] == "web01")',
        '|> fill(column:"_value", value: 0)',
        "|> aggregateWindow(every: 5m, fn: mean)",
    ]
    assert q.count("aggregateWindow") == 1
    assert q.count("fill(") == 1
    assert q.count("difference(") == 0


def test_flux_query_builder_tags_between_fields_and_host() -> None:
    q = build_flux_query(_spec(tags={"cpu": "cpu-total", "dc": "fra"}))
    lines = q.splitlines()

    field_pos = next(i for i, l in enumerate(lines) if '"_field"' in l)
    host_pos = next(i for i, l in enumerate(lines) if 'r["host"]' in l)
    tag_lines = [i for i, l in enumerate(lines) if 'r["cpu"]' in l or 'r["dc"]' in l]

    assert len(tag_lines) == 2
    assert all(field_pos < i < host_pos for i in tag_lines)
    assert '|> filter(fn: (r) => r["cpu"] == "cpu-total")' in lines


def test_flux_query_builder_nofill_and_diff() -> None:
    q = build_flux_query(_spec(fill=False, diff=True))
    lines = q.splitlines()

    assert "fill(" not in q
    assert lines[-2] == '|> difference(nonNegative: false, columns: ["_value"])'
    assert lines[-1].startswith("|> aggregateWindow(")


def test_field_filter_joins_with_fieldcon_verbatim() -> None:
    expr = build_field_filter(["read_bytes", "write_bytes"], "or")
    assert expr == ' r["_field"] == "read_bytes" or r["_field"] == "write_bytes" '


def test_field_filter_without_fieldcon_is_passed_through() -> None:
    expr = build_field_filter(["a", "b"])
    assert expr == ' r["_field"] == "a"  r["_field"] == "b" '


def test_flux_query_builder_escapes_quotes() -> None:
    q = build_flux_query(_spec(host='we"b'))
    assert 'r["host"] == "we\\"b"' in q
