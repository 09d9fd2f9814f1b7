"""Runs one check: build, query, interpret, evaluate."""

from __future__ import annotations

from typing import Optional
import logging

from .client import FluxQueryExecutor
from .config import PluginConfig
from .exceptions import ResultError
from .models import PluginResult, Status
from .query_builder import build_flux_query
from .results import extract_values, is_empty_body, parse_table
from .thresholds import build_label, evaluate, format_result

logger = logging.getLogger(__name__)

EMPTY_ANSWER = "Received empty answer! This happens when the query does not match any data."


def run_check(config: PluginConfig, executor: Optional[FluxQueryExecutor] = None) -> PluginResult:
    label = build_label(config.measurement, config.fields, config.tags)
    query = build_flux_query(config.query_spec())
    logger.debug("Flux query:\n%s", query)

    if executor is None:
        executor = FluxQueryExecutor(
            url=config.url, token=config.token, org=config.org, timeout=config.timeout
        )
    with executor:
        response = executor.execute(query)

    if not response.success:
        return PluginResult(Status.UNKNOWN, label, response.body)
    if is_empty_body(response.body):
        return _empty_result(config, label)

    try:
        points = extract_values(parse_table(response.body), default_field=config.fields[0])
    except ResultError as exc:
        logger.info("Could not interpret answer: %s", exc)
        return PluginResult(Status.UNKNOWN, label, str(exc))
    if not points:
        return _empty_result(config, label)

    status = evaluate(points, config.warning, config.critical, config.thresfun)
    return PluginResult(status, label, format_result(points, as_bytes=config.bytes))


def _empty_result(config: PluginConfig, label: str) -> PluginResult:
    status = Status.OK if config.no_unknown_when_empty else Status.UNKNOWN
    return PluginResult(status, label, EMPTY_ANSWER)
