"""Exceptions for check_influxdb_query."""

class PluginError(Exception):
    """Base exception for check_influxdb_query."""


class ConfigurationError(PluginError):
    """Command line options or environment are incomplete or invalid."""


class QueryError(PluginError):
    """Sending the Flux query to InfluxDB failed."""


class ResultError(PluginError):
    """The query response could not be interpreted."""


class QueryTimeoutError(QueryError):
    """The query did not finish within the configured timeout."""
