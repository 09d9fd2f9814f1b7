"""check_influxdb_query package."""

__version__ = "0.0.2"

from .check import run_check  # noqa: E402
from .client import FluxQueryExecutor  # noqa: E402
from .config import PluginConfig  # noqa: E402
from .exceptions import (  # noqa: E402
    ConfigurationError,
    PluginError,
    QueryError,
    ResultError,
)
from .models import PluginResult, QueryResponse, QuerySpec, Status, ValuePoint  # noqa: E402
from .query_builder import build_flux_query  # noqa: E402

__all__ = [
    "__version__",
    "run_check",
    "FluxQueryExecutor",
    "PluginConfig",
    "ConfigurationError",
    "PluginError",
    "QueryError",
    "ResultError",
    "PluginResult",
    "QueryResponse",
    "QuerySpec",
    "Status",
    "ValuePoint",
    "build_flux_query",
]
