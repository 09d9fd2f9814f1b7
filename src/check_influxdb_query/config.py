"""Configuration loading and validation for check_influxdb_query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import math
import os

from dotenv import load_dotenv

from .client import DEFAULT_URL
from .exceptions import ConfigurationError
from .models import QuerySpec

MAX_VERBOSITY = 3


def load_env() -> None:
    """Load environment variables from a .env file if present."""
    load_dotenv()


def _env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def parse_tags(items: Optional[Sequence[str]]) -> Dict[str, str]:
    """Turn repeated ``key=value`` options into a dict, keeping their order."""
    tags: Dict[str, str] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigurationError(f"Invalid tag '{item}', expected key=value")
        tags[key] = value
    return tags


@dataclass(frozen=True)
class PluginConfig:
    host: str
    bucket: str
    org: str
    measurement: str
    fields: List[str]
    period: str
    aggregate: str
    token: str
    warning: float
    critical: float
    url: str = DEFAULT_URL
    fieldcon: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    thresfun: Optional[str] = None
    diff: bool = False
    bytes: bool = False
    debug: bool = False
    nofill: bool = False
    no_unknown_when_empty: bool = False
    timeout: Optional[int] = None
    verbose: int = 0

    @classmethod
    def from_args(cls, args: Any) -> "PluginConfig":
        """Build from an argparse namespace, filling gaps from the environment."""
        load_env()
        url = args.url or _env("INFLUXDB_V2_URL", "INFLUXDB_URL") or DEFAULT_URL
        config = cls(
            host=args.host or "",
            bucket=args.bucket or _env("INFLUXDB_V2_BUCKET", "INFLUXDB_BUCKET") or "",
            org=args.org or _env("INFLUXDB_V2_ORG", "INFLUXDB_ORG") or "",
            measurement=args.measurement or "",
            fields=[f for f in (args.field or []) if f],
            period=args.period or "",
            aggregate=args.aggregate or "",
            token=args.token or _env("INFLUXDB_V2_TOKEN", "INFLUXDB_TOKEN") or "",
            warning=args.warning,
            critical=args.critical,
            url=url.rstrip("/"),
            fieldcon=args.fieldcon,
            tags=parse_tags(args.tag),
            thresfun=args.thresfun,
            diff=bool(args.diff),
            bytes=bool(args.bytes),
            debug=bool(args.debug),
            nofill=bool(args.nofill),
            no_unknown_when_empty=bool(args.no_unknown_when_empty),
            timeout=args.timeout,
            verbose=min(args.verbose or 0, MAX_VERBOSITY),
        )
        config.validate()
        return config

    def validate(self) -> None:
        required = {
            "host": self.host,
            "bucket": self.bucket,
            "org": self.org,
            "measurement": self.measurement,
            "period": self.period,
            "aggregate": self.aggregate,
            "token": self.token,
        }
        missing = [f"--{name}" for name, value in required.items() if not value]
        if not self.fields:
            missing.append("--field")
        if self.warning is None:
            missing.append("--warning")
        if self.critical is None:
            missing.append("--critical")
        if missing:
            raise ConfigurationError(f"Missing required option(s): {', '.join(missing)}")

        if len(self.fields) > 1 and not self.fieldcon:
            raise ConfigurationError("--fieldcon is required when more than one --field is given")
        for name in ("warning", "critical"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"--{name} must be a finite number")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("--timeout must be greater than zero")

    def query_spec(self) -> QuerySpec:
        return QuerySpec(
            bucket=self.bucket,
            measurement=self.measurement,
            fields=list(self.fields),
            host=self.host,
            period=self.period,
            aggregate=self.aggregate,
            fieldcon=self.fieldcon or "",
            tags=dict(self.tags),
            fill=not self.nofill,
            diff=self.diff,
        )
