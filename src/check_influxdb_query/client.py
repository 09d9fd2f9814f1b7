"""HTTP executor for Flux queries against the InfluxDB v2 API."""

from __future__ import annotations

from typing import Optional
import logging

import requests

from .exceptions import QueryError
from .models import QueryResponse
from .timeout import Deadline

logger = logging.getLogger(__name__)

DEFAULT_URL = "http://127.0.0.1:8086"
DEFAULT_TIMEOUT = 60
QUERY_PATH = "/api/v2/query"


class FluxQueryExecutor:
    """Posts a single Flux query and returns the raw CSV answer."""

    def __init__(
        self,
        url: str,
        token: str,
        org: str,
        timeout: Optional[int] = None,
        session: Optional[object] = None,
    ) -> None:
        self._url = (url or DEFAULT_URL).rstrip("/")
        self._token = token
        self._org = org
        self._timeout = timeout if timeout else DEFAULT_TIMEOUT
        self._session = session if session is not None else requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self._url}{QUERY_PATH}"

    def headers(self) -> dict:
        return {
            "Authorization": f"Token {self._token}",
            "Accept": "application/csv",
            "Content-Type": "application/vnd.flux",
        }

    def execute(self, query: str) -> QueryResponse:
        """Run the query; transport errors become an unsuccessful response."""
        try:
            response = self._post(query)
        except QueryError as exc:
            logger.info("Query failed: %s", exc)
            return QueryResponse(success=False, body=str(exc))

        body = response.text or ""
        logger.debug("Response (%s):\n%s", response.status_code, body)
        if not 200 <= response.status_code < 300:
            logger.info("InfluxDB answered with status %s", response.status_code)
            return QueryResponse(success=False, body=body, status_code=response.status_code)
        return QueryResponse(success=True, body=body, status_code=response.status_code)

    def close(self) -> None:
        if hasattr(self._session, "close"):
            self._session.close()

    def _post(self, query: str):
        params = {"org": self._org}
        message = f"Timeout after {self._timeout}s querying {self.endpoint}"
        logger.debug("POST %s org=%s timeout=%ss", self.endpoint, self._org, self._timeout)
        try:
            # timeout= is per socket operation, Deadline bounds the whole call
            with Deadline(self._timeout, message=message):
                return self._session.post(
                    self.endpoint,
                    params=params,
                    data=query.encode("utf-8"),
                    headers=self.headers(),
                    timeout=self._timeout,
                )
        except requests.exceptions.Timeout as exc:
            raise QueryError(message) from exc
        except requests.exceptions.RequestException as exc:
            raise QueryError(str(exc)) from exc

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
