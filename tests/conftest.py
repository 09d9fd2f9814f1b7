from __future__ import annotations

import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.exc = exc
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_session():
    def _make(status_code: int = 200, text: str = "", exc: Exception | None = None) -> FakeSession:
        return FakeSession(FakeResponse(status_code, text), exc=exc)

    return _make


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch) -> None:
    monkeypatch.setattr("check_influxdb_query.config.load_dotenv", lambda *args, **kwargs: False)
    for name in (
        "INFLUXDB_V2_URL",
        "INFLUXDB_URL",
        "INFLUXDB_V2_TOKEN",
        "INFLUXDB_TOKEN",
        "INFLUXDB_V2_ORG",
        "INFLUXDB_ORG",
        "INFLUXDB_V2_BUCKET",
        "INFLUXDB_BUCKET",
    ):
        monkeypatch.delenv(name, raising=False)


SINGLE_CSV = (
    ",result,table,_start,_stop,_time,_value,_field,_measurement,cpu,host\r\n"
    ",_result,0,2021-08-01T00:00:00Z,2021-08-01T00:05:00Z,2021-08-01T00:05:00Z,12.5,"
    "usage_system,cpu,cpu-total,web01\r\n"
    "\r\n"
)

MULTI_CSV = (
    ",result,table,_start,_stop,_time,_value,_field,_measurement,host\r\n"
    ",_result,0,2021-08-01T00:00:00Z,2021-08-01T00:05:00Z,2021-08-01T00:03:00Z,5,read_bytes,diskio,web01\r\n"
    ",_result,0,2021-08-01T00:00:00Z,2021-08-01T00:05:00Z,2021-08-01T00:05:00Z,10,read_bytes,diskio,web01\r\n"
    ",_result,1,2021-08-01T00:00:00Z,2021-08-01T00:05:00Z,2021-08-01T00:03:00Z,7,write_bytes,diskio,web01\r\n"
    ",_result,1,2021-08-01T00:00:00Z,2021-08-01T00:05:00Z,2021-08-01T00:05:00Z,30,write_bytes,diskio,web01\r\n"
    "\r\n"
)


@pytest.fixture
def single_csv() -> str:
    return SINGLE_CSV


@pytest.fixture
def multi_csv() -> str:
    return MULTI_CSV
