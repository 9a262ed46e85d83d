import logging

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from helium.core.logging_config import TRACE_LOGGER_NAME, CorrelationIdFilter, LogService, configure_logging
from helium.middleware.endpoint_logger import endpoint_logger
from helium.middleware.request_id import request_id_middleware


class RecordingLog(LogService):
    def __init__(self):
        super().__init__()
        self.entries = []

    def trace(self, message, correlation_id=None):
        self.entries.append((message, correlation_id))


@pytest.fixture
def log():
    return RecordingLog()


@pytest.fixture
def client(log):
    app = FastAPI()
    app.middleware("http")(endpoint_logger(log))
    app.middleware("http")(request_id_middleware)

    @app.get("/forbidden")
    async def forbidden():
        raise HTTPException(status_code=403, detail="nope")

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    return TestClient(app)


def test_failed_response_is_logged_once(client, log):
    resp = client.get("/forbidden?x=1", headers={"X-Request-ID": "corr-42"})
    assert resp.status_code == 403

    assert len(log.entries) == 1
    message, correlation_id = log.entries[0]
    assert message == "GET /forbidden?x=1  Result: 403"
    assert correlation_id == "corr-42"


def test_successful_response_is_not_logged(client, log):
    resp = client.get("/ok")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert log.entries == []


def test_unknown_route_is_logged_with_generated_id(client, log):
    resp = client.get("/missing")
    assert resp.status_code == 404

    message, correlation_id = log.entries[0]
    assert message.endswith("Result: 404")
    assert correlation_id == resp.headers["X-Request-ID"]


def test_unhandled_exception_is_logged_as_500(log):
    app = FastAPI()
    app.middleware("http")(endpoint_logger(log))
    app.middleware("http")(request_id_middleware)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    resp = TestClient(app, raise_server_exceptions=False).get("/boom", headers={"X-Request-ID": "corr-500"})
    assert resp.status_code == 500

    assert log.entries == [("GET /boom  Result: 500", "corr-500")]


def test_log_service_trace_tags_correlation_id(caplog):
    with caplog.at_level(logging.INFO, logger=TRACE_LOGGER_NAME):
        LogService().trace("GET /api/movies/x  Result: 403", "corr-7")
        LogService().trace("no request")

    first, second = caplog.records
    assert first.getMessage() == "GET /api/movies/x  Result: 403"
    assert first.correlation_id == "corr-7"
    assert second.correlation_id == "-"


def test_configure_logging_installs_one_handler():
    configure_logging("INFO")
    configure_logging("DEBUG")

    root = logging.getLogger()
    ours = [h for h in root.handlers if any(isinstance(f, CorrelationIdFilter) for f in h.filters)]
    assert len(ours) == 1
    assert root.level == logging.DEBUG
    root.setLevel(logging.INFO)
