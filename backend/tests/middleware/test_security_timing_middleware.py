import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient
import pytest

from studiosync.middleware import timing_asgi
from studiosync.middleware.security_headers_asgi import (
    SECURITY_HEADERS,
    SecurityHeadersMiddlewareASGI,
)
from studiosync.middleware.timing_asgi import TimingMiddlewareASGI


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddlewareASGI)
    app.add_middleware(TimingMiddlewareASGI)

    @app.get("/plain")
    def plain():
        return {"ok": True}

    @app.get("/framed")
    def framed():
        return JSONResponse({"ok": True}, headers={"X-Frame-Options": "SAMEORIGIN"})

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    return app


@pytest.fixture
def client():
    return TestClient(_app(), raise_server_exceptions=False)


def test_security_headers_added(client):
    response = client.get("/plain")
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


def test_existing_header_kept(client):
    assert client.get("/framed").headers["X-Frame-Options"] == "SAMEORIGIN"


def test_process_time_header(client):
    value = client.get("/plain").headers["X-Process-Time"]
    assert value.endswith("ms")
    assert float(value[:-2]) >= 0


def test_request_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=timing_asgi.__name__):
        client.get("/plain")
    assert any(record.getMessage().startswith("GET /plain 200") for record in caplog.records)


def test_slow_request_warning(client, caplog, monkeypatch):
    monkeypatch.setattr(timing_asgi, "SLOW_REQUEST_THRESHOLD_MS", -1)
    with caplog.at_level(logging.WARNING, logger=timing_asgi.__name__):
        client.get("/plain")
    assert any("Slow request: GET /plain" in record.getMessage() for record in caplog.records)


def test_unhandled_error_logged_and_reraised(client, caplog):
    with caplog.at_level(logging.ERROR, logger=timing_asgi.__name__):
        response = client.get("/boom")
    assert response.status_code == 500
    assert any("Error in request /boom" in record.getMessage() for record in caplog.records)
