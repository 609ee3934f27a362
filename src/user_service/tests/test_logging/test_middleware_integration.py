import json
import logging
import uuid

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from user_service.core.logging.builder import setup_logging
from user_service.core.logging.middleware import RequestIDMiddleware

from ..conftest import make_test_settings


@pytest.fixture
def restore_logging():
    yield
    # runs after capsys has put the real stderr back
    setup_logging(make_test_settings())


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("user_service").info("handling hello")
        return {"ok": True}

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    return app


def _json_lines(text: str) -> list[dict]:
    records = []
    for line in text.strip().splitlines():
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError:
            continue
    return records


def test_request_id_in_response_and_logs(restore_logging, tmp_path, capsys):
    setup_logging(make_test_settings(LOG_FORMAT="json", LOG_LEVEL="INFO", ENV="production", LOG_DIR=tmp_path))

    resp = TestClient(_app()).get("/hello")

    assert resp.status_code == 200
    rid = resp.headers.get("X-Request-ID")
    assert rid is not None

    records = _json_lines(capsys.readouterr().err)
    assert any(r.get("request_id") == rid and r.get("message") == "handling hello" for r in records)


def test_incoming_request_id_is_logged(restore_logging, tmp_path, capsys):
    incoming = str(uuid.uuid4())
    setup_logging(make_test_settings(LOG_FORMAT="json", LOG_LEVEL="INFO", LOG_DIR=tmp_path))

    resp = TestClient(_app()).get("/hello", headers={"X-Request-ID": incoming})

    assert resp.headers["X-Request-ID"] == incoming
    records = _json_lines(capsys.readouterr().err)
    assert any(r.get("request_id") == incoming for r in records)


def test_unhandled_error_gets_500_with_request_id(restore_logging, tmp_path, capsys):
    setup_logging(make_test_settings(LOG_FORMAT="json", LOG_LEVEL="INFO", LOG_DIR=tmp_path))

    resp = TestClient(_app()).get("/boom")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal Server Error"}
    rid = resp.headers["X-Request-ID"]

    errors = [r for r in _json_lines(capsys.readouterr().err) if r.get("level") == "ERROR"]
    assert errors
    assert all(r["request_id"] == rid for r in errors)
    assert "RuntimeError: boom" in errors[0]["exc_info"]
