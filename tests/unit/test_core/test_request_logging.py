"""
test_request_logging.py - request logging middleware and log level setup
"""

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.core.logging import add_logging_middleware, setup_logging


def _app() -> FastAPI:
    app = FastAPI()
    add_logging_middleware(app)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    return app


class TestLoggingMiddleware:
    def test_logs_request_and_completion(self, caplog):
        client = TestClient(_app())
        with caplog.at_level(logging.INFO, logger="backend"):
            assert client.get("/ping").status_code == 200

        messages = [r.getMessage() for r in caplog.records if r.name == "backend"]
        assert "GET /ping" in messages
        completed = [m for m in messages if m.startswith("Completed GET /ping 200 in ")]
        assert len(completed) == 1
        assert completed[0].endswith("ms")

    def test_logs_unhandled_errors(self, caplog):
        client = TestClient(_app(), raise_server_exceptions=False)
        with caplog.at_level(logging.INFO, logger="backend"):
            assert client.get("/boom").status_code == 500

        errors = [r for r in caplog.records if r.name == "backend" and r.levelno == logging.ERROR]
        assert errors and errors[0].getMessage() == "Unhandled error on GET /boom"


class TestSetupLogging:
    @pytest.fixture
    def root_logger(self):
        """Root logger snapshot; tests clear its handlers so basicConfig applies."""
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield root
        root.handlers = saved_handlers
        root.setLevel(saved_level)

    def test_level_from_argument(self, root_logger):
        root_logger.handlers = []
        setup_logging("debug")
        assert root_logger.level == logging.DEBUG

    def test_level_from_settings(self, root_logger, monkeypatch):
        monkeypatch.setattr("backend.core.logging.settings.log_level", "error")
        root_logger.handlers = []
        setup_logging()
        assert root_logger.level == logging.ERROR

    def test_existing_configuration_is_kept(self, root_logger):
        root_logger.handlers = [logging.NullHandler()]
        root_logger.setLevel(logging.WARNING)
        setup_logging("debug")
        assert root_logger.level == logging.WARNING
