"""Tests for logging setup and rate limit keys."""

import io
import json
import sys

from starlette.requests import Request

from gym_backend.core import rate_limit
from gym_backend.utils.logger import logger, setup_logger


def _request(forwarded=None):
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "headers": headers, "client": ("10.0.0.1", 50000)})


class TestClientKey:
    """Test rate limit client keys."""

    def test_uses_peer_address_by_default(self, monkeypatch):
        monkeypatch.setattr(rate_limit.settings, "trust_forwarded_for", False)
        assert rate_limit.client_key(_request("203.0.113.9")) == "10.0.0.1"

    def test_forwarded_for_when_trusted(self, monkeypatch):
        monkeypatch.setattr(rate_limit.settings, "trust_forwarded_for", True)
        assert rate_limit.client_key(_request("203.0.113.9, 10.0.0.1")) == "203.0.113.9"

    def test_trusted_without_header(self, monkeypatch):
        monkeypatch.setattr(rate_limit.settings, "trust_forwarded_for", True)
        assert rate_limit.client_key(_request()) == "10.0.0.1"


class TestSetupLogger:
    """Test setup_logger."""

    def test_file_sink_respects_level(self, tmp_path):
        log_file = tmp_path / "gym.log"
        try:
            setup_logger(level="warning", log_file=str(log_file), json_output=False)
            logger.info("counter seeded")
            logger.warning("member code taken")
            logger.remove()

            text = log_file.read_text()
            assert "member code taken" in text
            assert "counter seeded" not in text
        finally:
            setup_logger()

    def test_json_output(self, monkeypatch):
        buffer = io.StringIO()
        monkeypatch.setattr(sys, "stdout", buffer)
        try:
            setup_logger(level="INFO", log_file="", json_output=True)
            logger.info("member created")
        finally:
            monkeypatch.undo()
            setup_logger()

        line = buffer.getvalue().strip().splitlines()[-1]
        assert json.loads(line)["record"]["message"] == "member created"
