"""
Unit tests for JSON loading, output paths and logging setup.
"""

import logging
from pathlib import Path

import pytest
import requests
from rich.logging import RichHandler

from declgen import utils
from declgen.logging_config import configure_logging, get_logger
from declgen.utils import JSONLoaderError, is_url, load_json, resolve_output_path


class FakeResponse:
    def __init__(self, payload=None, error=None):
        self._payload = payload
        self._error = error

    def raise_for_status(self):
        if self._error:
            raise self._error

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class TestLoadJson:
    """Test loading from files and URLs."""

    def test_load_file(self, write_json):
        path = write_json("data.json", {"types": []})
        source, data = load_json(path)
        assert source == str(path)
        assert data == {"types": []}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "none.json")

    def test_empty_location(self):
        with pytest.raises(JSONLoaderError):
            load_json("  ")

    def test_load_url(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse({"types": [1]})

        monkeypatch.setattr(utils.requests, "get", fake_get)
        source, data = load_json("https://example.com/types.json", timeout=5)
        assert source == "https://example.com/types.json"
        assert data == {"types": [1]}
        assert calls == [("https://example.com/types.json", 5)]

    def test_url_timeout(self, monkeypatch):
        def fake_get(url, timeout):
            raise requests.exceptions.Timeout()

        monkeypatch.setattr(utils.requests, "get", fake_get)
        with pytest.raises(JSONLoaderError, match="timeout"):
            load_json("https://example.com/types.json")

    def test_url_invalid_json(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", lambda url, timeout: FakeResponse(ValueError("bad"))
        )
        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json("https://example.com/types.json")

    def test_is_url(self):
        assert is_url("http://host/x.json")
        assert not is_url("types.json")
        assert not is_url(Path("/tmp/types.json"))


class TestResolveOutputPath:
    def test_relative_path_uses_cwd(self, tmp_path):
        result = resolve_output_path("generated", "models.gen.ts", cwd=tmp_path)
        assert result == (tmp_path / "generated" / "models.gen.ts").resolve()
        assert result.is_absolute()

    def test_absolute_path_kept(self, tmp_path):
        result = resolve_output_path(str(tmp_path / "out"), "a.ts", cwd="/elsewhere")
        assert result == (tmp_path / "out" / "a.ts").resolve()


class TestLogging:
    def test_loggers_live_under_declgen(self):
        assert get_logger("declgen.pipeline").name == "declgen.pipeline"
        assert get_logger("some.other.module").name == "declgen.module"
        assert get_logger().name == "declgen"

    def test_configure_levels_and_single_handler(self):
        root = logging.getLogger("declgen")
        handlers = list(root.handlers)
        try:
            configure_logging(verbose=True)
            assert root.level == logging.DEBUG
            configure_logging(quiet=True)
            assert root.level == logging.WARNING
            rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
            assert len(rich_handlers) == 1
        finally:
            root.handlers = handlers
            root.setLevel(logging.NOTSET)
