import logging
import os

from lix_backend.shared import ErrorCode, Result, get_logger, sanitize_error_message
from lix_shared.log import debug_enabled


def test_result_ok_and_err():
    ok = Result.Ok({"positive": "a"}, has_prompt=True)
    assert ok.ok and ok.code == "OK" and ok.meta == {"has_prompt": True}

    err = Result.Err(ErrorCode.NOT_FOUND, "File not found: x.png")
    assert not err.ok
    assert err.code == "NOT_FOUND"
    assert err.data is None


def test_result_map_keeps_meta_and_errors():
    ok = Result.Ok(2, source="x")
    mapped = ok.map(lambda v: v * 3)
    assert mapped.data == 6
    assert mapped.meta == {"source": "x"}
    assert mapped.meta is not ok.meta

    err = Result.Err("INVALID_JSON", "bad")
    assert err.map(lambda v: v) is err


def test_sanitize_masks_paths():
    msg = sanitize_error_message(FileNotFoundError("No such file: /home/alice/ComfyUI/input/x.png"), "Failed to read image")
    assert msg.startswith("Failed to read image: ")
    assert "/home/alice" not in msg
    assert "[path]" in msg


def test_sanitize_keeps_urls():
    msg = sanitize_error_message(RuntimeError("GET http://127.0.0.1:8188/view failed"), "Failed")
    assert "http://127.0.0.1:8188/view" in msg


def test_sanitize_masks_cwd_and_joins_lines():
    msg = sanitize_error_message(RuntimeError(f"boom in {os.getcwd()}\nsecond line"), "Failed")
    assert "\n" not in msg
    assert os.getcwd() not in msg


def test_sanitize_empty_uses_fallback():
    assert sanitize_error_message(None, "Failed to fetch image") == "Failed to fetch image"
    assert sanitize_error_message(RuntimeError(""), "") == "An error occurred"


def test_sanitize_truncates_long_messages():
    msg = sanitize_error_message(RuntimeError("x" * 500), "Failed")
    assert len(msg) == len("Failed: ") + 200


def test_debug_switch(monkeypatch):
    monkeypatch.setenv("LIX_DEBUG", "yes")
    assert debug_enabled() is True
    monkeypatch.setenv("LIX_DEBUG", "0")
    assert debug_enabled() is False


def test_logger_names_are_package_relative():
    logger = get_logger("custom_nodes.loadimagex.lix_backend.features.loader.service")
    assert logger.name == "loadimagex.features.loader.service"
    assert logger.propagate is False
    assert len(logger.handlers) == 1
    assert get_logger("lix_backend.features.loader.service") is logger
    assert logger.level in (logging.DEBUG, logging.INFO)
