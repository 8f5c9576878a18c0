from __future__ import annotations

import json
import logging
from enum import Enum

from issuebot.observability.logging import ExtrasFormatter, build_log_config


class _Color(Enum):
    RED = "red"


def _record(data: object = None) -> logging.LogRecord:
    record = logging.LogRecord("issuebot.store", logging.INFO, __file__, 1, "registration saved", None, None)
    if data is not None:
        record.data = data
    return record


def test_console_format_appends_data() -> None:
    formatter = ExtrasFormatter("%(levelname)s %(name)s: %(message)s")

    line = formatter.format(_record({"id": 3, "color": _Color.RED, "raw": b"xyz"}))

    assert line == 'INFO issuebot.store: registration saved | data={"color":"red","id":3,"raw":"<bytes len=3>"}'


def test_console_format_without_data() -> None:
    formatter = ExtrasFormatter("%(levelname)s %(name)s: %(message)s")

    assert formatter.format(_record()) == "INFO issuebot.store: registration saved"


def test_managed_runtime_emits_single_line_json(monkeypatch) -> None:
    monkeypatch.setenv("K_SERVICE", "issuebot")
    formatter = ExtrasFormatter()

    payload = json.loads(formatter.format(_record({"id": 3})))

    assert payload["message"] == "registration saved"
    assert payload["severity"] == "INFO"
    assert payload["logger"] == "issuebot.store"
    assert payload["data"] == {"id": 3}
    assert payload["timestamp"].endswith("Z")


def test_log_config_levels_follow_environment(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HTTPX_LOG_LEVEL", "error")
    monkeypatch.delenv("UVICORN_LOG_LEVEL", raising=False)

    config = build_log_config(extra_loggers={"issuebot.store": {"level": "WARNING"}})

    assert config["root"]["level"] == "DEBUG"
    assert config["loggers"]["httpx"]["level"] == "ERROR"
    assert config["loggers"]["uvicorn"]["level"] == "INFO"
    assert config["loggers"]["issuebot.store"] == {"level": "WARNING"}
