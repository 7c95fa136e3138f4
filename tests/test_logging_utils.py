from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from strategy_porter.logging_utils import JsonFormatter, get_json_logger


def _capture(name: str) -> tuple[logging.Logger, io.StringIO, logging.Handler]:
    stream = io.StringIO()
    logger = logging.getLogger(f"strategy_porter.{name}")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream, handler


def test_static_and_call_fields_merged(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORRELATION_ID", "cid-123")
    adapter = get_json_logger("test-merge", static_fields={"op": "unit"})
    logger, stream, handler = _capture("test-merge")
    try:
        adapter.info("done", extra={"strategies": 2, "payload": {"a": [1]}, "obj": object()})
    finally:
        logger.removeHandler(handler)

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["message"] == "done"
    assert record["logger"] == "strategy_porter.test-merge"
    assert record["op"] == "unit"
    assert record["strategies"] == 2
    assert record["payload"] == {"a": [1]}
    assert record["obj"].startswith("<object")
    assert record["correlation_id"] == "cid-123"


def test_explicit_correlation_id_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORRELATION_ID", "from-env")
    adapter = get_json_logger("test-cid", static_fields={"correlation_id": "explicit"})
    assert adapter.extra["correlation_id"] == "explicit"


def test_file_logging(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "out.jsonl"
    adapter = get_json_logger("test-file", log_path=log_path)
    adapter.warning("no_strategies_found")
    for h in logging.getLogger("strategy_porter.test-file").handlers:
        h.flush()

    line = log_path.read_text(encoding="utf-8").splitlines()[-1]
    assert json.loads(line)["level"] == "WARNING"


def test_handlers_not_duplicated() -> None:
    get_json_logger("test-dup")
    get_json_logger("test-dup")
    assert len(logging.getLogger("strategy_porter.test-dup").handlers) == 1
