from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_LOG_STD_KEYS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module', 'exc_info',
    'exc_text', 'stack_info', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'asctime', 'taskName',
}


def _jsonable(value: Any) -> bool:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return True
    if isinstance(value, (list, dict)):
        try:
            json.dumps(value)
        except (TypeError, ValueError):
            return False
        return True
    return False


class JsonFormatter(logging.Formatter):
    """One JSON object per record; `extra` fields are flattened into it."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _LOG_STD_KEYS or k.startswith('_'):
                continue
            if _jsonable(v):
                payload[k] = v
            else:
                payload[k] = repr(v)
        return json.dumps(payload, ensure_ascii=False)


class ContextAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call `extra` over the static fields."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        kwargs["extra"] = {**(self.extra or {}), **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_json_logger(
    name: str,
    *,
    log_path: Path | None = None,
    level: int = logging.INFO,
    static_fields: dict[str, Any] | None = None,
) -> ContextAdapter:
    """Create or fetch a JSON logger under the `strategy_porter` namespace.

    Env overrides (used only when `log_path` is None):
      - LOG_JSON_TO_FILE: when truthy ("1", "true", "yes"), log to a file.
      - LOG_FILE: path to JSONL log file (default: "user_data/logs/strategy_porter.jsonl").
      - CORRELATION_ID: injected into every record unless `static_fields` sets one.

    Returns a LoggerAdapter that injects `static_fields` into each record.
    """
    logger = logging.getLogger(f"strategy_porter.{name}")
    logger.setLevel(level)

    if not logger.handlers:
        effective_log_path = log_path
        if effective_log_path is None:
            _to_file = os.getenv("LOG_JSON_TO_FILE", "").strip().lower() in {"1", "true", "yes"}
            if _to_file:
                effective_log_path = Path(
                    os.getenv("LOG_FILE", "user_data/logs/strategy_porter.jsonl")
                )

        if effective_log_path is not None:
            effective_log_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(effective_log_path, encoding='utf-8')
        else:
            handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False

    fields = dict(static_fields or {})
    _cid = os.getenv("CORRELATION_ID", "").strip()
    if _cid and "correlation_id" not in fields:
        fields["correlation_id"] = _cid
    return ContextAdapter(logger, extra=fields)
