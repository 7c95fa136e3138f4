from __future__ import annotations

import json
import uuid
from collections.abc import Awaitable, Callable, Sequence
from os import PathLike
from pathlib import Path
from typing import Any

from .codec import CompactCodec, StrategyCodec
from .config import DEFAULT_STORE_KEY, PorterConfig
from .errors import (
    CodecError,
    FileReadError,
    InvalidStrategyFile,
    NoFileSelected,
    ParseError,
    ValidationError,
)
from .files import (
    EXPORT_MEDIA_TYPE,
    DirectoryDownloadSink,
    DownloadSink,
    PathArg,
    export_filename,
    read_file_text,
)
from .logging_utils import get_json_logger
from .persistence.sqlite import KeyValueStore, SqliteKeyValueStore
from .validator import validate_strategies

FORMAT_ORIGINAL = "original"
FORMAT_SHORTHAND = "shorthand"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def _loads(text: str) -> Any:
    # NaN and Infinity are not JSON
    return json.loads(text, parse_constant=_reject_constant)


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


class StrategyManager:
    """Moves strategy lists between the store and files, validating at each crossing.

    Only ``format == "shorthand"`` routes through the codec; any other format
    name is treated as the canonical JSON and only shows up in export filenames.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        key: str = DEFAULT_STORE_KEY,
        codec: StrategyCodec | None = None,
        downloader: DownloadSink | None = None,
        reader: Callable[[PathArg], Awaitable[str]] = read_file_text,
    ) -> None:
        self.store = store
        self.key = key
        self.codec = codec or CompactCodec()
        self.downloader = downloader or DirectoryDownloadSink(PorterConfig().export_dir)
        self.reader = reader
        self.last_export_path: Path | None = None

    @classmethod
    def from_config(cls, cfg: PorterConfig | None = None) -> StrategyManager:
        cfg = cfg or PorterConfig()
        return cls(
            SqliteKeyValueStore(cfg.db_path),
            key=cfg.store_key,
            downloader=DirectoryDownloadSink(cfg.export_dir),
        )

    def _logger(self, op: str):
        return get_json_logger(
            "manager",
            static_fields={"correlation_id": uuid.uuid4().hex, "op": op, "key": self.key},
        )

    def export_strategies(self, fmt: str = FORMAT_ORIGINAL) -> str | None:
        """Validate the stored list and deliver it as a dated JSON file.

        Returns the exported text, or None (without delivering anything) when
        the store holds no strategies. With the original format the stored text
        is exported byte for byte.
        """
        logger = self._logger("export_strategies")
        logger.info("start", extra={"format": fmt})
        try:
            raw = self.store.get_item(self.key)
            if not raw:
                logger.warning("no_strategies_found")
                return None

            try:
                parsed = _loads(raw)
            except ValueError as exc:
                raise ParseError(f"Stored strategies are not valid JSON: {exc}") from exc

            if not validate_strategies(parsed):
                raise ValidationError("Invalid strategy format detected")

            export_data = raw
            if fmt == FORMAT_SHORTHAND:
                export_data = _dumps(self.codec.to_shorthand(parsed))

            filename = export_filename(fmt)
            self.last_export_path = self.downloader.deliver(filename, export_data, EXPORT_MEDIA_TYPE)
        except Exception as exc:
            logger.error("export_failed", extra={"error": str(exc)})
            raise

        logger.info("done", extra={"export_file": str(self.last_export_path), "strategies": len(parsed)})
        return export_data

    async def import_strategies(
        self, file_source: Sequence[PathArg] | PathArg, fmt: str = FORMAT_ORIGINAL
    ) -> list[dict[str, Any]]:
        """Read one file, validate it and replace the stored list with it.

        Only the first entry of `file_source` is used; a single path is taken
        as a one-file selection. The file read is the only await; overlapping
        imports are not coordinated and the last write wins.
        """
        logger = self._logger("import_strategies")
        if isinstance(file_source, (str, PathLike)):
            file_source = [file_source] if str(file_source) else []
        if not file_source:
            logger.warning("no_file_selected")
            raise NoFileSelected()
        path = file_source[0]
        logger.info("start", extra={"format": fmt, "path": str(path)})

        try:
            content = await self.reader(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("file_read_failed", extra={"error": str(exc)})
            raise FileReadError() from exc

        try:
            parsed: Any = _loads(content)
            if fmt == FORMAT_SHORTHAND:
                try:
                    parsed = self.codec.from_shorthand(parsed)
                except CodecError:
                    raise
                except Exception as exc:
                    raise CodecError(f"{type(exc).__name__}: {exc}") from exc
            if not validate_strategies(parsed):
                raise ValidationError("Invalid strategy format")
            serialized = _dumps(parsed)
        except ValueError as exc:
            logger.error("invalid_strategy_file", extra={"error": str(exc)})
            raise InvalidStrategyFile(str(exc)) from exc

        self.store.set_item(self.key, serialized)
        logger.info("done", extra={"strategies": len(parsed)})
        return parsed

    def get_strategies(self, fmt: str = FORMAT_ORIGINAL) -> Any:
        """Stored strategies (codec-encoded for shorthand), or None when absent."""
        logger = self._logger("get_strategies")
        raw = self.store.get_item(self.key)
        if not raw:
            return None

        message = "Invalid strategy format detected in store, check you are using the right site profile"
        try:
            parsed = _loads(raw)
        except ValueError as exc:
            logger.error("invalid_stored_strategies", extra={"error": str(exc)})
            raise ValidationError(message) from exc
        if not validate_strategies(parsed):
            logger.error("invalid_stored_strategies")
            raise ValidationError(message)

        if fmt == FORMAT_SHORTHAND:
            return self.codec.to_shorthand(parsed)
        return parsed
