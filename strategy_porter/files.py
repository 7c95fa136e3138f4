"""File-boundary glue: reading imported files and delivering exports."""
from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from os import PathLike
from pathlib import Path
from typing import Protocol, Union

from .logging_utils import get_json_logger

EXPORT_MEDIA_TYPE = "application/json"

PathArg = Union[str, PathLike]


class DownloadSink(Protocol):
    def deliver(self, filename: str, content: str, media_type: str) -> Path: ...


def utc_today() -> date:
    return datetime.now(tz=timezone.utc).date()


def export_filename(fmt: str, day: date | None = None) -> str:
    return f"strategies_{fmt}_{(day or utc_today()).isoformat()}.json"


async def read_file_text(path: PathArg) -> str:
    """Read a UTF-8 text file without blocking the event loop."""
    return await asyncio.to_thread(Path(path).read_text, encoding="utf-8")


class DirectoryDownloadSink:
    """Writes each export as a file inside `out_dir`."""

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = Path(out_dir)
        self._logger = get_json_logger("download", static_fields={"component": "download"})

    def deliver(self, filename: str, content: str, media_type: str = EXPORT_MEDIA_TYPE) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        target = self.out_dir / filename
        target.write_text(content, encoding="utf-8")
        self._logger.info(
            "delivered",
            extra={"path": str(target), "media_type": media_type, "bytes": len(content.encode("utf-8"))},
        )
        return target
