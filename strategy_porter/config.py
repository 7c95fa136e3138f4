from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_STORE_KEY = "strategies_saved"


class PorterConfig(BaseModel):
    """Runtime settings; every field defaults from the environment."""

    db_path: Path = Field(
        default_factory=lambda: Path(
            os.getenv("STRATEGY_DB_PATH", "user_data/store/strategies.sqlite")
        )
    )
    store_key: str = Field(
        default_factory=lambda: os.getenv("STRATEGY_STORE_KEY", DEFAULT_STORE_KEY),
        min_length=1,
    )
    export_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("STRATEGY_EXPORT_DIR", "user_data/exports"))
    )
