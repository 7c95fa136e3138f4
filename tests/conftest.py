from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from strategy_porter.manager import StrategyManager
from strategy_porter.persistence.sqlite import SqliteKeyValueStore

STORE_KEY = "strategies_saved"


class RecordingSink:
    """Download sink that keeps deliveries in memory."""

    def __init__(self) -> None:
        self.deliveries: list[tuple[str, str, str]] = []

    def deliver(self, filename: str, content: str, media_type: str) -> Path:
        self.deliveries.append((filename, content, media_type))
        return Path(filename)


def make_block(block_id: Any = "b1", **overrides: Any) -> dict[str, Any]:
    block = {
        "id": block_id,
        "type": "bets",
        "on": {"type": "every", "value": 3, "betType": "lose", "profitType": "profit"},
        "do": {"type": "increaseByPercentage", "value": 100},
    }
    block.update(overrides)
    return block


@pytest.fixture
def sample_strategies() -> list[dict[str, Any]]:
    return [
        {
            "label": "Martingale",
            "isDefault": True,
            "blocks": [
                make_block("b1"),
                make_block(
                    "b2",
                    on={"type": "every", "value": 1, "betType": "win", "profitType": "profit"},
                    do={"type": "resetAmount", "value": 0},
                ),
            ],
        },
        {
            "label": "Stop loss",
            "isDefault": False,
            "blocks": [
                make_block(
                    "b3",
                    type="profit",
                    on={"type": "lessThan", "value": -2.5, "betType": "bet", "profitType": "balance"},
                    do={"type": "stop", "value": 0},
                ),
            ],
        },
    ]


@pytest.fixture
def strategies_copy(sample_strategies: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return copy.deepcopy(sample_strategies)


@pytest.fixture
def store(tmp_path: Path) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(tmp_path / "store" / "strategies.sqlite")


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def manager(store: SqliteKeyValueStore, sink: RecordingSink) -> StrategyManager:
    return StrategyManager(store, key=STORE_KEY, downloader=sink)
