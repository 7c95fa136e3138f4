"""Typed views of the strategy schema and its closed vocabularies."""
from __future__ import annotations

from typing import Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt

ConditionType = Literal[
    "every",
    "everyStreakOf",
    "streakGreaterThan",
    "streakLowerThan",
    "firstStreakOf",
    "greaterThan",
    "greaterThanOrEqualTo",
    "lessThan",
    "lessThanOrEqualTo",
]
BetType = Literal["bet", "win", "lose"]
ProfitType = Literal["profit", "loss", "balance"]
ActionType = Literal[
    "setAmount",
    "setWinChance",
    "increaseWinChanceBy",
    "decreaseWinChanceBy",
    "increaseByPercentage",
    "decreaseByPercentage",
    "addToAmount",
    "subtractFromAmount",
    "addToWinChance",
    "subtractFromWinChance",
    "switchOverUnder",
    "resetAmount",
    "resetWinChance",
    "stop",
]
BlockType = Literal["bets", "profit"]

CONDITION_TYPES: tuple[str, ...] = get_args(ConditionType)
BET_TYPES: tuple[str, ...] = get_args(BetType)
PROFIT_TYPES: tuple[str, ...] = get_args(ProfitType)
ACTION_TYPES: tuple[str, ...] = get_args(ActionType)
BLOCK_TYPES: tuple[str, ...] = get_args(BlockType)

# bool subclasses int; strict types keep True/False out
Number = Union[StrictInt, StrictFloat]


class _Canonical(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Canonical JSON shape, keyed by the stored field names."""
        return self.model_dump(by_alias=True)


class Condition(_Canonical):
    type: ConditionType
    value: Number
    bet_type: BetType = Field(alias="betType")
    profit_type: ProfitType = Field(alias="profitType")


class Action(_Canonical):
    type: ActionType
    value: Number


class Block(_Canonical):
    id: Any
    type: BlockType
    on: Condition
    do: Action


class Strategy(_Canonical):
    label: Any
    is_default: StrictBool = Field(alias="isDefault")
    blocks: list[Block] = Field(default_factory=list)
