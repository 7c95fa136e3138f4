"""Shorthand wire format for strategy lists.

The manager only depends on the `StrategyCodec` protocol; `CompactCodec` is the
default implementation. Its layout, per strategy::

    {"l": label, "d": isDefault, "b": [
        [id, blockType, [conditionType, value, betType, profitType], [actionType, value]],
        ...
    ]}

Encoding expects data that has already passed validation.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError as ModelValidationError

from .errors import CodecError
from .models import Action, Block, Condition, Strategy


@runtime_checkable
class StrategyCodec(Protocol):
    def to_shorthand(self, strategies: list[dict[str, Any]]) -> Any: ...

    def from_shorthand(self, data: Any) -> list[dict[str, Any]]: ...


class CompactCodec:
    """Positional-array shorthand; keys shortened to single letters."""

    def to_shorthand(self, strategies: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [
            {
                "l": s["label"],
                "d": s["isDefault"],
                "b": [self._encode_block(b) for b in s["blocks"]],
            }
            for s in strategies
        ]

    def from_shorthand(self, data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise CodecError("shorthand payload must be a list of strategies")
        return [self._decode_strategy(item, idx) for idx, item in enumerate(data)]

    @staticmethod
    def _encode_block(block: Mapping[str, Any]) -> list[Any]:
        on, do = block["on"], block["do"]
        return [
            block["id"],
            block["type"],
            [on["type"], on["value"], on["betType"], on["profitType"]],
            [do["type"], do["value"]],
        ]

    def _decode_strategy(self, item: Any, idx: int) -> dict[str, Any]:
        if not isinstance(item, Mapping) or not {"l", "d", "b"} <= item.keys():
            raise CodecError(f"strategy #{idx}: expected keys 'l', 'd', 'b'")
        blocks = item["b"]
        if not isinstance(blocks, list):
            raise CodecError(f"strategy #{idx}: 'b' must be a list")
        try:
            strategy = Strategy(
                label=item["l"],
                is_default=item["d"],
                blocks=[self._decode_block(raw, idx) for raw in blocks],
            )
        except ModelValidationError as exc:
            raise CodecError(f"strategy #{idx}: {exc.error_count()} invalid field(s)") from exc
        return strategy.to_dict()

    @staticmethod
    def _decode_block(raw: Any, idx: int) -> Block:
        try:
            block_id, block_type, (c_type, c_value, bet_type, profit_type), (a_type, a_value) = raw
        except (TypeError, ValueError) as exc:
            raise CodecError(f"strategy #{idx}: malformed block {raw!r}") from exc
        return Block(
            id=block_id,
            type=block_type,
            on=Condition(type=c_type, value=c_value, bet_type=bet_type, profit_type=profit_type),
            do=Action(type=a_type, value=a_value),
        )
