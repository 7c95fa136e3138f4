"""Schema predicates for strategies, blocks, conditions and actions.

Every function returns a plain bool and stops at the first failure. The reason
for a rejection is only reported as a warning log record.

Field presence is checked two ways. ``value`` on conditions and actions only
has to be *defined* (present in the mapping), so ``0`` is accepted. Every other
required field has to be *truthy*, so a block with ``id: 0`` is rejected.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from .logging_utils import get_json_logger
from .models import ACTION_TYPES, BET_TYPES, BLOCK_TYPES, CONDITION_TYPES, PROFIT_TYPES

logger = get_json_logger("validator", static_fields={"component": "validator"})


def _truthy(value: Any) -> bool:
    # empty containers count as present
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_action(action: Any) -> bool:
    if not isinstance(action, Mapping):
        logger.warning("invalid_action_object", extra={"entity": "action"})
        return False

    if not _truthy(action.get("type")) or "value" not in action:
        logger.warning("missing_required_fields", extra={"entity": "action"})
        return False

    if action["type"] not in ACTION_TYPES:
        logger.warning(
            "invalid_action_type", extra={"entity": "action", "value": action["type"]}
        )
        return False

    if not _is_number(action["value"]):
        logger.warning("action_value_not_number", extra={"entity": "action"})
        return False

    return True


def validate_condition(condition: Any) -> bool:
    if not isinstance(condition, Mapping):
        logger.warning("invalid_condition_object", extra={"entity": "condition"})
        return False

    if (
        not _truthy(condition.get("type"))
        or "value" not in condition
        or not _truthy(condition.get("betType"))
        or not _truthy(condition.get("profitType"))
    ):
        logger.warning("missing_required_fields", extra={"entity": "condition"})
        return False

    checks = (
        ("type", CONDITION_TYPES, "invalid_condition_type"),
        ("betType", BET_TYPES, "invalid_bet_type"),
        ("profitType", PROFIT_TYPES, "invalid_profit_type"),
    )
    for field, allowed, event in checks:
        if condition[field] not in allowed:
            logger.warning(event, extra={"entity": "condition", "value": condition[field]})
            return False

    if not _is_number(condition["value"]):
        logger.warning("condition_value_not_number", extra={"entity": "condition"})
        return False

    return True


def validate_block(block: Any) -> bool:
    if not isinstance(block, Mapping):
        logger.warning("invalid_block_object", extra={"entity": "block"})
        return False

    if not all(_truthy(block.get(field)) for field in ("id", "type", "on", "do")):
        logger.warning("missing_required_fields", extra={"entity": "block"})
        return False

    if block["type"] not in BLOCK_TYPES:
        logger.warning("invalid_block_type", extra={"entity": "block", "value": block["type"]})
        return False

    return validate_condition(block["on"]) and validate_action(block["do"])


def validate_strategy(strategy: Any) -> bool:
    if not isinstance(strategy, Mapping):
        logger.warning("invalid_strategy_object", extra={"entity": "strategy"})
        return False

    if not _truthy(strategy.get("label")) or not isinstance(strategy.get("blocks"), list):
        logger.warning("missing_required_fields", extra={"entity": "strategy"})
        return False

    if not isinstance(strategy.get("isDefault"), bool):
        logger.warning("is_default_not_boolean", extra={"entity": "strategy"})
        return False

    return all(validate_block(block) for block in strategy["blocks"])


def validate_strategies(strategies: Any) -> bool:
    """True iff `strategies` is a list whose every element is a valid strategy."""
    return isinstance(strategies, list) and all(validate_strategy(s) for s in strategies)
