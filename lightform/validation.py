"""Validation engine for form fields.

Evaluates a field's rule list against a value. Rules run strictly in
order and the first failure wins; a rule returning an awaitable is awaited
before the next rule starts, so rules of one field never race each other.
"""

from __future__ import annotations

import inspect
import re
from typing import Any, Iterable, Optional, Tuple

from lightform.constants import ErrorMessage
from lightform.errors import InvalidRuleError
from lightform.models.field import Rule, RuleResult, is_empty, is_pattern

__all__ = [
    "normalize_rules",
    "run_rule",
    "validate_field",
]


def normalize_rules(key: str, rules: Iterable[Any] | None) -> Tuple[Rule, ...]:
    """Validate and freeze a rule list at registration time.

    String rules are compiled to regular expressions.

    Raises:
        InvalidRuleError: If a rule is neither a pattern nor a callable
    """
    if rules is None:
        return ()
    if isinstance(rules, (str, re.Pattern)) or callable(rules):
        rules = [rules]

    normalized: list[Rule] = []
    for rule in rules:
        if isinstance(rule, str):
            normalized.append(re.compile(rule))
        elif is_pattern(rule) or callable(rule):
            normalized.append(rule)
        else:
            raise InvalidRuleError(key, rule)
    return tuple(normalized)


def _coerce_result(result: Any) -> RuleResult:
    if isinstance(result, bool):
        return result, None
    passed, message = result
    return bool(passed), message


async def run_rule(rule: Rule, value: Any) -> RuleResult:
    """Run a single rule against a value.

    Returns:
        (passed, message) where message may be None
    """
    if is_pattern(rule):
        return rule.search(str(value)) is not None, None  # type: ignore[union-attr]

    result = rule(value)  # type: ignore[operator]
    if inspect.isawaitable(result):
        result = await result
    return _coerce_result(result)


async def validate_field(
    value: Any,
    rules: Iterable[Rule] = (),
    is_required: bool = False,
    required_message: Optional[str] = None,
    *,
    required_default: str = ErrorMessage.VALUE_NOT_REQUIRED.value,
    invalid_default: str = ErrorMessage.VALUE_NOT_VALID.value,
) -> Optional[str]:
    """Compute the validation error for a value.

    The required check gates every other rule: a required empty value
    fails with required_message (or required_default) no matter what the
    rules would say.

    Args:
        value: Value to check
        rules: Ordered patterns and callables
        is_required: Whether an empty value is a failure
        required_message: Custom message for the required check
        required_default: Message when required_message is not given
        invalid_default: Message for a failing rule without its own message

    Returns:
        Error message, or None if the value passes every rule
    """
    if is_required and is_empty(value):
        return required_message or required_default

    for rule in rules:
        passed, message = await run_rule(rule, value)
        if not passed:
            return message or invalid_default

    return None
