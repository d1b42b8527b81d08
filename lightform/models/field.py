"""Field record held by a form."""

from __future__ import annotations

import re
from collections.abc import Sized
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

# A callable rule returns (passed, message), or an awaitable resolving to it
RuleResult = Tuple[bool, Optional[str]]
CallableRule = Callable[[Any], Union[RuleResult, bool, Awaitable[RuleResult]]]
Rule = Union[re.Pattern, CallableRule]


def is_empty(value: Any) -> bool:
    """Check whether a value counts as missing for the required check.

    None and zero-length strings or containers are empty. Numbers and
    booleans never are, so 0 and False satisfy a required field.
    """
    if value is None:
        return True
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_pattern(rule: Any) -> bool:
    return isinstance(rule, re.Pattern)


@dataclass(frozen=True)
class Field:
    """A single named, validated unit of form state.

    Fields are read-only value holders. The form replaces a field with a
    copy when its value changes, so a snapshot taken at registration stays
    untouched and can be restored by reset() and clear().

    Attributes:
        key: Identifier, unique within a form
        label: Display string, not used in logic
        value: Current value
        is_required: Whether an empty value is a validation failure
        required_message: Message used when the required check fails
        validation: Ordered rules evaluated against the value
    """

    key: str
    label: str = ""
    value: Any = ""
    is_required: bool = False
    required_message: Optional[str] = None
    validation: Tuple[Rule, ...] = field(default=(), repr=False)

    def with_value(self, value: Any) -> "Field":
        """Return a copy of this field holding a new value."""
        return replace(self, value=value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization (rules are not included)."""
        return {
            "key": self.key,
            "label": self.label,
            "value": self.value,
            "is_required": self.is_required,
            "required_message": self.required_message,
        }

    def __str__(self) -> str:
        marker = " (required)" if self.is_required else ""
        return f"{self.key}={self.value!r}{marker}"
