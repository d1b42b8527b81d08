"""Structured exception hierarchy for forms.

Only programmer errors are raised as exceptions. A value failing its
validation rules is not an exception; it is recorded in ``Form.errors``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from lightform.constants import ErrorMessage

__all__ = [
    "FormError",
    "MissingKeyError",
    "InvalidRuleError",
]


class FormError(Exception):
    """Base exception for all form errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.key = key
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if key:
            parts.insert(0, f"[{key}]")

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "key": self.key,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class MissingKeyError(FormError):
    """Raised when a field is registered without a key."""

    def __init__(self, options: Optional[Dict[str, Any]] = None) -> None:
        details = {}
        if options:
            details["options"] = ", ".join(sorted(options))
        super().__init__(
            ErrorMessage.KEY_NOT_EXISTS.value,
            details=details,
            suggestion="Pass a non-empty 'key' matching the field name",
        )


class InvalidRuleError(FormError):
    """Raised when a validation rule is neither a pattern nor a callable."""

    def __init__(self, key: str, rule: Any) -> None:
        self.rule = rule
        super().__init__(
            "Validation rule must be a regular expression or a callable.",
            key=key,
            details={"rule_type": type(rule).__name__},
            suggestion="Use re.compile(...) or a function returning (passed, message)",
        )
