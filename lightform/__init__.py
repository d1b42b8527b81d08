"""Reactive form-state container.

Registers named fields, tracks each field's value, touched flag and
validation error, and runs a validation pipeline (required check, regular
expressions, synchronous and asynchronous callables) on demand or on update.

Usage:
    from lightform import create_form

    form = create_form([{"key": "name", "is_required": True}])
    form.update({"name": "Ada"})

Applications that want the library's log output call setup_logging() once
at start-up.
"""

from __future__ import annotations

from lightform.models import Field, Form, Rule, RuleResult, create_form, is_empty
from lightform.constants import FIELD_DEFAULT_VALUES, ErrorMessage
from lightform.errors import FormError, InvalidRuleError, MissingKeyError
from lightform.logging import JSONFormatter, get_form_logger, setup_logging
from lightform.observers import ChangeKind, FormEvent
from lightform.settings import FormSettings, get_settings
from lightform.validation import validate_field

__version__ = "0.1.0"

__all__ = [
    "ChangeKind",
    "ErrorMessage",
    "FIELD_DEFAULT_VALUES",
    "Field",
    "Form",
    "FormError",
    "FormEvent",
    "FormSettings",
    "InvalidRuleError",
    "JSONFormatter",
    "MissingKeyError",
    "Rule",
    "RuleResult",
    "create_form",
    "get_form_logger",
    "get_settings",
    "is_empty",
    "setup_logging",
    "validate_field",
]
