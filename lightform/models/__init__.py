"""UI-agnostic form state.

This module provides testable state classes that can be bound to any UI
layer. The state layer tracks field values, their touched flags and
validation errors, and notifies subscribers after every change.
"""

from lightform.models.field import Field, Rule, RuleResult, is_empty
from lightform.models.form_state import Form, create_form

__all__ = [
    "Field",
    "Form",
    "Rule",
    "RuleResult",
    "create_form",
    "is_empty",
]
