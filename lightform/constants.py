"""Shared constants for lightform modules."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorMessage(str, Enum):
    """Built-in messages used when no custom message is given."""

    KEY_NOT_EXISTS = "Key should exists."
    VALUE_NOT_REQUIRED = "Value should be required."
    VALUE_NOT_VALID = "Value is not valid."


# Attribute defaults merged under the options passed to Form.register
FIELD_DEFAULT_VALUES: dict[str, Any] = {
    "key": "",
    "label": "",
    "value": "",
    "is_required": False,
    "required_message": None,
    "validation": (),
}

# Name of the per-project settings file looked up in the project root
SETTINGS_FILENAME = ".lightform.yaml"
