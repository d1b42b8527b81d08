"""Project settings loader.

Reads project-specific form configuration from .lightform.yaml in the
project root. This allows an application to customize the generic
validation messages without touching every field declaration.

Example .lightform.yaml:
    form:
      required_message: "This field is required."
      invalid_message: "Please check this value."
      log_json: false
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from lightform.constants import SETTINGS_FILENAME, ErrorMessage

logger = logging.getLogger(__name__)


@dataclass
class FormSettings:
    """Form configuration settings."""

    # Message used when a required field is empty and has no requiredMessage
    required_message: str = ErrorMessage.VALUE_NOT_REQUIRED.value

    # Message used when a rule fails without providing its own message
    invalid_message: str = ErrorMessage.VALUE_NOT_VALID.value

    # Whether setup_logging should emit JSON records
    log_json: bool = False

    @classmethod
    def load(cls, project_root: Path | None = None) -> "FormSettings":
        """Load settings from .lightform.yaml in project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            FormSettings with values from config file or defaults.
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
            form_config = config.get("form") or {}
            return cls(
                required_message=str(
                    form_config.get("required_message", cls.required_message)
                ),
                invalid_message=str(
                    form_config.get("invalid_message", cls.invalid_message)
                ),
                log_json=bool(form_config.get("log_json", cls.log_json)),
            )
        except (yaml.YAMLError, OSError, AttributeError) as e:
            # If config file is malformed, use defaults
            logger.warning("Ignoring malformed %s: %s", config_path, e)
            return cls()


# Global settings instance (loaded on first access)
_settings: FormSettings | None = None


def get_settings(reload: bool = False) -> FormSettings:
    """Get the global form settings.

    Args:
        reload: Force reload from config file.

    Returns:
        FormSettings instance.
    """
    global _settings
    if _settings is None or reload:
        _settings = FormSettings.load()
    return _settings
