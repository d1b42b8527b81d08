"""Tests for project settings loading."""

from __future__ import annotations

from pathlib import Path

from lightform import ErrorMessage, FormSettings, create_form, get_settings


class TestFormSettings:
    """Tests for FormSettings.load."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        settings = FormSettings.load(tmp_path)

        assert settings.required_message == ErrorMessage.VALUE_NOT_REQUIRED.value
        assert settings.invalid_message == ErrorMessage.VALUE_NOT_VALID.value
        assert settings.log_json is False

    def test_load_from_file(self, settings_file: Path) -> None:
        settings = FormSettings.load(settings_file.parent)

        assert settings.required_message == "This field is required."
        assert settings.invalid_message == "Please check this value."
        assert settings.log_json is True

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".lightform.yaml").write_text(
            "form:\n  invalid_message: Nope\n", encoding="utf-8"
        )

        settings = FormSettings.load(tmp_path)

        assert settings.invalid_message == "Nope"
        assert settings.required_message == ErrorMessage.VALUE_NOT_REQUIRED.value

    def test_malformed_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".lightform.yaml").write_text("form: [unclosed", encoding="utf-8")

        assert FormSettings.load(tmp_path) == FormSettings()

    def test_wrong_shape_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".lightform.yaml").write_text("form:\n  - a\n  - b\n", encoding="utf-8")

        assert FormSettings.load(tmp_path) == FormSettings()


class TestGetSettings:
    """Tests for the cached global settings."""

    def test_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reload_picks_up_file(self, settings_file: Path) -> None:
        assert get_settings().required_message == "This field is required."

        settings_file.write_text("form:\n  required_message: Changed\n", encoding="utf-8")

        assert get_settings().required_message == "This field is required."
        assert get_settings(reload=True).required_message == "Changed"

    def test_forms_use_global_settings(self, settings_file: Path) -> None:
        form = create_form([{"key": "name", "is_required": True}])

        assert form.errors["name"] == "This field is required."
