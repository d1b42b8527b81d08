"""Tests for the Field record and the emptiness predicate."""

from __future__ import annotations

import dataclasses

import pytest

from lightform import Field, is_empty


class TestIsEmpty:
    """Tests for is_empty."""

    @pytest.mark.parametrize("value", [None, "", [], {}, (), set(), b""])
    def test_empty_values(self, value: object) -> None:
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", ["a", " ", [0], {"a": 1}, 0, 0.0, False, True, 42])
    def test_non_empty_values(self, value: object) -> None:
        """Numbers and booleans are never empty."""
        assert is_empty(value) is False


class TestField:
    """Tests for Field dataclass."""

    def test_field_defaults(self) -> None:
        field = Field(key="name")

        assert field.key == "name"
        assert field.label == ""
        assert field.value == ""
        assert field.is_required is False
        assert field.required_message is None
        assert field.validation == ()

    def test_field_is_frozen(self) -> None:
        field = Field(key="name")

        with pytest.raises(dataclasses.FrozenInstanceError):
            field.value = "changed"  # type: ignore[misc]

    def test_with_value_returns_copy(self) -> None:
        """with_value leaves the original untouched."""
        field = Field(key="name", label="Name", value="old", is_required=True)

        updated = field.with_value("new")

        assert updated.value == "new"
        assert updated.label == "Name"
        assert updated.is_required is True
        assert field.value == "old"

    def test_to_dict(self) -> None:
        field = Field(key="age", label="Age", value=3, validation=(lambda v: (True, None),))

        assert field.to_dict() == {
            "key": "age",
            "label": "Age",
            "value": 3,
            "is_required": False,
            "required_message": None,
        }

    def test_str(self) -> None:
        assert str(Field(key="name", value="Ada")) == "name='Ada'"
        assert str(Field(key="name", is_required=True)) == "name='' (required)"
