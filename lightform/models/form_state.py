"""Form state container.

This class provides a UI-agnostic representation of a form that can be
tested without any UI toolkit. It registers fields, tracks each field's
value, touched flag and validation error, and notifies subscribed
listeners after every change.

Validation triggered by a mutation (register, update, clear) is
fire-and-forget: inside a running event loop it is scheduled as a task and
the mutation returns at once; without a running loop it is driven to
completion before the mutation returns.
"""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import Any, Callable, Coroutine, Iterable, Iterator, Mapping, Optional, Union

from lightform import validation
from lightform.constants import FIELD_DEFAULT_VALUES
from lightform.errors import MissingKeyError
from lightform.logging import get_form_logger
from lightform.models.field import Field
from lightform.observers import ChangeKind, FormEvent, Listener, ObserverList
from lightform.settings import FormSettings, get_settings

FieldOptions = Union[Mapping[str, Any], Field]

# (key, revision at start, field snapshot being validated)
_Snapshot = tuple[str, int, Field]


class Form:
    """Registry of fields plus their touched and error state.

    Example:
        form = Form(
            [
                {"key": "name", "is_required": True},
                {"key": "email", "validation": [r"^[^@]+@[^@]+$"]},
            ],
            name="signup",
        )
        form.update({"name": "Ada"})
        await form.validate()
        form.is_valid

    Every field carries a revision number, bumped whenever its value is
    replaced or a validation of it starts. A validation only writes its
    result if the revision it started with is still current, so a slow
    validation of an old value never overwrites a newer result.
    """

    def __init__(
        self,
        fields: Optional[Iterable[FieldOptions]] = None,
        *,
        name: Optional[str] = None,
        settings: Optional[FormSettings] = None,
    ) -> None:
        self.name = name
        self._settings = settings

        self._fields: dict[str, Field] = {}
        self._initial_values: dict[str, Field] = {}
        self._touched: dict[str, bool] = {}
        self._errors: dict[str, Optional[str]] = {}
        self._revisions: dict[str, int] = {}

        self._pending: set[asyncio.Task] = set()
        self._observers = ObserverList()
        self._logger = get_form_logger(__name__, form=name or "")

        for item in fields or ():
            if isinstance(item, Field):
                self.register(item)
                continue
            options = dict(item)
            skip = bool(options.pop("skip_initial_validation", False))
            self.register(options, skip_initial_validation=skip)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def settings(self) -> FormSettings:
        return self._settings if self._settings is not None else get_settings()

    @property
    def keys(self) -> tuple[str, ...]:
        """Registered keys in registration order."""
        return tuple(self._fields)

    @property
    def fields(self) -> Mapping[str, Field]:
        """Read-only live view of key -> current field."""
        return MappingProxyType(self._fields)

    @property
    def initial_values(self) -> Mapping[str, Field]:
        """Read-only view of key -> field snapshot taken at registration."""
        return MappingProxyType(self._initial_values)

    @property
    def values(self) -> dict[str, Any]:
        return {key: field.value for key, field in self._fields.items()}

    @property
    def errors(self) -> dict[str, Optional[str]]:
        """Last computed error per key; None means no error or not validated."""
        return dict(self._errors)

    @property
    def touched(self) -> dict[str, bool]:
        return dict(self._touched)

    @property
    def is_valid(self) -> bool:
        """True if no field currently holds an error.

        Reads the last computed errors; it never runs validation itself.
        """
        return all(error is None for error in self._errors.values())

    @property
    def has_pending(self) -> bool:
        """Whether scheduled validations are still in flight."""
        return bool(self._pending)

    def __getitem__(self, key: str) -> Field:
        return self._fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Form(name={self.name!r}, keys={list(self._fields)!r}, is_valid={self.is_valid})"

    def get(self, key: str, default: Optional[Field] = None) -> Optional[Field]:
        return self._fields.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the form state for serialization or debugging."""
        return {
            "name": self.name,
            "values": self.values,
            "touched": self.touched,
            "errors": self.errors,
            "is_valid": self.is_valid,
        }

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a FormEvent after every change.

        Returns:
            Callable that unsubscribes the listener
        """
        return self._observers.subscribe(listener)

    def _notify(self, kind: ChangeKind, keys: Iterable[str]) -> None:
        self._observers.notify(FormEvent(kind=kind, keys=tuple(keys)))

    # ------------------------------------------------------------------
    # Field registry
    # ------------------------------------------------------------------

    def register(
        self,
        options: Optional[FieldOptions] = None,
        skip_initial_validation: bool = False,
        **kwargs: Any,
    ) -> Field:
        """Register a field and return it.

        Registering a key twice keeps a single slot in the key order but
        replaces the snapshot and resets the field's touched and error state.

        Args:
            options: Field attributes (key, label, value, is_required,
                required_message, validation) or an existing Field
            skip_initial_validation: Do not validate the initial value
            **kwargs: Attributes merged over options

        Returns:
            The constructed field

        Raises:
            MissingKeyError: If key is missing or empty
            InvalidRuleError: If a validation rule is neither pattern nor callable
        """
        if isinstance(options, Field):
            merged: dict[str, Any] = dict(options.to_dict(), validation=options.validation)
        else:
            merged = dict(options or {})
        merged.update(kwargs)

        key = merged.get("key")
        if not key:
            raise MissingKeyError(merged)

        unknown = sorted(set(merged) - set(FIELD_DEFAULT_VALUES))
        if unknown:
            self._logger.warning(
                "Ignoring unknown options for field %s: %s", key, ", ".join(unknown)
            )

        value = merged.get("value")
        field = Field(
            key=key,
            label=merged.get("label") or "",
            value=value if value is not None else FIELD_DEFAULT_VALUES["value"],
            is_required=bool(merged.get("is_required", False)),
            required_message=merged.get("required_message"),
            validation=validation.normalize_rules(key, merged.get("validation")),
        )

        self._fields[key] = field
        self._initial_values[key] = field
        self._touched[key] = False
        self._errors[key] = None
        self._revisions[key] = self._revisions.get(key, 0) + 1

        self._logger.debug("Registered field %s", key, extra={"field": key})
        self._notify(ChangeKind.REGISTER, (key,))

        if not skip_initial_validation:
            self._schedule((key,))

        return field

    generate_field = register

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _begin(self, key: str) -> _Snapshot:
        self._revisions[key] += 1
        return key, self._revisions[key], self._fields[key]

    async def _run(self, snapshot: _Snapshot) -> None:
        key, revision, field = snapshot
        settings = self.settings
        error = await validation.validate_field(
            field.value,
            field.validation,
            field.is_required,
            field.required_message,
            required_default=settings.required_message,
            invalid_default=settings.invalid_message,
        )

        if self._revisions.get(key) != revision:
            self._logger.debug("Discarded stale validation of %s", key, extra={"field": key})
            return

        if self._errors.get(key) != error:
            self._errors[key] = error
            self._notify(ChangeKind.ERRORS, (key,))

    async def _run_all(self, snapshots: Iterable[_Snapshot]) -> None:
        # A raising rule must not leave the remaining fields unvalidated
        first_exc: Optional[BaseException] = None
        for snapshot in snapshots:
            try:
                await self._run(snapshot)
            except Exception as exc:
                if first_exc is None:
                    first_exc = exc
        if first_exc is not None:
            raise first_exc

    def _schedule(self, keys: Iterable[str]) -> None:
        # Snapshots are taken now so later mutations mark these runs as stale
        snapshots = [self._begin(key) for key in keys]
        if not snapshots:
            return

        coro: Coroutine[Any, Any, None] = self._run_all(snapshots)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return

        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.error("Scheduled validation failed: %s", exc, exc_info=exc)

    async def wait_pending(self) -> None:
        """Wait until every scheduled validation has finished.

        Failures of scheduled validations are logged, not raised.
        """
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def validate_field(self, key: str) -> Optional[str]:
        """Validate one registered field and record its error.

        Returns:
            The recorded error (None when valid or when key is unknown)
        """
        if key not in self._fields:
            return None
        await self._run(self._begin(key))
        return self._errors[key]

    async def validate_all(self) -> None:
        """Validate every field, one at a time, in registration order.

        Every field is validated even if a rule raises; the first exception
        is re-raised afterwards.
        """
        # Lazy, so each snapshot is taken when its turn comes
        await self._run_all(self._begin(key) for key in self.keys)

    async def validate(self) -> None:
        """Recompute every error; same as validate_all()."""
        await self.validate_all()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update(self, changes: Mapping[str, Any], skip_validation: bool = False) -> None:
        """Set new values, mark them touched and revalidate them.

        Keys that are not registered fields are ignored.
        """
        changed = [key for key in changes if key in self._fields]
        ignored = [key for key in changes if key not in self._fields]
        if ignored:
            self._logger.debug("Ignoring unregistered keys: %s", ", ".join(map(str, ignored)))
        if not changed:
            return

        for key in changed:
            self._fields[key] = self._fields[key].with_value(changes[key])
            self._touched[key] = True
            self._revisions[key] += 1

        self._notify(ChangeKind.UPDATE, changed)

        if not skip_validation:
            self._schedule(changed)

    def _restore_initial(self) -> tuple[str, ...]:
        keys = self.keys
        for key in keys:
            self._fields[key] = self._initial_values[key]
            self._touched[key] = False
            self._revisions[key] += 1
        return keys

    def reset(self) -> None:
        """Restore initial values, untouch everything and blank all errors.

        No validation runs, so is_valid reads True until validate() is called.
        """
        keys = self._restore_initial()
        for key in keys:
            self._errors[key] = None
        self._notify(ChangeKind.RESET, keys)

    def clear(self) -> None:
        """Restore initial values, untouch everything and revalidate.

        Unlike reset(), errors end up reflecting the restored values.
        """
        keys = self._restore_initial()
        self._notify(ChangeKind.CLEAR, keys)
        self._schedule(keys)

    def untouch(self, key: str) -> None:
        """Mark one field as not touched; values and errors are kept."""
        if key not in self._touched:
            return
        self._touched[key] = False
        self._notify(ChangeKind.UNTOUCH, (key,))

    def untouch_all(self) -> None:
        """Mark every field as not touched; values and errors are kept."""
        for key in self._touched:
            self._touched[key] = False
        self._notify(ChangeKind.UNTOUCH, self.keys)


def create_form(
    fields: Iterable[FieldOptions],
    name: Optional[str] = None,
    settings: Optional[FormSettings] = None,
) -> Form:
    """Build a form from a list of field options."""
    return Form(fields, name=name, settings=settings)
