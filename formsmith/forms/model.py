"""Read-only field and form views consumed by the renderers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    PASSWORD = "password"
    INTEGER = "integer"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    SELECT = "select"
    FILE = "file"
    DISPLAY = "display"
    HIDDEN = "hidden"
    CSRF_TOKEN = "csrf_token"
    COMPOSITE = "composite"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


# Plain text-like inputs that share the form-input styling
TEXT_KINDS = frozenset(
    {
        FieldKind.TEXT,
        FieldKind.TEXTAREA,
        FieldKind.PASSWORD,
        FieldKind.INTEGER,
        FieldKind.DATE,
        FieldKind.DATETIME,
    }
)

# Always emitted, even when a caller customizes the rest of the form
STRUCTURAL_KINDS = frozenset({FieldKind.CSRF_TOKEN, FieldKind.HIDDEN, FieldKind.DISPLAY})

# Never get a standalone label above the control
UNLABELED_KINDS = frozenset(
    {
        FieldKind.HIDDEN,
        FieldKind.CSRF_TOKEN,
        FieldKind.BOOLEAN,
        FieldKind.COMPOSITE,
        FieldKind.DISPLAY,
    }
)


def coerce_kind(kind: FieldKind | str) -> FieldKind | str:
    """Map a kind name onto FieldKind, leaving unknown names as plain strings."""
    if isinstance(kind, FieldKind):
        return kind
    try:
        return FieldKind(kind)
    except ValueError:
        return kind


@dataclass(frozen=True)
class Description:
    placeholder: str | None = None
    hint: str | None = None


@dataclass(frozen=True)
class FieldFlags:
    required: bool = False


@dataclass(frozen=True)
class Field:
    """One input unit of a form, as produced by the binding/validation layer.

    ``form`` is set for composite fields and ``entries`` for list fields;
    leaf kinds leave both empty. ``label`` is trusted markup.
    """

    id: str
    name: str
    kind: FieldKind | str = FieldKind.TEXT
    label: str = ""
    description: Description = field(default_factory=Description)
    flags: FieldFlags = field(default_factory=FieldFlags)
    errors: tuple[str, ...] = ()
    value: Any = None
    choices: tuple[tuple[str, str], ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict)
    form: Form | None = None
    entries: tuple[Field, ...] = ()

    def __post_init__(self):
        # Frozen, so normalize through object.__setattr__
        object.__setattr__(self, "kind", coerce_kind(self.kind))
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "choices", tuple(tuple(c) for c in self.choices))
        object.__setattr__(self, "entries", tuple(self.entries))

    @property
    def required(self) -> bool:
        return self.flags.required

    @property
    def is_structural(self) -> bool:
        return self.kind in STRUCTURAL_KINDS

    def __repr__(self) -> str:
        return f"Field({self.id!r}, kind={str(self.kind)!r}, errors={list(self.errors)!r})"


@dataclass(frozen=True)
class Form:
    """Ordered field collection. Insertion order is render order.

    Supports ``for field in form``, ``form["email"]`` and ``"email" in form``
    so templates can address fields by name.
    """

    name: str
    fields: tuple[Field, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __getitem__(self, field_name: str) -> Field:
        for f in self.fields:
            if f.name == field_name:
                return f
        raise KeyError(field_name)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, field_name: object) -> bool:
        return any(f.name == field_name for f in self.fields)

    @property
    def structural_fields(self) -> list[Field]:
        return [f for f in self.fields if f.is_structural]

    @property
    def visible_fields(self) -> list[Field]:
        return [f for f in self.fields if not f.is_structural]


@dataclass(frozen=True)
class Action:
    """A submit/button/reset control in the form's footer row."""

    name: str = "Submit"
    type: str = "submit"
    value: str = ""
    class_: str = "default"
    extra_classes: str = ""

    @classmethod
    def coerce(cls, spec: Action | Mapping[str, Any]) -> Action:
        """Accept an Action or a plain mapping (``class``/``extraClasses`` keys allowed)."""
        if isinstance(spec, Action):
            return spec
        return cls(
            name=spec.get("name", "Submit"),
            type=spec.get("type", "submit"),
            value=spec.get("value", ""),
            class_=spec.get("class", spec.get("class_", "default")),
            extra_classes=spec.get("extraClasses", spec.get("extra_classes", "")),
        )
