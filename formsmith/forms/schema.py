"""Build Form views from Pydantic models or declarative dicts.

These adapters stand in for the binding/validation layer: they assign ids
(including index-disambiguated ids for list entries), copy submitted values
and errors onto fields, and append the CSRF token field.
"""

from __future__ import annotations

import datetime
import enum
import logging
import re
import types
import typing
from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import BaseModel, SecretStr
from pydantic.fields import FieldInfo

from formsmith.forms.model import Description, Field, FieldFlags, FieldKind, Form, coerce_kind

logger = logging.getLogger(__name__)

CSRF_FIELD_NAME = "_csrf"

_form_registry: dict[str, type[BaseModel]] = {}

# Widget names accepted in json_schema_extra besides the FieldKind values
_WIDGET_ALIASES = {"checkbox": FieldKind.BOOLEAN, "input": FieldKind.TEXT}


class FormSchemaError(ValueError):
    """A declarative form schema could not be turned into fields."""


def camel_to_kebab(name: str) -> str:
    """Convert CamelCase to kebab-case. ContactUs -> contact-us"""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name).lower()


def derive_form_name(cls: type) -> str:
    """Derive a form name from a class name, stripping 'Form' suffix."""
    name = cls.__name__
    if name.endswith("Form"):
        name = name[:-4]
    return camel_to_kebab(name)


def get_form_model(name: str) -> type[BaseModel]:
    """Look up a registered form model by name. Raises LookupError if not found."""
    try:
        return _form_registry[name]
    except KeyError:
        available = ", ".join(sorted(_form_registry)) or "(none)"
        raise LookupError(f"No form named '{name}'. Registered: {available}")


class FormModel(BaseModel):
    """Base class for models that describe a renderable form.

    Usage:
        class SignupForm(FormModel):
            email: str = Field(json_schema_extra={"placeholder": "you@example.com"})
            agree: bool = False

        build_form(SignupForm)   # Form(name="signup", ...)
    """

    _form_name: ClassVar[str]

    def __init_subclass__(cls, form_name: str | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._form_name = form_name or derive_form_name(cls)
        _form_registry[cls._form_name] = cls


# -- Pydantic models --


def build_form(
    model: type[BaseModel],
    *,
    values: Mapping[str, Any] | None = None,
    errors: Mapping[str, Any] | None = None,
    csrf_token: str | None = None,
    name: str | None = None,
) -> Form:
    """Describe *model* as a Form.

    *values* and *errors* are keyed by field name; nested models use nested
    mappings (lists of mappings for list fields). Errors may be a string or a
    sequence of strings.
    """
    form_name = name or getattr(model, "_form_name", None) or derive_form_name(model)
    fields = _model_fields(model, values or {}, errors or {}, id_prefix="", name_prefix="")
    if csrf_token is not None:
        fields.append(Field(id=CSRF_FIELD_NAME, name=CSRF_FIELD_NAME,
                            kind=FieldKind.CSRF_TOKEN, value=csrf_token))
    return Form(name=form_name, fields=tuple(fields))


def _model_fields(model, values, errors, *, id_prefix: str, name_prefix: str) -> list[Field]:
    return [
        _model_field(field_name, info, values.get(field_name), errors.get(field_name),
                     id_prefix=id_prefix, name_prefix=name_prefix)
        for field_name, info in model.model_fields.items()
    ]


def _model_field(field_name: str, info: FieldInfo, value, error, *, id_prefix, name_prefix) -> Field:
    extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
    field_id = f"{id_prefix}{field_name}"
    qualified = f"{name_prefix}{field_name}"
    annotation = info.annotation

    common = dict(
        id=field_id,
        name=qualified,
        label=extra.get("label", info.title or field_name.replace("_", " ").title()),
        description=Description(
            placeholder=extra.get("placeholder"),
            hint=extra.get("help_text", info.description),
        ),
        flags=FieldFlags(required=info.is_required()),
        attrs=extra.get("attrs", {}),
    )

    submodel = _submodel(annotation)
    if submodel is not None:
        nested = _model_fields(submodel, value or {}, _mapping(error),
                               id_prefix=f"{field_id}-", name_prefix=f"{qualified}.")
        return Field(kind=FieldKind.COMPOSITE, form=Form(name=qualified, fields=nested),
                     errors=_error_list(error), **common)

    item_model = _list_item_model(annotation)
    if item_model is not None:
        item_errors = error if isinstance(error, list) else []
        entries = []
        for i, item in enumerate(value or []):
            item_error = item_errors[i] if i < len(item_errors) else {}
            nested = _model_fields(item_model, item or {}, _mapping(item_error),
                                   id_prefix=f"{field_id}-{i}-", name_prefix=f"{qualified}.{i}.")
            entries.append(Field(id=f"{field_id}-{i}", name=f"{qualified}.{i}",
                                 kind=FieldKind.COMPOSITE, label=f"{common['label']} {i + 1}",
                                 form=Form(name=f"{qualified}.{i}", fields=nested)))
        return Field(kind=FieldKind.LIST, entries=tuple(entries), **common)

    kind = _WIDGET_ALIASES.get(extra.get("widget"), extra.get("widget")) or _infer_kind(annotation)
    choices = extra.get("choices") or _infer_choices(annotation)
    if choices and kind == FieldKind.TEXT:
        kind = FieldKind.SELECT
    if value is None and not info.is_required():
        value = info.get_default(call_default_factory=True)
    if isinstance(value, enum.Enum):
        value = value.value
    return Field(kind=kind, value=value, choices=tuple(choices or ()),
                 errors=_error_list(error), **common)


def _infer_kind(annotation) -> FieldKind:
    """Infer the field kind from a Pydantic field annotation."""
    annotation = _unwrap_optional(annotation)
    if annotation is bool:
        return FieldKind.BOOLEAN
    if annotation is int:
        return FieldKind.INTEGER
    # datetime is a date subclass, so check it first
    if annotation is datetime.datetime:
        return FieldKind.DATETIME
    if annotation is datetime.date:
        return FieldKind.DATE
    if annotation is SecretStr:
        return FieldKind.PASSWORD
    return FieldKind.TEXT


def _infer_choices(annotation) -> list[tuple[str, str]]:
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return [(str(m.value), m.name.replace("_", " ").title()) for m in annotation]
    if typing.get_origin(annotation) is typing.Literal:
        return [(str(v), str(v)) for v in typing.get_args(annotation)]
    return []


def _unwrap_optional(annotation):
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    if typing.get_origin(annotation) in (typing.Union, types.UnionType) and len(args) == 1:
        return args[0]
    return annotation


def _submodel(annotation):
    annotation = _unwrap_optional(annotation)
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _list_item_model(annotation):
    annotation = _unwrap_optional(annotation)
    if typing.get_origin(annotation) is list:
        args = typing.get_args(annotation)
        if args:
            return _submodel(args[0])
    return None


def _mapping(error) -> Mapping[str, Any]:
    return error if isinstance(error, Mapping) else {}


def _error_list(error) -> tuple[str, ...]:
    if not error or isinstance(error, Mapping):
        return ()
    if isinstance(error, str):
        return (error,)
    return tuple(str(e) for e in error if isinstance(e, str))


# -- Declarative dicts --


def form_from_dict(data: Mapping[str, Any]) -> Form:
    """Load a form described as plain data (e.g. parsed YAML).

    Shape:
        name: contact
        fields:
          - name: email
            kind: text
            label: Email
            required: true
            placeholder: you@example.com
            hint: We never share it
            errors: [...]
            value: ...
            choices: [[value, display], ...]
            fields: [...]        # composite
            entries: [...]       # list
    """
    if not isinstance(data, Mapping) or "name" not in data:
        raise FormSchemaError("Form schema must be a mapping with a 'name' key")
    return Form(name=str(data["name"]), fields=tuple(_dict_fields(data.get("fields") or [], data["name"])))


def _dict_fields(items, path: str) -> list[Field]:
    if not isinstance(items, list):
        raise FormSchemaError(f"'{path}.fields' must be a list")
    return [_dict_field(item, path) for item in items]


def _dict_field(item, path: str) -> Field:
    if not isinstance(item, Mapping) or "name" not in item:
        logger.warning("Rejected field entry under %s: %r", path, item)
        raise FormSchemaError(f"Every field under '{path}' needs a 'name'")

    name = str(item["name"])
    kind = coerce_kind(item.get("kind", FieldKind.TEXT))
    errors = item.get("errors") or ()
    if isinstance(errors, str):
        errors = (errors,)

    form = None
    entries: list[Field] = []
    if kind == FieldKind.COMPOSITE:
        form = Form(name=name, fields=tuple(_dict_fields(item.get("fields") or [], f"{path}.{name}")))
    elif kind == FieldKind.LIST:
        entries = _dict_fields(item.get("entries") or [], f"{path}.{name}")

    try:
        choices = tuple((str(v), str(d)) for v, d in item.get("choices") or ())
    except (TypeError, ValueError):
        raise FormSchemaError(f"'{path}.{name}.choices' must be [value, display] pairs")

    return Field(
        id=str(item.get("id", name)),
        name=name,
        kind=kind,
        label=str(item.get("label", name.replace("_", " ").title())),
        description=Description(placeholder=item.get("placeholder"), hint=item.get("hint")),
        flags=FieldFlags(required=bool(item.get("required", False))),
        errors=tuple(str(e) for e in errors),
        value=item.get("value"),
        choices=choices,
        attrs=dict(item.get("attrs") or {}),
        form=form,
        entries=tuple(entries),
    )
