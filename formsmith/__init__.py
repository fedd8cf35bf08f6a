"""formsmith - render form schemas to UI-framework markup."""

from formsmith.forms import (
    Action,
    Description,
    Field,
    FieldFlags,
    FieldKind,
    Form,
    build_form,
    form_from_dict,
    form_identifier,
    render_action,
    render_field,
    render_form,
)

__all__ = [
    "Action",
    "Description",
    "Field",
    "FieldFlags",
    "FieldKind",
    "Form",
    "build_form",
    "form_from_dict",
    "form_identifier",
    "render_action",
    "render_field",
    "render_form",
]
