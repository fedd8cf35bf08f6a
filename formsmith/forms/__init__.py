"""Form rendering - fields, actions and complete forms as Markup."""

from formsmith.forms.actions import render_action
from formsmith.forms.core import form_identifier, render_form
from formsmith.forms.fields import render_field
from formsmith.forms.model import Action, Description, Field, FieldFlags, FieldKind, Form
from formsmith.forms.schema import FormModel, FormSchemaError, build_form, form_from_dict, get_form_model

__all__ = [
    "Action",
    "Description",
    "Field",
    "FieldFlags",
    "FieldKind",
    "Form",
    "FormModel",
    "FormSchemaError",
    "build_form",
    "form_from_dict",
    "form_identifier",
    "get_form_model",
    "render_action",
    "render_field",
    "render_form",
]
