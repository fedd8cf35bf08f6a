"""Field rendering: one field (leaf or composite) to a markup fragment.

    render_field(field)                          - label + control + errors + hint
    render_field(field, with_label=False)        - control only
    render_field(field, value="x", form_id="f")  - inject a value, scope ids under form "f"

Extra keyword arguments become HTML attributes on the control:
    render_field(field, data_role="search", autofocus="autofocus")
"""

from __future__ import annotations

import logging
from typing import Any

from markupsafe import Markup, escape

from formsmith.config import get_settings
from formsmith.forms.model import TEXT_KINDS, UNLABELED_KINDS, Field, FieldKind
from formsmith.lib.hooks import FIELD_RENDERED, hooks

logger = logging.getLogger(__name__)

_INPUT_TYPES = {
    FieldKind.TEXT: "text",
    FieldKind.PASSWORD: "password",
    FieldKind.INTEGER: "number",
    FieldKind.DATE: "date",
    FieldKind.DATETIME: "datetime-local",
    FieldKind.FILE: "file",
    FieldKind.HIDDEN: "hidden",
    FieldKind.CSRF_TOKEN: "hidden",
}


def compose_id(form_id: str | None, field_id: str) -> str:
    """DOM id of a field rendered inside the form identified by *form_id*."""
    if not form_id:
        return field_id
    return f"{form_id}{get_settings().id_delimiter}{field_id}"


def render_field(
    field: Field,
    *,
    with_label: bool = True,
    placeholder: str | None = None,
    hint: str | None = None,
    class_: str | None = None,
    value: Any = None,
    form_id: str | None = None,
    **attrs: Any,
) -> Markup:
    """Render *field* inside a container classed after its DOM id.

    Nothing passed in is mutated; *value* overrides ``field.value`` for this
    call only. Unknown kinds render like a plain input.
    """
    theme = get_settings().theme
    dom_id = compose_id(form_id, field.id)

    # Only the label is trusted markup; placeholders are plain text
    placeholder = field.description.placeholder or placeholder or Markup(field.label)
    hint = field.description.hint or hint
    classes = _join(class_, theme.required if field.required else None)

    html = f'<div class="{theme.group} {theme.field_prefix}{escape(dom_id)}">'

    if with_label and field.kind not in UNLABELED_KINDS:
        html += str(label_tag(field, None if field.kind == FieldKind.LIST else dom_id))

    kind = field.kind
    if kind == FieldKind.BOOLEAN:
        html += str(_boolean(field, dom_id, with_label, classes, placeholder, value, attrs))
    elif kind == FieldKind.SELECT:
        html += str(_select(field, dom_id, _join(classes, theme.picker), value, attrs))
    elif kind == FieldKind.COMPOSITE:
        # Children keep their own ids; only the form namespace is carried down
        if field.form is not None:
            for child in field.form:
                html += str(render_field(child, with_label=with_label, form_id=form_id))
    elif kind == FieldKind.LIST:
        for entry in field.entries:
            html += str(render_field(entry, with_label=with_label, form_id=form_id))
    elif kind in TEXT_KINDS:
        html += str(widget(field, dom_id, class_=_join(classes, theme.input),
                           placeholder=placeholder, value=value, **attrs))
    elif kind == FieldKind.FILE:
        html += str(widget(field, dom_id, class_=_join(classes, theme.file), **attrs))
    elif kind == FieldKind.DISPLAY:
        html += str(_display(field, dom_id, _join(classes, theme.display), value, attrs))
    else:
        if not isinstance(kind, FieldKind):
            logger.debug("Unknown field kind %r for %s, rendering as plain input", kind, field.id)
        html += str(widget(field, dom_id, class_=classes, placeholder=placeholder,
                           value=value, **attrs))

    if field.errors:
        html += f'<span class="{theme.error}">{escape(", ".join(field.errors))}</span>'
    if hint:
        html += f'<p class="{theme.hint}">{escape(hint)}</p>'

    html += "</div>"
    return hooks.apply_filters(FIELD_RENDERED, Markup(html), field)


def label_tag(field: Field, dom_id: str | None) -> Markup:
    """The standalone label above a control.

    A *dom_id* of None leaves out ``for``; list fields have no control of
    their own to point at.

    ``required`` and ``marked-required`` are independent: the first follows
    the field's flags, the second its current errors.
    """
    theme = get_settings().theme
    classes = _join(
        theme.label,
        theme.required if field.required else None,
        theme.marked_required if field.errors else None,
    )
    target = f' for="{escape(dom_id)}"' if dom_id is not None else ""
    return Markup(f'<label class="{classes}"{target}>{Markup(field.label)}</label>')


def widget(field: Field, dom_id: str, *, value: Any = None, **override_attrs: Any) -> Markup:
    """Render the bare control for a leaf field (input, textarea or hidden input)."""
    current = field.value if value is None else value
    merged = {**field.attrs, **override_attrs}

    if field.kind == FieldKind.TEXTAREA:
        return Markup(
            f'<textarea id="{escape(dom_id)}" name="{escape(field.name)}"{_render_attrs(merged)}>'
            f"{escape(_text(current))}</textarea>"
        )

    input_type = merged.pop("type", None) or _INPUT_TYPES.get(field.kind, "text")
    if input_type in ("hidden", "file"):
        merged.pop("placeholder", None)
    html = f'<input type="{escape(input_type)}" id="{escape(dom_id)}" name="{escape(field.name)}"'
    if input_type != "file":
        html += f' value="{escape(_text(current))}"'
    return Markup(html + _render_attrs(merged) + ">")


def _boolean(field, dom_id, with_label, classes, text, value, attrs) -> Markup:
    # The describing text sits after the checkbox, not above it
    theme = get_settings().theme
    html = ""
    if with_label:
        html += f'<label class="{theme.label}">{Markup(field.label)}</label>'

    current = field.value if value is None else value
    merged = {**field.attrs, **attrs, "class_": classes}
    checked = " checked" if current else ""
    html += (
        f'<div class="{theme.checkbox}">'
        f'<input type="checkbox" id="{escape(dom_id)}" name="{escape(field.name)}"'
        f"{checked}{_render_attrs(merged)}>"
        f'<label class="{theme.inline_label}" for="{escape(dom_id)}">{escape(text)}</label>'
        "</div>"
    )
    return Markup(html)


def _select(field, dom_id, classes, value, attrs) -> Markup:
    current = field.value if value is None else value
    merged = {**field.attrs, **attrs, "class_": classes}
    html = f'<select id="{escape(dom_id)}" name="{escape(field.name)}"{_render_attrs(merged)}>'
    for val, display in field.choices:
        selected = " selected" if str(val) == _text(current) else ""
        html += f'<option value="{escape(str(val))}"{selected}>{escape(str(display))}</option>'
    html += "</select>"
    return Markup(html)


def _display(field, dom_id, classes, value, attrs) -> Markup:
    current = field.value if value is None else value
    merged = {**field.attrs, **attrs, "class_": classes}
    return Markup(
        f'<span id="{escape(dom_id)}"{_render_attrs(merged)}>{escape(_text(current))}</span>'
    )


# -- Utilities --


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _join(*classes: str | None) -> str:
    return " ".join(c for c in classes if c)


def _render_attrs(attrs: dict) -> str:
    """Render a dict as HTML attributes string. Returns '' or ' key="val" key2="val2"'.

    Empty and None values are skipped so optional classes leave no trace.
    """
    parts = []
    for k, v in attrs.items():
        if v is None or v == "":
            continue
        # Convert Python naming to HTML: class_ -> class, data_id -> data-id
        attr_name = k.rstrip("_").replace("_", "-")
        parts.append(f'{attr_name}="{escape(str(v))}"')
    if not parts:
        return ""
    return " " + " ".join(parts)
