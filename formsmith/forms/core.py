"""Form rendering: identifier resolution, field iteration, action row and script hooks."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from markupsafe import Markup, escape

from formsmith.config import get_settings
from formsmith.forms.actions import render_action
from formsmith.forms.fields import render_field
from formsmith.forms.model import Action, Form
from formsmith.lib.hooks import FORM_RENDERED, FORM_RENDERING, form_rendered_hook, hooks

logger = logging.getLogger(__name__)

# Renders the visible part of a form when the caller takes over field iteration
Customizer = Callable[[Form], Any]


def form_identifier(form_name: str, uniquifier: str | None = None) -> str:
    """Resolve the DOM id/name of one rendered form instance.

    The same form template rendered several times on one page needs a
    distinct *uniquifier* per instance, otherwise field ids collide. That
    is the caller's responsibility; nothing here can detect it.
    """
    if uniquifier is None or uniquifier == "":
        return form_name
    return f"{form_name}{get_settings().id_delimiter}{uniquifier}"


def render_form(
    form: Form,
    form_name: str,
    *,
    action: str = "",
    method: str | None = None,
    as_xhr: bool = False,
    with_labels: bool = False,
    actions: Iterable[Action | Mapping[str, Any]] | None = None,
    form_name_uniquifier: str | None = None,
    hide_action: bool = False,
    action_name: str = "Submit",
    action_class: str = "success",
    data: Mapping[str, Any] | None = None,
    with_files: bool = False,
    caller: Customizer | None = None,
) -> Markup:
    """Render *form* as a complete ``<form>`` block.

    With *caller*, csrf/hidden/display fields are emitted first and then
    ``caller(form)`` renders the rest. Without it, every field is rendered
    in order; supplying *data* drops all labels and injects non-empty
    entries as field values.

    *actions* of ``None`` means one default button (unless *hide_action*);
    an empty list means no buttons at all.

    *with_labels* is accepted for call-site compatibility and has no effect.
    """
    settings = get_settings()
    theme = settings.theme
    form_id = form_identifier(form_name, form_name_uniquifier)
    method = method or settings.default_method

    logger.debug("Rendering form %s (%d fields)", form_id, len(form))
    hooks.do_action(FORM_RENDERING, form_id)

    html = f'<div class="{theme.form_prefix}{escape(form_name)}">'
    html += (
        f'<form id="{escape(form_id)}" name="{escape(form_id)}" class="{theme.form}"'
        f' method="{escape(method)}" action="{escape(action)}"'
    )
    if with_files:
        html += ' enctype="multipart/form-data"'
    html += ">"

    if as_xhr:
        html += f'<div class="{theme.messages}" id="{escape(form_id)}-messages"></div>'

    if caller is not None:
        for field in form.structural_fields:
            html += str(render_field(field, form_id=form_id))
        customized = caller(form)
        if customized is not None:
            html += str(customized)
    else:
        for field in form:
            html += str(_render_with_data(field, form_id, data))

    html += str(_action_row(actions, hide_action, action_name, action_class))
    html += str(_script_hooks(form_id, as_xhr))
    html += "</form></div>"

    rendered = Markup(html)
    rendered = hooks.apply_filters(form_rendered_hook(form_name), rendered)
    return hooks.apply_filters(FORM_RENDERED, rendered, form_name)


def _render_with_data(field, form_id: str, data: Mapping[str, Any] | None) -> Markup:
    if data is None:
        return render_field(field, form_id=form_id)
    entry = data.get(field.name)
    if entry is None or entry == "":
        return render_field(field, with_label=False, form_id=form_id)
    return render_field(field, with_label=False, value=entry, form_id=form_id)


def _action_row(actions, hide_action: bool, action_name: str, action_class: str) -> Markup:
    theme = get_settings().theme
    if actions is not None:
        buttons = "".join(
            str(render_action(a.name, a.type, a.value, a.class_, a.extra_classes))
            for a in map(Action.coerce, actions)
        )
        return Markup(
            f'<div class="{theme.actions}">{buttons}</div><div class="{theme.clear}"></div>'
        )
    if hide_action:
        return Markup("")
    return Markup(
        f'<div class="{theme.actions}">{render_action(action_name, "submit", class_=action_class)}</div>'
    )


def _script_hooks(form_id: str, as_xhr: bool) -> Markup:
    """Expose the form's handles for an external submit-interception script."""
    namespace = get_settings().script_namespace
    handles = {
        "form": f"#{form_id}",
        "submit": f'#{form_id} button[type="submit"]',
        "messages": f"#{form_id}-messages",
        "xhr": as_xhr,
    }
    # Keep "</script>" from closing the block early
    payload = json.dumps(handles).replace("</", "<\\/")
    key = json.dumps(form_id).replace("</", "<\\/")
    return Markup(
        f'<script data-{namespace}-form="{escape(form_id)}">'
        f"window.{namespace} = window.{namespace} || {{forms: {{}}}};"
        f"window.{namespace}.forms[{key}] = {payload};"
        "</script>"
    )
