"""Footer-row button rendering."""

from __future__ import annotations

from typing import Any, Callable

from markupsafe import Markup, escape

from formsmith.config import get_settings
from formsmith.forms.fields import _join, _render_attrs
from formsmith.lib.hooks import ACTION_LABEL, hooks


def render_action(
    name: str = "Submit",
    type: str = "submit",
    value: str = "",
    class_: str = "default",
    extra_classes: str = "",
    *,
    translate: Callable[[str], str] | None = None,
    **attrs: Any,
) -> Markup:
    """Render one button-shaped control.

    *name* is the displayed text and goes through *translate*, or through the
    ``action_label`` filter when no translator is given. *type* is not
    checked; callers are expected to pass submit, button or reset.
    """
    theme = get_settings().theme
    label = translate(name) if translate is not None else hooks.apply_filters(ACTION_LABEL, name)
    merged = {
        "class_": _join(theme.button, f"{theme.button_prefix}{class_}" if class_ else None, extra_classes),
        "value": value,
        **attrs,
    }
    return Markup(
        f'<button type="{escape(type)}" name="{escape(name)}"{_render_attrs(merged)}>'
        f"{escape(label)}</button>"
    )
