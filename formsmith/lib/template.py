from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import jinja2
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.template import TemplateConfig
from markupsafe import Markup

from formsmith.forms.actions import render_action
from formsmith.forms.core import form_identifier, render_form
from formsmith.forms.fields import render_field
from formsmith.forms.model import Form


class Template:
    """Template resolver with fallback support.

    Resolves templates in order of specificity:
    - Template("form", "contact") → tries form-contact.html, falls back to form.html
    - Template("form", "contact", "inline") → form-contact-inline.html → form-contact.html → form.html
    """

    def __init__(self, template_type: str, *slugs: str):
        self.template_type = template_type
        self.slugs = slugs

    def _candidates(self) -> list[str]:
        """Build list of template names to try, from most to least specific."""
        candidates = []
        if self.slugs:
            for i in range(len(self.slugs), 0, -1):
                slug_part = "-".join(self.slugs[:i])
                candidates.append(f"{self.template_type}-{slug_part}.html")
        candidates.append(f"{self.template_type}.html")
        return candidates

    def try_render(self, env, **context) -> str | None:
        """Attempt to render using the template hierarchy.

        *env* is anything with ``get_template`` (a Jinja Environment or a
        Litestar template engine). Returns None if no candidate exists.
        """
        for candidate in self._candidates():
            try:
                template = env.get_template(candidate)
                return template.render(**context)
            except jinja2.TemplateNotFound:
                continue
        return None

    def __repr__(self) -> str:
        return f"Template({self.template_type!r}, {', '.join(repr(s) for s in self.slugs)})"


def jinja_render_form(form: Form, form_name: str, caller=None, **options: Any) -> Markup:
    """``render_form`` as a Jinja global.

    Supports both call-block shapes:
        {% call render_form(form, "contact") %}...{% endcall %}
        {% call(f) render_form(form, "contact") %}{{ render_field(f["email"]) }}{% endcall %}
    """
    customize = None
    if caller is not None:
        if getattr(caller, "arguments", None) == ():
            customize = lambda _form: caller()  # noqa: E731
        else:
            customize = caller
    return render_form(form, form_name, caller=customize, **options)


FORM_GLOBALS = {
    "render_field": render_field,
    "render_action": render_action,
    "render_form": jinja_render_form,
    "form_identifier": form_identifier,
}


def register_globals(env: jinja2.Environment) -> jinja2.Environment:
    """Expose the renderers to every template of *env*."""
    env.globals.update(FORM_GLOBALS)
    return env


def render_form_template(env, form: Form, form_name: str, **options: Any) -> Markup:
    """Render a form using template hierarchy:
    form-{name}.html -> form.html -> programmatic fallback

    Templates receive ``form``, ``form_name`` and ``options``.
    """
    rendered = Template("form", form_name).try_render(
        env, form=form, form_name=form_name, options=options
    )
    if rendered is not None:
        return Markup(rendered)
    return render_form(form, form_name, **options)


def _engine_callback(engine: JinjaTemplateEngine) -> None:
    register_globals(engine.engine)


def get_template_config(directories: Path | Sequence[Path]) -> TemplateConfig:
    """Jinja template configuration for a Litestar app, with the form renderers registered."""
    return TemplateConfig(
        directory=directories,
        engine=JinjaTemplateEngine,
        engine_callback=_engine_callback,
    )
