"""Tests for render_action from formsmith.forms.actions."""

from markupsafe import Markup

from formsmith.forms.actions import render_action
from formsmith.lib.hooks import ACTION_LABEL, hooks


class TestRenderAction:
    def test_defaults(self):
        html = render_action()
        assert isinstance(html, Markup)
        assert html == '<button type="submit" name="Submit" class="btn btn-default">Submit</button>'

    def test_class_and_extra_classes(self):
        html = render_action("Save", class_="primary", extra_classes="pull-right wide")
        assert 'class="btn btn-primary pull-right wide"' in html

    def test_value_rendered_when_set(self):
        assert 'value="draft"' in render_action("Save", value="draft")

    def test_button_and_reset_types(self):
        assert render_action("Cancel", "button").startswith('<button type="button"')
        assert render_action("Reset", "reset").startswith('<button type="reset"')

    def test_type_is_not_enforced(self):
        assert '<button type="bogus"' in render_action("Odd", "bogus")

    def test_explicit_translator(self):
        html = render_action("Submit", translate=lambda text: f"[{text}]")
        assert ">[Submit]</button>" in html
        # The submitted name stays untranslated
        assert 'name="Submit"' in html

    def test_action_label_filter_used_without_translator(self, clean_hooks):
        hooks.add_filter(ACTION_LABEL, {"Submit": "Absenden"}.get)
        assert ">Absenden</button>" in render_action()

    def test_explicit_translator_bypasses_filter(self, clean_hooks):
        hooks.add_filter(ACTION_LABEL, lambda text: "filtered")
        assert ">mine</button>" in render_action(translate=lambda text: "mine")

    def test_label_is_escaped(self):
        assert "&lt;b&gt;" in render_action("<b>")

    def test_passthrough_attributes(self):
        assert 'data-confirm="Sure?"' in render_action("Delete", data_confirm="Sure?")
