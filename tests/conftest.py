"""Shared pytest fixtures."""

import pytest
import yaml

from formsmith.config import get_settings
from formsmith.forms.model import Description, Field, FieldFlags, FieldKind, Form
from formsmith.lib.hooks import hooks


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run each test from an empty directory with a fresh settings cache."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config_file(tmp_path):
    """Write a formsmith.yaml into the working directory."""

    def _create_config(config: dict):
        config_path = tmp_path / "formsmith.yaml"
        with open(config_path, "w") as f:
            yaml.safe_dump(config, f)
        get_settings.cache_clear()
        return config_path

    return _create_config


@pytest.fixture
def clean_hooks():
    """Save and restore hooks state around a test."""
    original_filters = {k: list(v) for k, v in hooks._filters.items()}
    original_actions = {k: list(v) for k, v in hooks._actions.items()}
    yield
    hooks.clear()
    hooks._filters.update(original_filters)
    hooks._actions.update(original_actions)


@pytest.fixture
def contact_form():
    """A small form with one structural field and three visible ones."""
    return Form(
        name="contact",
        fields=(
            Field(id="_csrf", name="_csrf", kind=FieldKind.CSRF_TOKEN, value="tok-123"),
            Field(id="email", name="email", label="Email", flags=FieldFlags(required=True)),
            Field(
                id="phone",
                name="phone",
                label="Phone",
                description=Description(placeholder="+1 555 0100", hint="Daytime only"),
            ),
            Field(id="agree", name="agree", kind=FieldKind.BOOLEAN, label="I agree"),
        ),
    )
