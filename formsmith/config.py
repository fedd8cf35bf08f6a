import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

CONFIG_FILE_NAME = "formsmith.yaml"


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def load_config_file(path: Path | None = None) -> dict:
    """Load and parse formsmith.yaml with environment variable interpolation."""
    config_path = path or Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE_NAME} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class ThemeConfig(BaseModel):
    """CSS class names emitted by the renderers.

    The defaults target Bootstrap 2 style markup; every name can be swapped
    to match another stylesheet.
    """

    form: str = "form-horizontal"
    group: str = "control-group"
    field_prefix: str = "field-"
    form_prefix: str = "form-"
    label: str = "control-label"
    required: str = "required"
    marked_required: str = "marked-required"
    input: str = "input-xlarge"
    picker: str = "chosen-select"
    file: str = "input-file input-xlarge"
    display: str = "uneditable-input"
    checkbox: str = "checkbox"
    inline_label: str = "inline"
    error: str = "help-inline"
    hint: str = "help-block"
    actions: str = "form-actions"
    clear: str = "clearfix"
    button: str = "btn"
    button_prefix: str = "btn-"
    messages: str = "form-messages"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FORMSMITH_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Joins form names, uniquifiers and field ids into DOM identifiers
    id_delimiter: str = "-"
    default_method: str = "POST"
    # Global JS object the scripting hook block registers forms under
    script_namespace: str = "formsmith"

    theme: ThemeConfig = ThemeConfig()


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment and formsmith.yaml."""
    base_settings = Settings()

    try:
        file_config = load_config_file()
    except FileNotFoundError:
        return base_settings

    updates = {}

    for key in ("id_delimiter", "default_method", "script_namespace"):
        if key in file_config:
            updates[key] = file_config[key]

    if "theme" in file_config:
        theme = base_settings.theme.model_dump()
        theme.update(file_config["theme"])
        updates["theme"] = ThemeConfig(**theme)

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings
