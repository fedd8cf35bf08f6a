"""CLI commands for formsmith."""

import logging
from pathlib import Path

import click
import yaml

from formsmith.forms.core import render_form
from formsmith.forms.schema import FormSchemaError, form_from_dict


@click.group()
@click.version_option(package_name="formsmith")
def cli():
    """formsmith - render form schemas to framework-styled markup."""
    pass


@cli.command()
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--name", "form_name", default=None, help="Form name (defaults to the schema's name)")
@click.option("--uniquifier", default=None, help="Suffix making this form instance's ids unique")
@click.option("--action", default="", help="Form action URL")
@click.option("--method", default=None, help="HTTP method (defaults to the configured method)")
@click.option("--xhr", is_flag=True, help="Emit the XHR message region")
@click.option("--with-files", is_flag=True, help="Use multipart encoding for file uploads")
@click.option("--hide-action", is_flag=True, help="Omit the default submit button")
@click.option("--submit-label", default="Submit", help="Label of the default submit button")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def render(schema, form_name, uniquifier, action, method, xhr, with_files, hide_action,
           submit_label, log_level):
    """Render the form described by a YAML SCHEMA file to stdout."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    with open(schema, "r") as f:
        data = yaml.safe_load(f)

    try:
        form = form_from_dict(data)
    except FormSchemaError as e:
        raise click.ClickException(str(e))

    click.echo(
        render_form(
            form,
            form_name or form.name,
            action=action,
            method=method,
            as_xhr=xhr,
            form_name_uniquifier=uniquifier,
            hide_action=hide_action,
            action_name=submit_label,
            with_files=with_files,
        )
    )
