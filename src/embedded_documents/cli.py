"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

import click
import yaml

from embedded_documents.attribute_store import UnknownAttributeError
from embedded_documents.configuration import (
    DEFAULT_DEFINITIONS_FILENAME,
    ConfigurationError,
    build_models,
    load_attribute_file,
    load_model_definitions,
    write_placeholder_definitions,
)
from embedded_documents.document_model import EmbeddedDocument
from embedded_documents.key_definitions import CoercionError
from embedded_documents.schema_report import format_option_value, generate_schema_workbook


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="embedded-documents")
@click.option("--verbose", is_flag=True, default=False, help="Log schema registration details.")
def cli(verbose: bool) -> None:
    """Typed document model utility."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-definitions")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_DEFINITIONS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML model definitions example to write",
)
def generate_definitions(output_path: str) -> None:
    """Generate an example YAML model definitions file with guidance comments."""
    try:
        resolved_output = write_placeholder_definitions(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="describe")
@click.option(
    "--definitions",
    "definitions_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON model definitions file",
)
@click.option("--model", "model_name", required=False, help="Only describe this model")
def describe_models(definitions_path: str, model_name: str | None) -> None:
    """Print keys, validation requests and index requests per model."""
    models = _load_models(definitions_path)
    if model_name is not None:
        models = {model_name: _select_model(models, model_name)}
    for name, model in models.items():
        for line in _describe_model(name, model):
            click.echo(line)


@cli.command(name="generate-report")
@click.option(
    "--definitions",
    "definitions_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON model definitions file",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the schema report workbook to write",
)
def generate_report(definitions_path: str, output_path: str) -> None:
    """Generate a schema report workbook from the model definitions."""
    models = _load_models(definitions_path)
    try:
        generate_schema_workbook(models, output_path)
    except (OSError, ValueError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(output_path)


@cli.command(name="flatten")
@click.option(
    "--definitions",
    "definitions_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON model definitions file",
)
@click.option("--model", "model_name", required=True, help="Model to instantiate")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a YAML/JSON mapping of document attributes",
)
@click.option(
    "--ignore-unknown",
    is_flag=True,
    default=False,
    help="Drop input attributes that are neither keys nor associations of the model",
)
def flatten_document(
    definitions_path: str, model_name: str, input_path: str, ignore_unknown: bool
) -> None:
    """Build one document and print its flattened attributes as YAML."""
    model = _select_model(_load_models(definitions_path), model_name)
    try:
        attrs = load_attribute_file(input_path)
        if ignore_unknown:
            attrs = model.defined_attributes(attrs)
        document = model(attrs)
    except (ConfigurationError, CoercionError, UnknownAttributeError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        yaml.safe_dump(
            _plain(document.flattened_attributes()),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        ),
        nl=False,
    )


def _load_models(definitions_path: str) -> dict[str, type[EmbeddedDocument]]:
    try:
        return build_models(load_model_definitions(definitions_path))
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _select_model(
    models: Mapping[str, type[EmbeddedDocument]], model_name: str
) -> type[EmbeddedDocument]:
    model = models.get(model_name)
    if model is None:
        raise CliError(f"Unknown model '{model_name}'. Available: {', '.join(models)}")
    return model


def _describe_model(name: str, model: type[EmbeddedDocument]) -> list[str]:
    parent = model.parent_model()
    kind = "embeddable" if model.embeddable() else "document"
    lines = [f"{name} ({kind})"]
    if parent is not None:
        lines.append(f"  parent: {parent.__name__}")
    lines.append("  keys:")
    for key in model.keys().values():
        options = ", ".join(
            f"{option}={format_option_value(value)}" for option, value in key.options.items()
        )
        suffix = f" [{options}]" if options else ""
        lines.append(f"    {key.name}: {key.type_name}{suffix}")
    requests = model.validation_requests()
    if requests:
        lines.append("  validations:")
        for request in requests:
            params = ", ".join(
                f"{param}={format_option_value(value)}" for param, value in request.params.items()
            )
            rendered = f"{request.rule.value}({params})" if params else request.rule.value
            lines.append(f"    {request.attribute}: {rendered}")
    indexes = model.index_requests()
    if indexes:
        lines.append("  indexes:")
        for index in indexes:
            fields = ", ".join(
                f"{field_name} {direction}" for field_name, direction in index.fields
            )
            lines.append(f"    {fields}{' (unique)' if index.unique else ''}")
    for association in model.associations().values():
        lines.append(
            f"  {association.cardinality.value} {association.name} -> "
            f"{association.target_type.__name__}"
        )
    return lines


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {name: _plain(item) for name, item in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    if isinstance(value, Decimal):
        return str(value)
    return value


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
