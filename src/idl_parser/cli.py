"""CLI entry point for idl-parser."""

import json
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from idl_parser.config import ParserOptions
from idl_parser.parser.document import (
    DocumentError,
    NamedEndpoint,
    check_signatures,
    load_endpoints,
    read_signatures,
)
from idl_parser.parser.errors import ParseError
from idl_parser.parser.grammar import parse_endpoint

FORMAT_CHOICE = click.Choice(["auto", "text", "yaml"])


def _load(ctx: click.Context, doc_path: Path, fmt: str) -> list[NamedEndpoint]:
    """Parse a document, turning failures into CLI errors."""
    try:
        return load_endpoints(doc_path, fmt, ctx.obj)
    except DocumentError as e:
        raise click.ClickException(str(e)) from e
    except (yaml.YAMLError, ValueError) as e:
        raise click.ClickException(f"Cannot read {doc_path}: {e}") from e


def _write(output: Path | None, content: str) -> None:
    if output is None:
        click.echo(content, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Saved to {output}", err=True)


@click.group()
@click.option("--no-limits", is_flag=True, help="Disable input length and repetition limits.")
@click.pass_context
def main(ctx: click.Context, no_limits: bool):
    """idl-parser: parse and check endpoint signature documents."""
    if no_limits:
        ctx.obj = ParserOptions.unbounded()
        return
    try:
        ctx.obj = ParserOptions.from_env()
    except ValidationError as e:
        raise click.ClickException(f"Invalid parser limits in environment: {e}") from e


@main.command()
@click.argument("signature")
@click.pass_context
def parse(ctx: click.Context, signature: str):
    """Parse a single SIGNATURE and print its AST as JSON."""
    try:
        endpoint = parse_endpoint(signature, ctx.obj)
    except ParseError as e:
        source_line = signature.split("\n")[e.line - 1].rstrip("\r")
        click.echo(source_line, err=True)
        click.echo(" " * (e.column - 1) + "^", err=True)
        raise click.ClickException(f"{e.kind}: {e.message}") from e
    click.echo(endpoint.model_dump_json(indent=2))


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="auto", type=FORMAT_CHOICE, help="Document format.")
@click.pass_context
def check(ctx: click.Context, doc_path: Path, fmt: str):
    """Report every signature in DOC_PATH that fails to parse."""
    try:
        signatures = read_signatures(doc_path, fmt)
    except (yaml.YAMLError, ValueError) as e:
        raise click.ClickException(f"Cannot read {doc_path}: {e}") from e

    diagnostics = check_signatures(signatures, ctx.obj)
    for diag in diagnostics:
        click.echo(diag.format(str(doc_path)), err=True)

    click.echo(f"Checked {len(signatures)} signatures, {len(diagnostics)} failed.")
    if diagnostics:
        ctx.exit(1)


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file path.")
@click.option("--format", "fmt", default="auto", type=FORMAT_CHOICE, help="Document format.")
@click.option("--output-format", default="json", type=click.Choice(["json", "yaml"]), help="AST serialization.")
@click.pass_context
def dump(ctx: click.Context, doc_path: Path, output: Path | None, fmt: str, output_format: str):
    """Parse DOC_PATH and write the ASTs as JSON or YAML."""
    endpoints = _load(ctx, doc_path, fmt)
    data = [ep.model_dump(mode="json") for ep in endpoints]

    if output_format == "yaml":
        content = yaml.safe_dump(data, sort_keys=False)
    else:
        content = json.dumps(data, indent=2) + "\n"
    _write(output, content)


@main.command("format")
@click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output file path.")
@click.option("--format", "fmt", default="auto", type=FORMAT_CHOICE, help="Document format.")
@click.pass_context
def format_(ctx: click.Context, doc_path: Path, output: Path | None, fmt: str):
    """Rewrite every signature in DOC_PATH in canonical form."""
    endpoints = _load(ctx, doc_path, fmt)
    if any(ep.name for ep in endpoints):
        content = yaml.safe_dump({ep.name: ep.endpoint.to_dsl() for ep in endpoints}, sort_keys=False)
    else:
        content = "".join(ep.endpoint.to_dsl() + "\n" for ep in endpoints)
    _write(output, content)
