"""Typer CLI application."""

from pathlib import Path
from typing import Optional

import typer

from .config import GenerationConfig, SystemConfig, load_generation_config
from .llm_client import get_llm_client
from .orchestration import SchemaPipeline
from .parsers import detect_format
from .schemas import DatabaseSchema, GenerationTarget, InputFormat, load_schema_file
from .utils import SchemaForgeError, format_error_for_user, setup_logging

app = typer.Typer(help="SchemaForge: database schemas to type-safe TypeScript")


@app.callback()
def main_options(
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit structured JSON logs"),
):
    """Options shared by every command."""
    setup_logging(level=log_level, json_format=json_logs)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {path}: {e.strerror}", err=True)
        raise typer.Exit(1)


def _emit(content: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content + "\n", encoding="utf-8")
    typer.echo(f"✓ Written to {output}", err=True)


def _fail(error: SchemaForgeError) -> None:
    typer.echo(format_error_for_user(error), err=True)
    raise typer.Exit(1)


def _build_pipeline() -> SchemaPipeline:
    config = SystemConfig.from_env()
    return SchemaPipeline(llm_client=get_llm_client(config.llm), llm_config=config.llm)


@app.command()
def detect(schema_file: Path):
    """
    Print the detected input format of a schema file.

    Args:
        schema_file: Prisma schema, SQL DDL or English description
    """
    typer.echo(detect_format(_read_text(schema_file)).value)


@app.command()
def parse(
    schema_file: Path,
    input_format: Optional[InputFormat] = typer.Option(None, "--format", "-f", help="Skip detection"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write IR JSON here"),
):
    """
    Parse a schema file into IR JSON.

    Args:
        schema_file: Prisma schema, SQL DDL or English description
    """
    text = _read_text(schema_file)

    try:
        result = _build_pipeline().parse(text, input_format)
    except SchemaForgeError as e:
        _fail(e)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    _emit(result.schema.to_json(indent=2), output)


@app.command()
def generate(
    schema_file: Path,
    target: GenerationTarget = typer.Option(..., "--target", "-t", help="Artifact to generate"),
    ir: bool = typer.Option(False, "--ir", help="SCHEMA_FILE is an IR JSON/YAML document"),
    input_format: Optional[InputFormat] = typer.Option(None, "--format", "-f", help="Skip detection"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Generation options (YAML/JSON)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write generated code here"),
):
    """
    Generate TypeScript code from a schema file.

    Args:
        schema_file: Raw schema text, or an IR document with --ir
    """
    try:
        config = load_generation_config(config_file) if config_file else GenerationConfig()
        pipeline = _build_pipeline()

        if ir:
            schema: DatabaseSchema = load_schema_file(schema_file)
        else:
            parsed = pipeline.parse(_read_text(schema_file), input_format)
            for warning in parsed.warnings:
                typer.echo(f"Warning: {warning}", err=True)
            schema = parsed.schema

        result = pipeline.generate(schema, target, config)
    except SchemaForgeError as e:
        _fail(e)
    except OSError as e:
        typer.echo(f"Error: cannot read {schema_file}: {e.strerror}", err=True)
        raise typer.Exit(1)

    _emit(result.code, output)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
