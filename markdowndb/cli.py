#!/usr/bin/env python3
"""
Command-line interface for MarkdownDB templates.

Commands:
    validate - Validate a template and print the summary
    fixes    - List diagnostics with their proposed fixes
    fix      - Apply one proposed fix and write the file back
    template - Print a canonical blank template

Usage:
    markdowndb validate data/jobs/acme.md
    markdowndb fixes data/profile.md --schema profile
    markdowndb fix data/jobs/acme.md 1
    markdowndb fix data/jobs/acme.md 2 --value HYBRID --dry-run
    markdowndb template job > new_job.md
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from markdowndb.contexts.fixing import apply_fix, generate_fixes
from markdowndb.contexts.fixing.logger import (
    log_fix_start,
    log_fix_unavailable,
    log_fix_written,
    setup_fixing_logger,
)
from markdowndb.contexts.templating import ParsedDocument, get_template, parse_template
from markdowndb.contexts.validation import (
    SchemaNotFoundError,
    ValidationSchema,
    get_schema,
    get_schema_for_type,
    get_validation_summary,
    validate_template,
)
from markdowndb.contexts.validation.logger import (
    log_validation_outcome,
    log_validation_start,
    setup_validation_logger,
)
from markdowndb.utils import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Parse, validate and fix MarkdownDB templates.",
    no_args_is_help=True,
)

SchemaOption = Annotated[
    Optional[str],
    typer.Option("--schema", "-s", help="Schema name (job, profile). Inferred from the <TAG> if omitted"),
]
TemplateFile = Annotated[
    Path,
    typer.Argument(help="Template file", exists=True, dir_okay=False, readable=True),
]


def _load(file: Path, schema_name: Optional[str]) -> tuple[str, ParsedDocument, ValidationSchema]:
    """Read, parse and resolve the schema for a template file, exiting on failure."""
    text = file.read_text(encoding="utf-8")
    document = parse_template(text)

    if schema_name:
        try:
            schema = get_schema(schema_name)
        except SchemaNotFoundError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(2)
    else:
        schema = get_schema_for_type(document.type)
        if schema is None:
            typer.echo(
                f"ERROR: Cannot infer schema from <{document.type}>; pass --schema",
                err=True,
            )
            raise typer.Exit(2)

    return text, document, schema


def _cursor_location(text: str, offset: int) -> str:
    """1-based 'line L, column C' for a character offset."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return f"line {line}, column {column}"


@app.command()
def validate(
    file: TemplateFile,
    schema: SchemaOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the result as JSON")] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Log directory (defaults to LOGS_PATH/validate_<timestamp>)"),
    ] = None,
):
    """Validate a template and print the summary. Exits 1 when the template has errors."""
    text, document, validation_schema = _load(file, schema)

    log_dir = log_dir or LOGS_PATH / f"validate_{now()}"
    log_file = setup_validation_logger(log_dir, validation_schema.name, console=not json_output)
    # Keep stdout machine-readable in JSON mode
    if not json_output:
        log_validation_start(file, validation_schema.name, log_file)

    result = validate_template(document, validation_schema)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        typer.echo(get_validation_summary(result, label=validation_schema.name.capitalize()))
        log_validation_outcome(file, result)

    if not result.valid:
        raise typer.Exit(1)


@app.command()
def fixes(file: TemplateFile, schema: SchemaOption = None):
    """List diagnostics with the fix proposed for each."""
    text, document, validation_schema = _load(file, schema)
    result = validate_template(document, validation_schema)
    pairs = generate_fixes(result, text, validation_schema)

    if not pairs:
        typer.secho("No diagnostics", fg=typer.colors.GREEN)
        return

    severities = {id(d): "error" for d in result.errors}
    severities.update({id(d): "warning" for d in result.warnings})

    for index, (diagnostic, fix) in enumerate(pairs, start=1):
        severity = severities.get(id(diagnostic), "info")
        typer.echo(f"[{index}] {severity} {diagnostic.type}: {diagnostic.message}")
        if fix is None:
            typer.echo("      (no automatic fix)")
            continue
        typer.echo(f"      fix: {fix.button_label} ({fix.type})")
        if fix.is_interactive and fix.allowed_values:
            typer.echo(f"      choices: {', '.join(fix.allowed_values)}")


@app.command()
def fix(
    file: TemplateFile,
    index: Annotated[int, typer.Argument(help="Diagnostic number from 'markdowndb fixes'", min=1)],
    value: Annotated[
        Optional[str], typer.Option("--value", "-v", help="Replacement for enum fixes")
    ] = None,
    schema: SchemaOption = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the fixed text instead of writing it")
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Log directory (defaults to LOGS_PATH/fix_<timestamp>)"),
    ] = None,
):
    """Apply one proposed fix and write the file back."""
    text, document, validation_schema = _load(file, schema)

    log_dir = log_dir or LOGS_PATH / f"fix_{now()}"
    log_file = setup_fixing_logger(log_dir, file)
    if not dry_run:
        log_fix_start(file, log_file)

    result = validate_template(document, validation_schema)
    pairs = generate_fixes(result, text, validation_schema)

    if index > len(pairs):
        typer.echo(f"ERROR: No diagnostic #{index} ({len(pairs)} found)", err=True)
        raise typer.Exit(2)

    diagnostic, proposed = pairs[index - 1]
    if proposed is None:
        log_fix_unavailable(file, f"no automatic fix for {diagnostic.type}")
        typer.echo(f"No automatic fix for: {diagnostic.message}", err=True)
        raise typer.Exit(1)

    if proposed.is_interactive and value is None:
        typer.echo(
            f"Choose a value with --value: {', '.join(proposed.allowed_values or [])}",
            err=True,
        )
        raise typer.Exit(1)

    applied = apply_fix(proposed, text, value)
    if applied is None:
        log_fix_unavailable(file, f"{proposed.type} could not be applied")
        typer.echo(f"Fix could not be applied: {proposed.description}", err=True)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(applied.new_content, nl=False)
        return

    file.write_text(applied.new_content, encoding="utf-8")
    log_fix_written(file, proposed)
    typer.echo(f"{proposed.description}; cursor at {_cursor_location(applied.new_content, applied.cursor_position)}")


@app.command()
def template(kind: Annotated[str, typer.Argument(help="Template kind (job, profile)")]):
    """Print a canonical template."""
    try:
        typer.echo(get_template(kind), nl=False)
    except ValueError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(2)


if __name__ == "__main__":
    app()
