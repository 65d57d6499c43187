import logging
from pathlib import Path
from typing import Optional

import typer

from cli import commands
from evidence_coverage.config import ConfigError
from evidence_coverage.logging_config import configure_logging

app = typer.Typer(add_completion=False)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("compute")
def compute(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine settings YAML"),
    claim_source: Optional[str] = typer.Option(None, help="Mapper for claim field names"),
    evidence_source: Optional[str] = typer.Option(None, help="Mapper for evidence field names"),
    mappers_dir: Optional[Path] = typer.Option(None, file_okay=False, help="Directory of mapper YAML configs"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Compute evidence coverage for one claim."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        result = commands.compute(file, config, claim_source, evidence_source, mappers_dir)
    except (commands.InputError, ConfigError) as exc:
        _fail(str(exc))
    if as_json:
        typer.echo(commands.result_json(result))
        return
    for line in commands.print_coverage(result):
        typer.echo(line)


@app.command("summary")
def summary(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    config: Optional[Path] = typer.Option(None, "--config", help="Engine settings YAML"),
    claim_source: Optional[str] = typer.Option(None, help="Mapper for claim field names"),
    evidence_source: Optional[str] = typer.Option(None, help="Mapper for evidence field names"),
    mappers_dir: Optional[Path] = typer.Option(None, file_okay=False, help="Directory of mapper YAML configs"),
    output: Optional[Path] = typer.Option(None, dir_okay=False, help="Export per-claim coverage"),
    fmt: str = typer.Option("csv", help="csv or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Roll up evidence coverage for all claims of a metric."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        result = commands.summarize(file, config, claim_source, evidence_source, mappers_dir)
        for line in commands.print_summary(result):
            typer.echo(line)
        if output is not None:
            path = commands.export_claims(result.claims, fmt, output)
            typer.echo(f"Exported {path}")
    except (commands.InputError, ConfigError) as exc:
        _fail(str(exc))


if __name__ == "__main__":
    app()
