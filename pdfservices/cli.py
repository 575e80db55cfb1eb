"""CLI entry point for pdfservices."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from pdfservices.config import PDFServicesConfig, load_config
from pdfservices.config.loader import DEFAULT_CONFIG_TEMPLATE
from pdfservices.errors import PDFServicesError
from pdfservices.operations import list_operations, resolve_by_extension
from pdfservices.pipeline import PipelineExecutor, create_executor

app = typer.Typer(
    name="pdfservices",
    help="Convert, combine and optimize documents with the remote PDF service.",
)

config_app = typer.Typer(help="Manage pdfservices configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: PDFServicesConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _configure_logging(cfg: PDFServicesConfig) -> None:
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    # no-op when the host application already configured logging
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler])


def _get_config() -> PDFServicesConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to pdfservices.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _parse_options(raw: list[str]) -> dict[str, Any]:
    """Parse repeated ``key=value`` options; values may be JSON."""
    options: dict[str, Any] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid option {item!r}: expected key=value")
        try:
            options[key.strip()] = json.loads(value)
        except json.JSONDecodeError:
            options[key.strip()] = value
    return options


def _execute(step: Callable[[PipelineExecutor], Awaitable[Path]]) -> Path:
    """Build an executor from config, run ``step`` and close the gateway."""
    cfg = _get_config()
    try:
        executor = create_executor(cfg)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    async def _run() -> Path:
        try:
            return await step(executor)
        finally:
            await executor.gateway.aclose()

    try:
        return asyncio.run(_run())
    except PDFServicesError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        rprint(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _report(operation: str, sources: list[str], dest: Path) -> None:
    rprint(
        Panel(
            f"[dim]Operation:[/dim] {operation}\n"
            f"[dim]Inputs:[/dim]    {', '.join(sources)}\n"
            f"[dim]Output:[/dim]    {dest}",
            title="Job Complete",
            border_style="green",
        )
    )


@app.command()
def convert(
    input_path: str = typer.Argument(..., help="Source document"),
    output_path: str = typer.Argument(..., help="Destination; its extension picks the conversion"),
) -> None:
    """Convert a document to or from PDF based on file extensions."""
    try:
        descriptor = resolve_by_extension(input_path, output_path)
    except PDFServicesError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(f"[bold]Converting[/bold] {input_path} ({descriptor.name})...")
    dest = _execute(lambda ex: ex.run(descriptor, [input_path], output_path))
    _report(descriptor.name, [input_path], dest)


@app.command()
def run(
    operation: Annotated[
        str, typer.Argument(help="Operation name (see `pdfservices operations`)")
    ],
    inputs: Annotated[list[str], typer.Argument(help="Input document(s)")],
    output: Annotated[str, typer.Option("--output", "-o", help="Result file")],
    option: Annotated[
        list[str] | None,
        typer.Option("--option", "-O", help="Operation option as key=value (repeatable)"),
    ] = None,
) -> None:
    """Run a named operation on one or more inputs."""
    try:
        options = _parse_options(option or [])
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(f"[bold]Running[/bold] {operation} on {len(inputs)} input(s)...")
    dest = _execute(lambda ex: ex.run(operation, inputs, output, options))
    _report(operation, inputs, dest)


@app.command("url-to-pdf")
def url_to_pdf(
    url: str = typer.Argument(..., help="Web page to render"),
    output_path: str = typer.Argument(..., help="Destination PDF"),
) -> None:
    """Render a web page to PDF."""
    rprint(f"[bold]Rendering[/bold] {url}...")
    dest = _execute(lambda ex: ex.run("url-to-pdf", [url], output_path))
    _report("url-to-pdf", [url], dest)


@app.command()
def operations() -> None:
    """List the operations the service supports."""
    table = Table(title="Operations")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Endpoint", style="green", no_wrap=True)
    table.add_column("Inputs", justify="center")
    table.add_column("Options", style="yellow")
    table.add_column("Description")
    for op in list_operations():
        table.add_row(
            op.name,
            op.endpoint_path,
            op.input_arity.value,
            ", ".join(sorted(op.options)) or "-",
            op.description,
        )
    rprint(table)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default pdfservices.yaml in current directory."""
    target = Path("pdfservices.yaml")
    if target.exists() and not force:
        rprint("[yellow]pdfservices.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
