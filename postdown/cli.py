"""CLI entry point for Postdown."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import structlog
import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax

from postdown.config import PostdownConfig, load_config
from postdown.config.loader import DEFAULT_CONFIG_TEMPLATE, config_search_paths
from postdown.converter import DecodeError, DocumentConverter

app = typer.Typer(
    name="postdown",
    help="Convert rich-text editor JSON documents to markdown.",
)

config_app = typer.Typer(help="Manage Postdown configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _configure_logging(cfg: PostdownConfig) -> None:
    """Send the package's stdlib log records to stderr, rendered by structlog."""
    if cfg.log_format == "json":
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
        )
    )

    pkg_logger = logging.getLogger("postdown")
    pkg_logger.handlers = [handler]
    pkg_logger.setLevel(_LOG_LEVELS[cfg.log_level])
    pkg_logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to postdown.yaml")
    ] = None,
) -> None:
    """Global options."""
    try:
        cfg = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(cfg)
    ctx.obj = cfg


@app.command()
def convert(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="Path to a JSON document, or - for stdin"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write markdown to file"),
) -> None:
    """Convert a JSON document to markdown."""
    converter = DocumentConverter(ctx.obj.render)

    try:
        if file == "-":
            markdown = converter.convert(typer.get_binary_stream("stdin").read())
        else:
            markdown = converter.convert_file(file).markdown
    except (DecodeError, OSError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if output:
        Path(output).write_text(markdown, encoding="utf-8")
        rprint(f"[green]Written to[/green] {output}")
    else:
        typer.echo(markdown, nl=False)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the resolved configuration and the file it came from."""
    cfg: PostdownConfig = ctx.obj
    rprint(f"[dim]Source:[/dim] {escape(cfg.source or '(defaults)')}")
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
    user: bool = typer.Option(False, "--user", help="Write ~/.postdown/config.yaml instead"),
) -> None:
    """Create a default config file (project-local unless --user)."""
    local, user_global = config_search_paths()
    target = user_global if user else local
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
