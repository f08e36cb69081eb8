"""
Command-line interface for Feed Tool.

Uses Typer to provide one command per feed operation. Global options
(config file, logging, credentials) go before the command name:

    $ feed-tool -c config.yaml -u alice get-entry https://feeds.example.com/feeds/notes/1
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import Callable, Iterator, TextIO

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
import typer

from .client.base import FeedClient
from .client.http import HttpFeedClient
from .config import AppConfig, load_config
from .errors import FeedToolError
from .input.embedding import EmbeddingExpander
from .input.loader import load
from .output.renderer import render_entity, render_feed
from .utils.logging import log_event, setup_logging

app = typer.Typer(add_completion=False, help="Read and modify entries on an entity feed server.")
console = Console(stderr=True)
logger = logging.getLogger("feed_tool.cli")


@dataclass
class CliState:
    """Settings shared by every command of one invocation."""

    cfg: AppConfig
    username: str | None = None
    password: str | None = None


def create_client(cfg: AppConfig, auth: tuple[str, str] | None) -> FeedClient:
    return HttpFeedClient(cfg.client, auth=auth)


@app.callback()
def global_options(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, readable=True, envvar="FEED_TOOL_CONFIG",
        help="YAML config file.",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    username: str | None = typer.Option(
        None, "--username", "-u", envvar="FEED_TOOL_USERNAME", help="User name for the feed server."
    ),
    password: str | None = typer.Option(
        None, "--password", "-p", envvar="FEED_TOOL_PASSWORD", help="Password for the feed server."
    ),
):
    """Read and modify entries on an entity feed server."""
    cfg = load_config(str(config) if config else None)

    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    setup_logging(cfg.logging)
    ctx.obj = CliState(cfg=cfg, username=username, password=password)


@app.command("get-feed")
def get_feed(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the feed."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
):
    """Print every entity of a feed."""
    state: CliState = ctx.obj
    with _reporting_errors(), _open_client(state) as client:
        feed = client.get_feed(url)
        log_event(logger, "feed fetched", url=url, entities=len(feed))
        _emit(lambda out: render_feed(feed, out, indent=state.cfg.render.indent), output)


@app.command("get-entry")
def get_entry(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the entry."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
):
    """Print one entity."""
    state: CliState = ctx.obj
    with _reporting_errors(), _open_client(state) as client:
        entity = client.get_entry(url)
        _emit(lambda out: render_entity(entity, out, indent=state.cfg.render.indent), output)


@app.command()
def insert(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the feed."),
    entry: Path = typer.Option(..., "--entry", "-e", exists=True, readable=True, help="Entry XML file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
):
    """Insert the entity described by an entry file and print the stored result."""
    state: CliState = ctx.obj
    with _reporting_errors(), _open_client(state) as client:
        entity = client.entity_from_xml(load(entry, _expander(state.cfg)))
        stored = client.insert_entry(url, entity)
        log_event(logger, "entry inserted", url=url)
        _emit(lambda out: render_entity(stored, out, indent=state.cfg.render.indent), output)


@app.command()
def update(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the entry."),
    entry: Path = typer.Option(..., "--entry", "-e", exists=True, readable=True, help="Entry XML file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
):
    """Replace an entry with the entity described by an entry file."""
    state: CliState = ctx.obj
    with _reporting_errors(), _open_client(state) as client:
        entity = client.entity_from_xml(load(entry, _expander(state.cfg)))
        stored = client.update_entry(url, entity)
        log_event(logger, "entry updated", url=url)
        _emit(lambda out: render_entity(stored, out, indent=state.cfg.render.indent), output)


@app.command()
def delete(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="URL of the entry."),
):
    """Delete an entry."""
    state: CliState = ctx.obj
    with _reporting_errors(), _open_client(state) as client:
        client.delete_entry(url)
        console.print(f"Deleted {escape(url)}")


@app.command()
def expand(
    ctx: typer.Context,
    document: Path = typer.Argument(..., exists=True, readable=True, help="Entry XML file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write XML here instead of stdout."),
):
    """Print an entry file with its embedded files resolved, without contacting a server."""
    state: CliState = ctx.obj
    with _reporting_errors():
        text = load(document, _expander(state.cfg))
        _emit(lambda out: out.write(text), output)


def _expander(cfg: AppConfig) -> EmbeddingExpander:
    return EmbeddingExpander(encoding=cfg.embed.encoding, max_depth=cfg.embed.max_depth)


@contextmanager
def _open_client(state: CliState) -> Iterator[FeedClient]:
    auth = (state.username, state.password or "") if state.username else None
    client = create_client(state.cfg, auth)
    try:
        yield client
    finally:
        client.close()


@contextmanager
def _reporting_errors() -> Iterator[None]:
    try:
        yield
    except (OSError, FeedToolError) as exc:
        logger.debug("command failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _emit(write: Callable[[TextIO], object], output: Path | None) -> None:
    if output is None:
        write(sys.stdout)
        return
    with output.open("w", encoding="utf-8") as handle:
        write(handle)


def run() -> None:
    # .env must be loaded before Typer resolves envvar-backed options
    load_dotenv()
    app()


if __name__ == "__main__":
    run()
