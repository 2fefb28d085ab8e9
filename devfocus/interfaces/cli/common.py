"""Shared utilities for DevFocus CLI commands.

- Store opening from --db / DEVFOCUS_DB / config
- Result unwrapping with formatted errors and exit codes
- Output helpers (error, success, info, headers, durations, JSON)
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any, Optional, TypeVar

import typer
from pydantic import BaseModel, TypeAdapter

from devfocus.config import DATABASE_ENV, get_config, resolve_database_url
from devfocus.domain.shared import Result, ServiceError, is_err
from devfocus.infrastructure.storage import Store

T = TypeVar("T")

# Reusable parameter types for CLI commands
# Usage: def my_command(db: DbOption = None) -> None:
DbOption = Annotated[Optional[str], typer.Option(
    "--db",
    help="Database file or SQLAlchemy URL (or set DEVFOCUS_DB env var)",
    envvar=DATABASE_ENV,
)]

JsonOption = Annotated[bool, typer.Option("--json", help="Print machine-readable JSON")]

ElapsedArgument = Annotated[int, typer.Argument(help="Elapsed seconds measured by the caller", min=0)]


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger once, from --verbose or config.json."""
    level = logging.DEBUG if verbose else getattr(logging, get_config().log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@contextmanager
def open_store(db: str | None = None) -> Iterator[Store]:
    """Open and initialize the store for one command, closing it afterwards."""
    config = get_config()
    store = Store(resolve_database_url(config, db), lock_timeout_seconds=config.lock_timeout_seconds)
    try:
        store.initialize()
        yield store
    finally:
        store.close()


def max_elapsed_seconds() -> int:
    return get_config().max_elapsed_seconds


def unwrap(result: Result[T, ServiceError]) -> T:
    """Return the Ok value, or print the error and exit with status 1."""
    if is_err(result):
        print_error(result.error.message)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a title between two separator lines."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def print_json(value: BaseModel | list[Any]) -> None:
    """Print a model (or list of models) as indented JSON."""
    if isinstance(value, list):
        typer.echo(TypeAdapter(list[Any]).dump_json(value, indent=2).decode())
        return
    typer.echo(value.model_dump_json(indent=2))


def format_duration(seconds: int | float) -> str:
    """Format seconds as H:MM:SS."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


__all__ = [
    "DbOption",
    "JsonOption",
    "ElapsedArgument",
    "configure_logging",
    "open_store",
    "max_elapsed_seconds",
    "unwrap",
    "print_error",
    "print_success",
    "print_info",
    "print_separator",
    "print_header",
    "print_json",
    "format_duration",
]
