"""Base classes and helpers for CLI commands."""

import functools
import sys

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import click

from evoting.common.logging import get_logger


logger = get_logger(__name__)


class BaseCommand:
    """Console output helpers shared by commands."""

    @staticmethod
    def show_progress(message: str) -> None:
        click.echo(message)

    @staticmethod
    def success(message: str) -> None:
        click.secho(f"✓ {message}", fg="green")

    @staticmethod
    def warning(message: str) -> None:
        click.secho(f"⚠ {message}", fg="yellow", err=True)

    @staticmethod
    def error(message: str, exit_code: int | None = None) -> None:
        """Print an error; exit with ``exit_code`` when given."""
        click.secho(f"✗ {message}", fg="red", err=True)
        if exit_code is not None:
            sys.exit(exit_code)


class Command(ABC):
    @abstractmethod
    def execute(self, **kwargs: Any) -> None:
        """Run the command."""


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report unexpected exceptions as a CLI error with exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.exceptions.Exit, SystemExit):
            raise
        except Exception as e:
            logger.error("Command failed", command=func.__name__, error=str(e))
            BaseCommand.error(f"Error: {e}", exit_code=1)

    return wrapper
