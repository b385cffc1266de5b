"""Helpers for GitHub Actions workflow commands and output files.

Workflow commands are plain lines on stdout (``::group::``, ``::error::``).
Step outputs and exported environment variables are appended to the files
named by ``GITHUB_OUTPUT`` and ``GITHUB_ENV``.
"""

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog
import typer

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "") -> None:
    """Write a workflow command such as '::error::message' to stdout."""
    typer.echo(f"::{command}::{escape_data(message)}")


@contextmanager
def log_group(title: str) -> Iterator[None]:
    """Fold the log lines emitted inside the block under a collapsible group."""
    issue_command("group", title)
    try:
        yield
    finally:
        issue_command("endgroup")


def set_failed(message: str) -> None:
    """Annotate the run with an error message."""
    issue_command("error", message)


def _append_key_value(file_path: Path, name: str, value: str) -> None:
    """Append a 'name=value' entry, using a heredoc delimiter for multi-line values."""
    with open(file_path, "a", encoding="utf-8") as f:
        if "\n" in value or "\r" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")


def set_output(name: str, value: str | int, output_file: Path | None) -> None:
    """Set a step output, or log it when no output file is available."""
    if output_file is None:
        logger.info("No GITHUB_OUTPUT file available, not exporting output", name=name, value=value)
        return
    _append_key_value(output_file, name, str(value))
    logger.debug("Set step output", name=name, value=value)


def export_variable(name: str, value: str, env_file: Path | None) -> None:
    """Export an environment variable to the following workflow steps."""
    if env_file is None:
        logger.info("No GITHUB_ENV file available, not exporting variable", name=name, value=value)
        return
    _append_key_value(env_file, name, value)
    logger.debug("Exported environment variable", name=name, value=value)
