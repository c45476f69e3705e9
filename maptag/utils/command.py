"""Runs the external command that feeds the lookup table."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

from ..core.exceptions import CommandExecutionError
from .logger import get_logger

logger = get_logger(__name__)

CommandRunner = Callable[[str, Sequence[str]], str]
"""``(command, args) -> stdout``. Raises ``CommandExecutionError`` on failure."""


def run_command(command: str, args: Sequence[str] = ()) -> str:
    """Run *command* with *args* and return its standard output as text.

    The process gets no stdin and no timeout; a hung command blocks the
    caller until it exits.

    Raises:
        CommandExecutionError: If the program cannot be started, exits
            non-zero, or writes output that is not valid UTF-8.
    """
    argv = [command, *args]
    logger.debug("Running command: %s", argv)

    try:
        result = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise CommandExecutionError(f"Failed to execute command: {exc}", command=command) from exc

    stderr = result.stderr.decode("utf-8", errors="replace")
    if result.returncode != 0:
        raise CommandExecutionError(
            f"Command exited with non-zero status: {stderr.strip()}",
            command=command,
            returncode=result.returncode,
            stderr=stderr,
        )

    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CommandExecutionError(
            f"Command output is not valid UTF-8: {exc}",
            command=command,
            returncode=result.returncode,
            stderr=stderr,
        ) from exc
