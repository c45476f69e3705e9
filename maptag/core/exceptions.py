"""
Custom exceptions for the maptag enrichment stage.

Every error here aborts the whole batch. Per-metric lookup misses are
not errors and never raise.
"""

from __future__ import annotations

from typing import Sequence


class MapTagError(Exception):
    """Base exception for all maptag errors.

    Attributes:
        message: Human-readable error description.
        context: Optional extra detail appended to the message.
    """

    def __init__(self, message: str, context: str | None = None):
        self.message = message
        self.context = context

        error_parts = [message]
        if context:
            error_parts.append(context)

        super().__init__(" | ".join(error_parts))


class ConfigurationError(MapTagError):
    """Raised when one or more configuration keys are missing or malformed.

    All problems found while loading are collected into ``errors`` instead
    of stopping at the first one.
    """

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class CommandExecutionError(MapTagError):
    """Raised when the external command cannot run or exits non-zero.

    Attributes:
        command: The program that was invoked.
        returncode: Exit status (``None`` when the process never started).
        stderr: Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        command: str,
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        context = f"Command: {command}"
        if returncode is not None:
            context += f" | Exit code: {returncode}"
        super().__init__(message, context)


class PatternCompileError(MapTagError):
    """Raised when the configured regular expression does not compile."""

    def __init__(self, message: str, pattern: str):
        self.pattern = pattern
        super().__init__(message, f"Pattern: {pattern!r}")


class UnknownAddressingModeError(MapTagError):
    """Raised when the configured addressing mode is not supported."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"Incorrect addressing mode value: {mode!r}")
