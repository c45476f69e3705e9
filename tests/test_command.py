"""Tests for the external command runner."""

from __future__ import annotations

import sys

import pytest

from maptag.core.exceptions import CommandExecutionError
from maptag.utils.command import run_command

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh")


class TestRunCommand:
    def test_captures_stdout(self):
        assert run_command("/bin/sh", ["-c", "echo valueone somevalue"]) == "valueone somevalue\n"

    def test_args_passed_positionally(self):
        out = run_command("/bin/sh", ["-c", 'printf "%s|%s" "$0" "$1"', "a b", "c"])
        assert out == "a b|c"

    def test_no_stdin(self):
        assert run_command("/bin/sh", ["-c", "cat"]) == ""

    def test_non_zero_exit(self):
        with pytest.raises(CommandExecutionError) as exc_info:
            run_command("/bin/sh", ["-c", "echo oops >&2; exit 3"])

        err = exc_info.value
        assert err.returncode == 3
        assert "oops" in err.stderr
        assert err.command == "/bin/sh"

    def test_missing_executable(self):
        with pytest.raises(CommandExecutionError) as exc_info:
            run_command("/nonexistent/maptag-command")
        assert exc_info.value.returncode is None

    def test_invalid_utf8_output(self):
        with pytest.raises(CommandExecutionError, match="UTF-8"):
            run_command("/bin/sh", ["-c", r"printf '\377\376'"])
