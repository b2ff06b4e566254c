"""
Thin wrapper around the `docker` command-line client.

The fixture talks to Docker exclusively through this class so tests can
substitute a fake without patching subprocess globally.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import shutil as _shutil
import subprocess as _subprocess

import filmcheck.fixture.errors as errors

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class ExecResult:
    """Exit code and captured output of one command."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class DockerCLI:
    """Run `docker` subcommands synchronously and capture their output."""

    def __init__(self, executable: str = "docker", *, timeout: float | None = 120.0) -> None:
        """
        Initialize the wrapper.

        Args:
            executable: Name or path of the docker binary.
            timeout: Per-command timeout in seconds (None = no limit).
        """
        self._executable = executable
        self._timeout = timeout

    def available(self) -> bool:
        """Check that the binary exists and the daemon answers."""
        if _shutil.which(self._executable) is None:
            return False
        try:
            return self.run("version", "--format", "{{.Server.Version}}").ok
        except errors.FixtureError:
            return False

    def run(self, *args: str, input_text: str | None = None) -> ExecResult:
        """
        Run `docker <args>` and return its result.

        Args:
            *args: Arguments after the docker executable.
            input_text: Text passed on stdin.

        Raises:
            FixtureStartupError: If the docker executable cannot be found.
            FixtureCommandError: If the command exceeds the timeout.
        """
        command = (self._executable, *args)
        _logger.debug("docker: %s", " ".join(args))
        try:
            completed = _subprocess.run(
                list(command),
                input=input_text,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            raise errors.FixtureStartupError(
                f"Docker executable {self._executable!r} not found"
            ) from e
        except _subprocess.TimeoutExpired as e:
            raise errors.FixtureCommandError(
                command, -1, f"timed out after {self._timeout}s"
            ) from e

        return ExecResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
