"""Exceptions raised by the database fixture."""

from __future__ import annotations


class FixtureError(Exception):
    """Base class for database fixture errors."""

    pass


class FixtureStartupError(FixtureError):
    """Raised when the database instance never becomes ready.

    Also raised when the container cannot be created at all (Docker missing,
    image pull failure). `logs` holds the container output when available.
    """

    def __init__(self, message: str, *, logs: str = "") -> None:
        self.logs = logs
        if logs:
            message = f"{message}\n--- container logs ---\n{logs.rstrip()}"
        super().__init__(message)


class FixtureCommandError(FixtureError):
    """Raised when a command run inside the instance exits non-zero."""

    def __init__(self, command: tuple[str, ...], exit_code: int, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip() or "(no stderr)"
        super().__init__(
            f"Command {' '.join(command)!r} failed with exit code {exit_code}: {detail}"
        )
