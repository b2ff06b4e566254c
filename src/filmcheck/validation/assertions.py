"""
Grouped assertions.

A group runs several independent checks and reports every failure at once
instead of stopping at the first one. Groups nest: a failing inner group
contributes all of its messages to the outer one.

    assert_all(
        "Films starting with A",
        lambda: checks.validate_successful_response(response),
        lambda: checks.validate_film_data_integrity(response),
    )
"""

from __future__ import annotations

import types as _types
import typing as _typing


class AssertionFailure(AssertionError):
    """One or more checks in a group failed.

    Attributes:
        heading: Name of the group.
        failures: Every failure message collected, in order.
    """

    def __init__(self, heading: str, failures: list[str]) -> None:
        self.heading = heading
        self.failures = list(failures)
        super().__init__(self._format())

    def _format(self) -> str:
        count = len(self.failures)
        noun = "failure" if count == 1 else "failures"
        lines = [f"{self.heading} ({count} {noun})"]
        lines.extend(f"  - {message}" for message in self.failures)
        return "\n".join(lines)


def _messages(error: AssertionError) -> list[str]:
    """Flatten an assertion error into messages, expanding nested groups."""
    if isinstance(error, AssertionFailure):
        return [f"{error.heading}: {message}" for message in error.failures]
    return [str(error) or "assertion failed"]


def assert_all(heading: str, *checks: _typing.Callable[[], object]) -> None:
    """
    Run every check and raise one AssertionFailure listing all that failed.

    Only AssertionError (and subclasses) are collected; any other exception
    propagates immediately.

    Args:
        heading: Name of the group, used in the failure report.
        *checks: Zero-argument callables that raise AssertionError on failure.
    """
    soft = SoftAssertions(heading)
    for check in checks:
        soft.call(check)
    soft.raise_if_failed()


class SoftAssertions:
    """
    Collector for failures within one group.

    Use as a context manager to raise on exit, or call raise_if_failed()
    explicitly.
    """

    def __init__(self, heading: str) -> None:
        self.heading = heading
        self._failures: list[str] = []

    @property
    def failures(self) -> list[str]:
        return list(self._failures)

    def fail(self, message: str) -> None:
        self._failures.append(message)

    def check(self, condition: bool, message: str) -> bool:
        """Record `message` if `condition` is false. Returns the condition."""
        if not condition:
            self._failures.append(message)
        return condition

    def equal(self, actual: object, expected: object, message: str = "") -> bool:
        """Record a failure if actual != expected."""
        detail = f"expected {expected!r}, got {actual!r}"
        return self.check(actual == expected, f"{message}: {detail}" if message else detail)

    def call(self, check: _typing.Callable[[], object]) -> None:
        """Run a check, recording its AssertionError instead of raising."""
        try:
            check()
        except AssertionError as e:
            self._failures.extend(_messages(e))

    def raise_if_failed(self) -> None:
        if self._failures:
            raise AssertionFailure(self.heading, self._failures)

    def __enter__(self) -> SoftAssertions:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: _types.TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.raise_if_failed()
