"""Reporters through which a controller reports test failures."""

from __future__ import annotations

import abc
import sys
from collections.abc import Callable
from typing import Any


class MockFailure(AssertionError):
    """Raised when a fatal mock failure stops the test."""


class TestReporter(abc.ABC):
    """Something that can report test failures."""

    __test__ = False

    @abc.abstractmethod
    def errorf(self, message: str) -> None:
        """Report a failure and let the test go on."""

    @abc.abstractmethod
    def fatalf(self, message: str) -> None:
        """Report a failure and stop the test."""


class RaisingReporter(TestReporter):
    """Collects failure messages and raises :class:`MockFailure` on fatal ones."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    @property
    def failed(self) -> bool:
        return bool(self.messages)

    def errorf(self, message: str) -> None:
        self.messages.append(message)

    def fatalf(self, message: str) -> None:
        self.messages.append(message)
        raise MockFailure(message)

    def helper(self) -> None:
        """Mark the caller as a helper; nothing to do here."""


class NopTestHelper(TestReporter):
    """Gives a reporter without a helper method a no-op one."""

    def __init__(self, reporter: Any) -> None:
        self.reporter = reporter

    def errorf(self, message: str) -> None:
        self.reporter.errorf(message)

    def fatalf(self, message: str) -> None:
        self.reporter.fatalf(message)

    def helper(self) -> None:
        """Do nothing."""


class CancelReporter(TestReporter):
    """Calls ``cancel`` whenever a fatal failure is reported."""

    def __init__(self, reporter: Any, cancel: Callable[[], None]) -> None:
        self.reporter = reporter
        self.cancel = cancel

    def errorf(self, message: str) -> None:
        self.reporter.errorf(message)

    def fatalf(self, message: str) -> None:
        try:
            self.reporter.fatalf(message)
        finally:
            self.cancel()

    def helper(self) -> None:
        self.reporter.helper()


def as_helper(reporter: Any) -> Any:
    """Return ``reporter`` if it has a helper method, else wrap it in one."""
    if callable(getattr(reporter, "helper", None)):
        return reporter
    return NopTestHelper(reporter)


def unwrap_reporter(reporter: Any) -> Any:
    """Strip the wrappers this package puts around a reporter."""
    if isinstance(reporter, CancelReporter):
        inner = reporter.reporter
        return inner.reporter if isinstance(inner, NopTestHelper) else inner
    if isinstance(reporter, NopTestHelper):
        return reporter.reporter
    return reporter


def cleanup_hook(reporter: Any) -> Callable[[Callable[[], None]], Any] | None:
    """Return the base reporter's ``cleanup`` registration method, if it has one."""
    hook = getattr(unwrap_reporter(reporter), "cleanup", None)
    return hook if callable(hook) else None


def caller_info(skip: int) -> str:
    """Return ``file:line`` of a caller; ``skip`` 0 is the caller of this function."""
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return "unknown file"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"