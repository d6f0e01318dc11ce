"""Matchers describing the arguments a mocked method is expected to receive."""

from __future__ import annotations

import abc
import re
from collections.abc import Callable
from typing import Any


class Matcher(abc.ABC):
    """A representation of a class of values."""

    @abc.abstractmethod
    def matches(self, x: Any) -> bool:
        """Return whether ``x`` belongs to the class of values."""

    def __str__(self) -> str:
        return type(self).__name__


class GotFormatter:
    """Formats a received value for failure messages using a plain function."""

    def __init__(self, fn: Callable[[Any], str]) -> None:
        self._fn = fn

    def got(self, value: Any) -> str:
        """Describe the received value."""
        return self._fn(value)


def _compatible(left: type, right: type) -> bool:
    if left is bool or right is bool:
        return left is right
    return issubclass(left, right) or issubclass(right, left)


def _deep_equal(a: Any, b: Any) -> bool:
    if a is None or b is None:
        return a is b
    if not _compatible(type(a), type(b)):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_deep_equal(a[k], b[k]) for k in a)
    return bool(a == b)


class _Anything(Matcher):
    def matches(self, x: Any) -> bool:
        return True

    def __str__(self) -> str:
        return "is anything"


class _Cond(Matcher):
    def __init__(self, fn: Callable[[Any], bool]) -> None:
        self._fn = fn

    def matches(self, x: Any) -> bool:
        return bool(self._fn(x))

    def __str__(self) -> str:
        return "adheres to a custom condition"


class _Eq(Matcher):
    def __init__(self, x: Any) -> None:
        self._x = x

    def matches(self, x: Any) -> bool:
        return _deep_equal(self._x, x)

    def __str__(self) -> str:
        return f"is equal to {self._x} ({type(self._x).__name__})"


class _IsNone(Matcher):
    def matches(self, x: Any) -> bool:
        return x is None

    def __str__(self) -> str:
        return "is nil"


class _Not(Matcher):
    def __init__(self, matcher: Matcher) -> None:
        self._matcher = matcher

    def matches(self, x: Any) -> bool:
        return not self._matcher.matches(x)

    def __str__(self) -> str:
        return f"not({self._matcher})"


class _Regex(Matcher):
    def __init__(self, pattern: str) -> None:
        self._pattern = pattern
        self._text = re.compile(pattern)
        try:
            self._binary: re.Pattern[bytes] | None = re.compile(pattern.encode("utf-8"))
        except re.error:
            self._binary = None

    def matches(self, x: Any) -> bool:
        if isinstance(x, str):
            return self._text.search(x) is not None
        if isinstance(x, (bytes, bytearray)):
            return self._binary is not None and self._binary.search(x) is not None
        return False

    def __str__(self) -> str:
        return f"matches regex {self._pattern}"


class _AssignableTo(Matcher):
    def __init__(self, target: type) -> None:
        self._target = target

    def matches(self, x: Any) -> bool:
        return isinstance(x, self._target)

    def __str__(self) -> str:
        return f"is assignable to {self._target.__name__}"


class _AnyOf(Matcher):
    def __init__(self, matchers: list[Matcher]) -> None:
        self._matchers = matchers

    def matches(self, x: Any) -> bool:
        return any(m.matches(x) for m in self._matchers)

    def __str__(self) -> str:
        return " | ".join(str(m) for m in self._matchers)


class _All(Matcher):
    def __init__(self, matchers: list[Matcher]) -> None:
        self._matchers = matchers

    def matches(self, x: Any) -> bool:
        return all(m.matches(x) for m in self._matchers)

    def __str__(self) -> str:
        return "; ".join(str(m) for m in self._matchers)


class _Len(Matcher):
    def __init__(self, n: int) -> None:
        self._n = n

    def matches(self, x: Any) -> bool:
        try:
            return len(x) == self._n
        except TypeError:
            return False

    def __str__(self) -> str:
        return f"has length {self._n}"


class _InAnyOrder(Matcher):
    def __init__(self, x: Any) -> None:
        self._x = x

    def matches(self, x: Any) -> bool:
        if not isinstance(x, (list, tuple)) or not isinstance(self._x, (list, tuple)):
            return False
        if len(x) != len(self._x):
            return False
        unused = list(x)
        for wanted in self._x:
            wanted_matcher = eq(wanted)
            found = next((i for i, item in enumerate(unused) if wanted_matcher.matches(item)), None)
            if found is None:
                return False
            del unused[found]
        return not unused

    def __str__(self) -> str:
        return f"has the same elements as {self._x}"


class _WantFormatted(Matcher):
    def __init__(self, description: str | Callable[[], str], matcher: Matcher) -> None:
        self._description = description
        self._matcher = matcher

    def matches(self, x: Any) -> bool:
        return self._matcher.matches(x)

    def __str__(self) -> str:
        if callable(self._description):
            return self._description()
        return self._description


class _GotFormatted(Matcher):
    def __init__(self, formatter: GotFormatter, matcher: Matcher) -> None:
        self._formatter = formatter
        self._matcher = matcher

    def matches(self, x: Any) -> bool:
        return self._matcher.matches(x)

    def got(self, value: Any) -> str:
        return self._formatter.got(value)

    def __str__(self) -> str:
        return str(self._matcher)


def want_formatter(description: str | Callable[[], str], matcher: Matcher) -> Matcher:
    """Wrap ``matcher`` so that it describes itself with ``description``."""
    return _WantFormatted(description, matcher)


def got_formatter_adapter(
    formatter: GotFormatter | Callable[[Any], str], matcher: Matcher
) -> Matcher:
    """Attach a formatter for received values to ``matcher``."""
    if not isinstance(formatter, GotFormatter):
        formatter = GotFormatter(formatter)
    return _GotFormatted(formatter, matcher)


def format_got(matcher: Matcher, arg: Any) -> str:
    """Describe a received value, using the matcher's own formatter if it has one."""
    got = getattr(matcher, "got", None)
    if callable(got):
        return got(arg)
    return f"{arg} ({type(arg).__name__})"


def to_matcher(x: Any) -> Matcher:
    """Turn an expected argument into a matcher."""
    if isinstance(x, Matcher):
        return x
    if x is None:
        return is_none()
    return eq(x)


def all_of(*args: Any) -> Matcher:
    """Match when every one of the matchers matches."""
    return _All([to_matcher(a) for a in args])


def anything() -> Matcher:
    """Match any value."""
    return _Anything()


def cond(fn: Callable[[Any], bool]) -> Matcher:
    """Match when ``fn`` returns true for the value."""
    return _Cond(fn)


def any_of(*args: Any) -> Matcher:
    """Match when at least one of the matchers or values matches."""
    return _AnyOf([a if isinstance(a, Matcher) else eq(a) for a in args])


def eq(x: Any) -> Matcher:
    """Match values equal to ``x`` and of a compatible type."""
    return _Eq(x)


def has_len(n: int) -> Matcher:
    """Match sized values whose length is ``n``."""
    return _Len(n)


def is_none() -> Matcher:
    """Match ``None``."""
    return _IsNone()


def not_(x: Any) -> Matcher:
    """Reverse the result of a matcher, or of equality with a value."""
    return _Not(x if isinstance(x, Matcher) else eq(x))


def regex(pattern: str) -> Matcher:
    """Match strings or bytes in which ``pattern`` is found."""
    return _Regex(pattern)


def assignable_to_type_of(x: Any) -> Matcher:
    """Match values that are instances of ``x`` (a type) or of the type of ``x``."""
    return _AssignableTo(x if isinstance(x, type) else type(x))


def in_any_order(x: Any) -> Matcher:
    """Match lists or tuples holding the same elements as ``x`` in any order."""
    return _InAnyOrder(x)