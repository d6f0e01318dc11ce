"""Naming helpers for generated mocks: identifiers, argument lists and flag values."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Iterator, Mapping, Sequence


class IdentifierAllocator:
    """Hands out identifiers that do not clash with ones already taken."""

    def __init__(self, taken: Iterable[str] = ()) -> None:
        self._taken: set[str] = set(taken)

    def __len__(self) -> int:
        return len(self._taken)

    def __contains__(self, name: object) -> bool:
        return name in self._taken

    def __iter__(self) -> Iterator[str]:
        return iter(self._taken)

    def allocate(self, want: str) -> str:
        """Return ``want``, or ``want_2``, ``want_3``... if it is taken, and mark it taken."""
        candidate = want
        suffix = 2
        while candidate in self._taken:
            candidate = f"{want}_{suffix}"
            suffix += 1
        self._taken.add(candidate)
        return candidate


def make_arg_string(arg_names: Sequence[str] | None, arg_types: Sequence[str] | None) -> str:
    """Join names and types into a parameter list, writing a shared type only once."""
    names = list(arg_names or ())
    types = list(arg_types or ())
    parts = []
    for i, name in enumerate(names):
        if i + 1 < len(types) and types[i] == types[i + 1]:
            parts.append(name)
        else:
            parts.append(f"{name} {types[i]}")
    return ", ".join(parts)


def _is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def _is_digit(ch: str) -> bool:
    return unicodedata.category(ch) == "Nd"


def sanitize(name: str) -> str:
    """Clean up a string so that it can serve as a package name."""
    result = ""
    for ch in name:
        if ch == "_" or _is_letter(ch) or (result and _is_digit(ch)):
            result += ch
        else:
            result += "_"
    return "x" if result == "_" else result


def parse_mock_names(names: str) -> dict[str, str]:
    """Parse comma-separated ``interface=mock`` pairs; raise ValueError on a bad pair."""
    mocks: dict[str, str] = {}
    for pair in names.split(","):
        interface, sep, mock = pair.partition("=")
        if not sep or not mock:
            raise ValueError(f"bad mock names spec: {pair}")
        mocks[interface] = mock
    return mocks


def parse_exclude_interfaces(names: str) -> set[str] | None:
    """Parse comma-separated interface names; return None when there are none."""
    excluded = {name for name in names.split(",") if name}
    return excluded or None


def mock_name(mock_names: Mapping[str, str] | None, type_name: str) -> str:
    """Name of the mock type for an interface, honouring explicit overrides."""
    if mock_names and type_name in mock_names:
        return mock_names[type_name]
    return "Mock" + type_name