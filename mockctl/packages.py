"""Locating packages: module paths, import paths of directories and package names."""

from __future__ import annotations

import json
import logging
import os
import subprocess
from collections.abc import Iterable

log = logging.getLogger(__name__)

_MODULE_KEYWORD = "module"


def _unquote(text: str) -> str | None:
    if text.startswith("`"):
        if len(text) >= 2 and text.endswith("`") and "`" not in text[1:-1]:
            return text[1:-1]
        return None
    if len(text) < 2 or not text.endswith('"'):
        return None
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, str) else None


def module_path(data: bytes | str) -> str:
    """Return the module path declared in go.mod contents, or "" if there is none."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    for raw_line in data.split("\n"):
        line = raw_line.split("//", 1)[0].strip()
        if not line.startswith(_MODULE_KEYWORD):
            continue
        rest = line[len(_MODULE_KEYWORD):]
        stripped = rest.strip()
        if len(stripped) == len(rest) or not stripped:
            continue
        if stripped[0] in "\"`":
            unquoted = _unquote(stripped)
            return unquoted if unquoted is not None else ""
        return stripped
    return ""


def _join(*parts: str) -> str:
    present = [p for p in parts if p]
    if not present:
        return ""
    return os.path.normpath(os.sep.join(present))


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def parse_package_import(src_dir: str) -> str:
    """Return the import path of the package in ``src_dir``.

    The enclosing module's go.mod is used first (unless GO111MODULE is "off"),
    then the GOPATH roots. Raises ValueError when neither gives an answer.
    """
    if os.environ.get("GO111MODULE", "") != "off":
        current = src_dir
        while True:
            try:
                with open(os.path.join(current, "go.mod"), "rb") as handle:
                    contents = handle.read()
            except FileNotFoundError:
                parent = os.path.dirname(current)
                if parent == current:
                    break
                current = parent
                continue
            relative = src_dir[len(current):] if src_dir.startswith(current) else src_dir
            return _to_slash(_join(module_path(contents), relative))

    go_paths = os.environ.get("GOPATH", "")
    if not go_paths:
        raise ValueError("GOPATH is not set")
    for go_path in go_paths.split(os.pathsep):
        source_root = _join(go_path, "src") + os.sep
        if src_dir.startswith(source_root):
            return _to_slash(src_dir[len(source_root):])
    raise ValueError("source directory is outside GOPATH")


def _decode_stream(text: str) -> Iterable[dict]:
    decoder = json.JSONDecoder()
    position = 0
    length = len(text)
    while True:
        while position < length and text[position].isspace():
            position += 1
        if position >= length:
            return
        try:
            value, position = decoder.raw_decode(text, position)
        except ValueError as err:
            log.warning("failed to decode 'go list' output: %s", err)
            return
        if isinstance(value, dict):
            yield value
        else:
            log.warning("failed to decode 'go list' output: unexpected %s", type(value).__name__)


def create_package_map(import_paths: Iterable[str]) -> dict[str, str]:
    """Map each import path to its package name, as reported by ``go list``."""
    command = ["go", "list", "-json", *import_paths]
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return {}
    output = completed.stdout or b""
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    package_map: dict[str, str] = {}
    for entry in _decode_stream(output):
        import_path = entry.get("ImportPath", "")
        name = entry.get("Name", "")
        package_map[import_path] = name
    return package_map