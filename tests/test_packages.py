import os
import subprocess
from unittest import mock

import pytest

from mockctl.packages import create_package_map, module_path, parse_package_import


@pytest.mark.parametrize(
    "contents, expected",
    [
        (b"module example.com/foo\n\ngo 1.20\n", "example.com/foo"),
        ("module example.com/bar // trailing comment\n", "example.com/bar"),
        ('module "example.com/quoted"\n', "example.com/quoted"),
        ("module `example.com/raw`\n", "example.com/raw"),
        ('module "example.com/broken\n', ""),
        ("go 1.20\n", ""),
        ("modulex example.com/foo\n", ""),
        ("module\n", ""),
        ("// module example.com/commented\nmodule example.com/real\n", "example.com/real"),
    ],
)
def test_module_path(contents, expected):
    assert module_path(contents) == expected


def test_parse_package_import_fallback_gopath(tmp_path, monkeypatch):
    go_path = str(tmp_path / "gopath")
    src_dir = os.path.join(go_path, "src", "example.com", "foo")
    os.makedirs(src_dir)
    monkeypatch.setenv("GOPATH", go_path)
    monkeypatch.setenv("GO111MODULE", "on")
    assert parse_package_import(src_dir) == "example.com/foo"


def test_parse_package_import_fallback_multi_gopath(tmp_path, monkeypatch):
    first = str(tmp_path / "first")
    second = str(tmp_path / "second")
    src_dir = os.path.join(first, "src", "example.com", "foo")
    os.makedirs(src_dir)
    os.makedirs(second)
    monkeypatch.setenv("GOPATH", os.pathsep.join([first, second]))
    monkeypatch.setenv("GO111MODULE", "on")
    assert parse_package_import(src_dir) == "example.com/foo"


def test_parse_package_import_second_gopath(tmp_path, monkeypatch):
    first = str(tmp_path / "first")
    second = str(tmp_path / "second")
    os.makedirs(first)
    src_dir = os.path.join(second, "src", "example.com", "bar")
    os.makedirs(src_dir)
    monkeypatch.setenv("GOPATH", os.pathsep.join([first, second]))
    monkeypatch.setenv("GO111MODULE", "off")
    assert parse_package_import(src_dir) == "example.com/bar"


def test_parse_package_import_from_module(tmp_path, monkeypatch):
    root = tmp_path / "project"
    sub = root / "internal" / "mocks"
    sub.mkdir(parents=True)
    (root / "go.mod").write_text("module example.com/project\n\ngo 1.20\n")
    monkeypatch.delenv("GO111MODULE", raising=False)
    assert parse_package_import(str(sub)) == "example.com/project/internal/mocks"


def test_parse_package_import_module_root(tmp_path, monkeypatch):
    root = tmp_path / "project"
    root.mkdir()
    (root / "go.mod").write_text("module example.com/project\n")
    monkeypatch.setenv("GO111MODULE", "on")
    assert parse_package_import(str(root)) == "example.com/project"


def test_parse_package_import_module_mode_off_uses_gopath(tmp_path, monkeypatch):
    go_path = tmp_path / "gopath"
    src_dir = go_path / "src" / "example.com" / "foo"
    src_dir.mkdir(parents=True)
    (src_dir / "go.mod").write_text("module example.com/other\n")
    monkeypatch.setenv("GOPATH", str(go_path))
    monkeypatch.setenv("GO111MODULE", "off")
    assert parse_package_import(str(src_dir)) == "example.com/foo"


def test_parse_package_import_without_gopath(tmp_path, monkeypatch):
    monkeypatch.setenv("GO111MODULE", "off")
    monkeypatch.delenv("GOPATH", raising=False)
    with pytest.raises(ValueError, match="GOPATH is not set"):
        parse_package_import(str(tmp_path))


def test_parse_package_import_outside_gopath(tmp_path, monkeypatch):
    go_path = tmp_path / "gopath"
    go_path.mkdir()
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.setenv("GOPATH", str(go_path))
    monkeypatch.setenv("GO111MODULE", "off")
    with pytest.raises(ValueError, match="outside GOPATH"):
        parse_package_import(str(elsewhere))


_LIST_OUTPUT = (
    b'{\n\t"Dir": "/opt/toolchain/src/context",\n\t"ImportPath": "context",\n\t"Name": "context"\n}\n'
    b'{\n\t"ImportPath": "example.com/x/present",\n\t"Name": "present"\n}\n'
)


def test_create_package_map():
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=_LIST_OUTPUT)
    with mock.patch("subprocess.run", return_value=completed) as run:
        packages = create_package_map(["context", "example.com/x/present"])
    assert packages == {"context": "context", "example.com/x/present": "present"}
    assert run.call_args.args[0] == [
        "go",
        "list",
        "-json",
        "context",
        "example.com/x/present",
    ]
    assert packages.get("missing") is None


def test_create_package_map_without_go():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("go")):
        assert create_package_map(["context"]) == {}


def test_create_package_map_stops_on_bad_output():
    output = b'{"ImportPath": "context", "Name": "context"}\n{not json'
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=output)
    with mock.patch("subprocess.run", return_value=completed):
        assert create_package_map(["context", "bogus"]) == {"context": "context"}


def test_create_package_map_empty_output():
    completed = subprocess.CompletedProcess(args=[], returncode=1, stdout=b"")
    with mock.patch("subprocess.run", return_value=completed):
        assert create_package_map(["bogus"]) == {}