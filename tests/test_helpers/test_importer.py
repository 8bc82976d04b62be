import os.path

import pytest

from argot.importer import resolve_action, split_handler_path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("pkg.mod:func", ("pkg.mod", ["func"])),
        ("pkg.mod.func", ("pkg.mod", ["func"])),
        ("pkg:Class.method", ("pkg", ["Class", "method"])),
    ],
)
def test_split_handler_path(path, expected):
    assert split_handler_path(path) == expected


@pytest.mark.parametrize("path", ["func", ":func", "pkg:", "pkg:a..b", "pkg."])
def test_split_handler_path_invalid(path):
    with pytest.raises(ValueError):
        split_handler_path(path)


def test_resolve_action():
    assert resolve_action("os.path:join") is os.path.join
    assert resolve_action("os.path.basename") is os.path.basename
    assert resolve_action("pathlib:Path.cwd") is not None


def test_resolve_action_errors():
    with pytest.raises(ImportError):
        resolve_action("argot_missing_module:run")
    with pytest.raises(ImportError):
        resolve_action("os.path:missing")
    with pytest.raises(ValueError):
        resolve_action("os.path:sep")
