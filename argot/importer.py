# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Resolution of external command handlers from import paths.

Two forms are accepted:

- `package.module:function` (or `package.module:Class.method`)
- `package.module.function`
"""
import importlib
from functools import reduce
from types import ModuleType
from typing import Any, Callable

from argot.logger import logger


def split_handler_path(path: str) -> tuple[str, list[str]]:
    """Return the module path and the attribute chain of a handler path."""
    if not isinstance(path, str):
        raise ValueError(f"Handler path must be a string, got {type(path).__name__}.")
    if ":" in path:
        module_path, _, attributes = path.partition(":")
    else:
        module_path, _, attributes = path.rpartition(".")
    chain = attributes.split(".") if attributes else []
    if not module_path or not chain or not all(chain):
        raise ValueError(f"Invalid handler path: '{path}'")
    return module_path, chain


def resolve_action(path: str) -> Callable[..., Any]:
    """
    Import the callable referenced by `path`.

    Raises:
        ImportError: The module cannot be imported or lacks the attribute.
        ValueError: The path is malformed or does not point to a callable.
    """
    module_path, chain = split_handler_path(path)
    module: ModuleType = importlib.import_module(module_path)
    try:
        target: Any = reduce(getattr, chain, module)
    except AttributeError as error:
        raise ImportError(
            f"Module '{module_path}' has no attribute '{'.'.join(chain)}'"
        ) from error

    if not callable(target):
        raise ValueError(f"Handler '{path}' is not callable.")
    logger.debug("Resolved handler '%s' to %r", path, target)
    return target
