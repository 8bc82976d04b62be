# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Introspection of the callables bound to parameters and commands.

A block's positional parameters define how many CLI arguments it accepts and
what they are called, so `def greet(name, greeting="Hello")` takes one or two
arguments named `name` and `greeting`. Annotations of supported types also tag
their slot, so `def repeat(times: int)` coerces its argument to an int.

Functions:
- infer_arity: (minimum, maximum) positional argument counts.
- infer_arg_names: positional parameter names in order.
- infer_arg_types: per-slot `ParamType` tags from annotations.
"""
import inspect
from typing import Any, Callable

from argot.logger import logger
from argot.param_types import ParamType

POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _positional_parameters(
    func: Callable[..., Any] | None,
) -> tuple[list[inspect.Parameter], bool]:
    if not callable(func):
        return [], False
    try:
        try:
            signature = inspect.signature(func, eval_str=True)
        except NameError:
            signature = inspect.signature(func)
    except (TypeError, ValueError):
        logger.debug("Could not inspect signature of %s", func)
        return [], True
    positional = [
        param for param in signature.parameters.values() if param.kind in POSITIONAL_KINDS
    ]
    variadic = any(
        param.kind is inspect.Parameter.VAR_POSITIONAL
        for param in signature.parameters.values()
    )
    return positional, variadic


def infer_arity(func: Callable[..., Any] | None) -> tuple[int, int | None]:
    """
    Return the (minimum, maximum) number of positional arguments `func` accepts.

    The maximum is None when the callable takes `*args` or cannot be inspected.
    A missing callable accepts no arguments.
    """
    if func is None:
        return 0, 0
    positional, variadic = _positional_parameters(func)
    minimum = sum(1 for param in positional if param.default is inspect.Parameter.empty)
    maximum = None if variadic else len(positional)
    return minimum, maximum


def infer_arg_names(func: Callable[..., Any] | None) -> list[str]:
    positional, _ = _positional_parameters(func)
    return [param.name for param in positional]


def infer_arg_types(func: Callable[..., Any] | None) -> list[ParamType | None]:
    positional, _ = _positional_parameters(func)
    return [ParamType.from_annotation(param.annotation) for param in positional]
