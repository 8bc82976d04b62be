# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `HookManager` and `HookType` used by Argot applications to run
callbacks around the stages of a run.

Key Components:
- HookType: Enum of the supported lifecycle stages
- HookManager: Registers and invokes hooks for an application
- Hook: Union of sync and async callables accepting a `RunContext`

Usage:
    hooks = HookManager()
    hooks.register(HookType.PRE_EXECUTE, log_start)
"""
from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Union

from argot.context import RunContext
from argot.exceptions import InvalidHookError
from argot.logger import logger
from argot.utils import ensure_async

Hook = Union[Callable[[RunContext], None], Callable[[RunContext], Awaitable[None]]]


class HookType(Enum):
    """
    Enum for supported hook lifecycle phases in Argot.

    Members:
        PRE_INIT: Run once, before the built-in flags and help command exist.
        POST_INIT: Run once, after initialization finished.
        PRE_EXECUTE: Run after global parameters were activated, before the command.
        POST_EXECUTE: Run after the command returned.
        ON_ERROR: Run when the run fails, before the error is rendered or re-raised.
        ON_TEARDOWN: Run at the very end of every run, after parameters were reset.

    Aliases:
        "before" → "pre_execute"
        "after" → "post_execute"
        "error" → "on_error"
        "teardown" → "on_teardown"
    """

    PRE_INIT = "pre_init"
    POST_INIT = "post_init"
    PRE_EXECUTE = "pre_execute"
    POST_EXECUTE = "post_execute"
    ON_ERROR = "on_error"
    ON_TEARDOWN = "on_teardown"

    @classmethod
    def choices(cls) -> list[HookType]:
        """Return a list of all hook type choices."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "before": "pre_execute",
            "after": "post_execute",
            "error": "on_error",
            "teardown": "on_teardown",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the hook type."""
        return self.value


class HookManager:
    """
    Keeps the hooks of an application, in registration order, per stage.

    A failing hook never stops the run: it is logged and the next hook runs.
    The one exception is `ON_ERROR`, where the run is already failing. There
    the original error is raised again, chained to the hook's own error.

    Methods:
        register(hook_type, hook): Add a hook to a stage.
        clear(hook_type): Drop the hooks of one stage, or of every stage.
        trigger(hook_type, context): Run the hooks of a stage with `context`.
    """

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {
            hook_type: [] for hook_type in HookType
        }

    def register(self, hook_type: HookType | str, hook: Hook):
        """
        Add `hook` to the stage named by `hook_type` (a member or an alias).

        Raises:
            ValueError: If the stage is unknown.
            InvalidHookError: If the hook is not callable.
        """
        hook_type = HookType(hook_type)
        if not callable(hook):
            raise InvalidHookError(f"Hook for '{hook_type}' must be a callable.")
        self._hooks[hook_type].append(hook)

    def clear(self, hook_type: HookType | str | None = None):
        if hook_type is None:
            stages = list(HookType)
        else:
            stages = [HookType(hook_type)]
        for stage in stages:
            self._hooks[stage].clear()

    async def trigger(self, hook_type: HookType, context: RunContext):
        hook_type = HookType(hook_type)
        for hook in self._hooks[hook_type]:
            try:
                await ensure_async(hook)(context)
            except Exception as hook_error:
                logger.warning(
                    "[%s] Hook '%s' failed during %s: %s",
                    context.name,
                    _hook_name(hook),
                    hook_type,
                    hook_error,
                )
                if hook_type is HookType.ON_ERROR and context.exception is not None:
                    raise context.exception from hook_error

    def __str__(self) -> str:
        lines = ["<HookManager>"]
        for hook_type, hooks in self._hooks.items():
            names = ", ".join(_hook_name(hook) for hook in hooks) or "(none)"
            lines.append(f"  {hook_type}: {names}")
        return "\n".join(lines)


def _hook_name(hook: Hook) -> str:
    return getattr(hook, "__name__", repr(hook))
