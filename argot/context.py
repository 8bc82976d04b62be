# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Run-scoped execution context for Argot applications.

A `RunContext` is created by `Argot.run` for every invocation and threaded
through dispatch, parameter activation, command execution and hooks. It
replaces any ambient state: debug and verbose mode, the unit that is currently
executing, the dispatch plan and the collected results all live here and are
discarded with the run.

Code running inside a command or parameter block reaches the context through
`Argot.context` and uses `unit` / `get()` to read arguments of whatever is
executing right now:

    @app.command("copy", arity=2)
    def copy(source, target):
        if app.context.debug:
            ...
        app.context.get("source")
"""
from __future__ import annotations

import time
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RunContext(BaseModel):
    """
    Represents the runtime state of a single `Argot.run` invocation.

    Attributes:
        name (str): Name of the application being run.
        args (list): Raw CLI tokens the run started with.
        command (Command | None): Command selected by the dispatcher.
        parameters (list[Parameter]): Global parameters activated, in parse order.
        arguments (list): Tokens left for the command after the global scan.
        results (list): Values returned by standalone actions and the command.
        exception (Exception | None): The error that ended the run, if any.
        debug (bool): Set by the built-in `--debug` flag.
        verbose (bool): Set by the built-in `--verbose` flag.
        current_command / current_global_param / current_param: The units that are
            executing right now, innermost last.
        extra (dict): Free-form storage for hooks and user code.

    Properties:
        unit: The innermost executing unit (parameter, then global parameter,
              then command).
        duration (float | None): The run duration in seconds.
        success (bool): Whether the run completed without an exception.
        status (str): "OK" or "ERROR".
    """

    name: str = ""
    args: list[Any] = Field(default_factory=list)
    command: Any | None = None
    parameters: list[Any] = Field(default_factory=list)
    arguments: list[Any] = Field(default_factory=list)
    results: list[Any] = Field(default_factory=list)
    exception: Exception | None = None

    debug: bool = False
    verbose: bool = False

    current_command: Any | None = None
    current_global_param: Any | None = None
    current_param: Any | None = None

    start_time: float | None = None
    end_time: float | None = None
    start_wall: datetime | None = None
    end_wall: datetime | None = None

    extra: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def start_timer(self):
        self.start_wall = datetime.now()
        self.start_time = time.perf_counter()

    def stop_timer(self):
        self.end_time = time.perf_counter()
        self.end_wall = datetime.now()

    @property
    def unit(self) -> Any | None:
        return self.current_param or self.current_global_param or self.current_command

    def get(self, name: str, default: Any = None) -> Any:
        """Return the named argument of the executing unit, or `default`."""
        unit = self.unit
        if unit is None or not hasattr(unit, "get_argument"):
            return default
        return unit.get_argument(name, default)

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def to_log_line(self) -> str:
        """Structured flat-line format for logging."""
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        command = self.command.name if self.command else None
        return (
            f"[{self.name}] command={command} status={self.status} "
            f"duration={duration_str} results={self.results!r} "
            f"exception={exception_str}"
        )

    def __str__(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        outcome = (
            f"Results: {self.results!r}"
            if self.success
            else f"Exception: {self.exception}"
        )
        return (
            f"<RunContext '{self.name}' | {self.status} | "
            f"Duration: {duration_str} | {outcome}>"
        )
