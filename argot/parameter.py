# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Parameter` and its two variants, `Flag` and `Option`.

A parameter is a named, optionally aliased unit of configuration that can be
activated from the command line and may own a code block. Parameters are
declared once and reused across runs; only their activation state (the active
flag, collected arguments and the block's result) changes during a run, and
`reset()` restores it afterwards.

- `Flag`: takes no arguments. Activation runs its block with no arguments.
- `Option`: collects arguments. Activation checks their count and types, then
  runs its block with the coerced values.

Argument counts come from, in order: `param_type` (one slot per type), an
explicit `arity`, `arg_names`, and finally the signature of the block itself.
An option with none of these takes exactly one argument.

Example:
    >>> flag = Flag(name="force", action=lambda: print("forced"))
    >>> option = Option(name="level", param_type=[int], action=set_level)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from argot.exceptions import ArityError, MissingArgumentError
from argot.param_types import ParamType, coerce_arguments
from argot.signature import infer_arg_names, infer_arg_types, infer_arity
from argot.utils import ensure_async


def normalize_name(name: Any) -> str:
    if not isinstance(name, str):
        raise TypeError(f"Parameter names must be strings, got {type(name).__name__}.")
    normalized = name.strip().lstrip("-")
    if not normalized:
        raise ValueError(f"Invalid parameter name: {name!r}")
    return normalized


def _format_range(minimum: int, maximum: int | None) -> str:
    if maximum is None:
        return f"{minimum} or more"
    if minimum == maximum:
        return str(minimum)
    return f"{minimum} to {maximum}"


class Parameter(BaseModel, ABC):
    """
    Base class for everything that can be activated from the command line.

    Two parameters are the same entity when they share a canonical name, and
    every alias resolves to the very same object, so activating a parameter
    through an alias is indistinguishable from activating it by name.

    Attributes:
        name (str): Canonical name, without leading dashes.
        description (str): Shown on the help screen.
        aliases (list[str]): Alternate names, filled in as aliases are registered.
        action (Callable | None): Code block run on activation (sync or async).
        hidden (bool): Leave this parameter out of the help screen.
        standalone (bool): For global parameters: the block result is part of the
            run results, and the implicit default command is skipped when it fires.
    """

    name: str
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    action: Callable[..., Any] | None = None
    hidden: bool = False
    standalone: bool = False

    _active: bool = PrivateAttr(default=False)
    _result: Any = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("name", mode="before")
    @classmethod
    def strip_dashes(cls, name: Any) -> str:
        return normalize_name(name)

    @field_validator("aliases", mode="before")
    @classmethod
    def normalize_aliases(cls, aliases: Any) -> list[str]:
        if aliases is None:
            return []
        if isinstance(aliases, str):
            aliases = [aliases]
        normalized: list[str] = []
        for alias in aliases:
            alias = normalize_name(alias)
            if alias not in normalized:
                normalized.append(alias)
        return normalized

    @field_validator("action", mode="before")
    @classmethod
    def wrap_callable_as_async(cls, action: Any) -> Any:
        if action is None:
            return None
        if callable(action):
            return ensure_async(action)
        raise TypeError("Action must be a callable")

    @property
    def active(self) -> bool:
        return self._active

    @property
    def result(self) -> Any:
        """The value returned by the block during the current run."""
        return self._result

    @property
    def names(self) -> list[str]:
        return [self.name, *self.aliases]

    def more_args(self) -> bool:
        return False

    def add_argument(self, raw: Any) -> None:
        raise ArityError(self.name, 0, 1)

    def get_argument(self, name: str, default: Any = None) -> Any:
        return default

    @abstractmethod
    async def activate(self) -> Any:
        """Mark this parameter active and run its block."""

    def reset(self) -> None:
        """Clear all state collected during a run."""
        self._active = False
        self._result = None

    def usage_text(self) -> str:
        """`--name|-n` style representation used on the help screen."""
        return "|".join(
            f"--{name}" if len(name) > 1 else f"-{name}" for name in self.names
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', aliases={self.aliases})"


class Flag(Parameter):
    """A parameter without arguments; activation simply runs its block."""

    async def activate(self) -> Any:
        if self._active:
            return self._result
        self._active = True
        if self.action:
            self._result = await self.action()
        return self._result


class Option(Parameter):
    """
    A parameter that collects arguments from the tokens following it.

    Attributes:
        param_type (list[ParamType]): One tag per argument slot. When given, the
            option takes exactly `len(param_type)` arguments.
        arity (int | tuple[int, int | None] | None): Exact count, or a
            (minimum, maximum) pair where a maximum of None means unbounded.
        arg_names (list[str]): Names of the argument slots, for `get_argument`.
    """

    param_type: list[ParamType] = Field(default_factory=list)
    arity: int | tuple[int, int | None] | None = None
    arg_names: list[str] = Field(default_factory=list)

    _args: list[Any] = PrivateAttr(default_factory=list)
    _values: list[Any] | None = PrivateAttr(default=None)

    @field_validator("param_type", mode="before")
    @classmethod
    def normalize_param_type(cls, param_type: Any) -> list[ParamType]:
        if param_type is None:
            return []
        if not isinstance(param_type, (list, tuple)):
            param_type = [param_type]
        return [ParamType(item) for item in param_type]

    @field_validator("arity", mode="before")
    @classmethod
    def validate_arity(cls, arity: Any) -> Any:
        if arity is None:
            return None
        if isinstance(arity, int) and not isinstance(arity, bool):
            if arity < 0:
                raise ValueError("Arity cannot be negative.")
            return arity
        if isinstance(arity, (list, tuple)) and len(arity) == 2:
            minimum, maximum = arity
            if minimum < 0 or (maximum is not None and maximum < minimum):
                raise ValueError(f"Invalid arity range: {arity!r}")
            return (minimum, maximum)
        raise ValueError(f"Invalid arity: {arity!r}")

    def model_post_init(self, _: Any) -> None:
        self.check_signature()

    def check_signature(self) -> None:
        """
        Make sure the block can be called with every declared argument count.

        Raises:
            ValueError: If `param_type`, `arity` or `arg_names` allow a count the
                block's signature does not accept.
        """
        target = self._arity_target()
        if target is None:
            return
        minimum, maximum = self.bounds
        accepts_min, accepts_max = infer_arity(target)
        too_many = accepts_max is not None and (maximum is None or maximum > accepts_max)
        if too_many or minimum < accepts_min:
            raise ValueError(
                f"'{self.name}' declares {_format_range(minimum, maximum)} argument(s) "
                f"but its code accepts {_format_range(accepts_min, accepts_max)}."
            )

    @property
    def args(self) -> list[Any]:
        """Raw arguments collected during the current run."""
        return self._args

    def _arity_target(self) -> Callable[..., Any] | None:
        return self.action

    def _default_arity(self) -> tuple[int, int | None]:
        target = self._arity_target()
        if target is None:
            return 1, 1
        return infer_arity(target)

    @property
    def bounds(self) -> tuple[int, int | None]:
        """The (minimum, maximum) number of arguments this option accepts."""
        if self.param_type:
            return len(self.param_type), len(self.param_type)
        if isinstance(self.arity, int):
            return self.arity, self.arity
        if self.arity is not None:
            return self.arity
        if self.arg_names:
            return len(self.arg_names), len(self.arg_names)
        return self._default_arity()

    @property
    def slot_types(self) -> list[ParamType | None]:
        if self.param_type:
            return list(self.param_type)
        return infer_arg_types(self._arity_target())

    def more_args(self) -> bool:
        _, maximum = self.bounds
        return maximum is None or len(self._args) < maximum

    def add_argument(self, raw: Any) -> None:
        _, maximum = self.bounds
        if maximum is not None and len(self._args) >= maximum:
            raise ArityError(self.name, maximum, len(self._args) + 1)
        self._args.append(raw)

    def check_args(self) -> list[Any]:
        """
        Validate the collected arguments and return their coerced values.

        Raises:
            MissingArgumentError: Fewer arguments than the minimum.
            ArityError: More arguments than the maximum.
            ArgumentTypeError: An argument does not fit its slot's type.
        """
        minimum, maximum = self.bounds
        given = len(self._args)
        if given < minimum:
            raise MissingArgumentError(self.name, minimum, given)
        if maximum is not None and given > maximum:
            raise ArityError(self.name, maximum, given)
        return coerce_arguments(self.name, self._args, self.slot_types)

    async def activate(self) -> Any:
        if self._active:
            return self._result
        self._values = self.check_args()
        self._active = True
        if self.action:
            self._result = await self.action(*self._values)
        return self._result

    def get_argument(self, name: str, default: Any = None) -> Any:
        names = self.arg_names or infer_arg_names(self._arity_target())
        if name not in names:
            return default
        index = names.index(name)
        values = self._values if self._values is not None else self._args
        return values[index] if index < len(values) else default

    def reset(self) -> None:
        super().reset()
        self._args.clear()
        self._values = None
