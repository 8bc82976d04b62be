# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Argot.

A command is an option whose "argument" is its own name: it is selected by the
first CLI token and then takes every remaining token that is not a global
parameter. A command provides:

- Its own set of flags and options, with aliases
- Token-level parsing of its arguments into local parameters and positional
  arguments
- Arity and type checking of the positional arguments
- Execution of an inline code block, or of an external handler referenced by
  a callable or a dotted path
"""
from __future__ import annotations

from typing import Any, Callable, Sequence

from pydantic import Field, PrivateAttr

from argot.context import RunContext
from argot.exceptions import BlockMissingError, UnknownParameterError
from argot.importer import resolve_action
from argot.logger import logger
from argot.parameter import Option, Parameter, normalize_name
from argot.utils import ensure_async, option_name


class Command(Option):
    """
    Represents a command of an Argot application.

    Positional arguments are bound to the parameters of the command's block in
    order, so `def copy(source, target)` makes a command taking exactly two
    arguments. A command without a block runs its `handler` instead: a
    callable, or a dotted path such as `"mypackage.tasks:deploy"` resolved when
    the command is created.

    Attributes:
        handler (Callable | str | None): External code used when there is no block.
        parameters (dict[str, Parameter]): Local flags and options by name and alias.
        auto_short_aliases (bool): Give local parameters a one-letter alias made
            from their first character when that letter is free.

    Methods:
        register(): Add a local parameter or a mapping of aliases.
        run(): Parse the command's tokens, validate them and run the block.
        reset(): Clear the command and all of its local parameters.

    Raises:
        BlockMissingError: When neither a block nor a resolvable handler exists.
    """

    handler: Callable[..., Any] | str | None = None
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    auto_short_aliases: bool = False

    _handler: Callable[..., Any] | None = PrivateAttr(default=None)
    _fallback: dict[str, Parameter] = PrivateAttr(default_factory=dict)

    def model_post_init(self, _: Any) -> None:
        """Resolve the external handler and register initial parameters."""
        if self.action is None:
            self._handler = self._resolve_handler()
        initial = list(dict.fromkeys(self.parameters.values()))
        self.check_signature()
        self.parameters = {}
        for parameter in initial:
            self.register(parameter)

    def _resolve_handler(self) -> Callable[..., Any]:
        if callable(self.handler):
            return ensure_async(self.handler)
        if isinstance(self.handler, str):
            try:
                return ensure_async(resolve_action(self.handler))
            except (ImportError, ValueError) as error:
                logger.debug(
                    "[Command:%s] Could not resolve handler '%s': %s",
                    self.name,
                    self.handler,
                    error,
                )
                raise BlockMissingError(self.name, str(error)) from error
        raise BlockMissingError(self.name)

    def _arity_target(self) -> Callable[..., Any] | None:
        return self.action or self._handler

    @property
    def arguments(self) -> list[Any]:
        """Positional arguments collected during the current run."""
        return self.args

    def bind_globals(self, parameters: dict[str, Parameter]) -> None:
        """Use `parameters` to resolve option tokens unknown to this command."""
        self._fallback = parameters

    def register(self, parameter: Parameter | dict[str, str]) -> None:
        """
        Register a local parameter, or aliases for already registered ones.

        Args:
            parameter: A Flag/Option, or a mapping of alias name to canonical name.

        Raises:
            UnknownParameterError: If an alias targets an unregistered parameter.
        """
        if isinstance(parameter, dict):
            for alias, target in parameter.items():
                target = normalize_name(target)
                if target not in self.parameters:
                    raise UnknownParameterError(target)
                self._add_alias(normalize_name(alias), self.parameters[target])
            return

        if not isinstance(parameter, Parameter):
            raise TypeError("Only flags, options or alias mappings can be registered.")

        self.parameters[parameter.name] = parameter
        for alias in list(parameter.aliases):
            self._add_alias(alias, parameter)
        if self.auto_short_aliases and len(parameter.name) > 1:
            short = parameter.name[0]
            if short not in self.parameters:
                self._add_alias(short, parameter)

    def _add_alias(self, alias: str, parameter: Parameter) -> None:
        existing = self.parameters.get(alias)
        if existing is not None and existing is not parameter:
            logger.debug(
                "[Command:%s] Alias '%s' already assigned to '%s'. Skipping for '%s'.",
                self.name,
                alias,
                existing.name,
                parameter.name,
            )
            if alias in parameter.aliases:
                parameter.aliases.remove(alias)
            return
        self.parameters[alias] = parameter
        if alias != parameter.name and alias not in parameter.aliases:
            parameter.aliases.append(alias)

    def _dispatch(self, tokens: Sequence[Any]) -> list[Parameter]:
        """
        Split `tokens` into local parameters (with their arguments) and
        positional arguments. Returns the referenced parameters in order.
        """
        referenced: list[Parameter] = []
        current: Parameter | None = None
        for token in tokens:
            name = option_name(token)
            if name is not None:
                parameter = self.parameters.get(name)
                if parameter is None:
                    parameter = self._fallback.get(name)
                if parameter is None:
                    raise UnknownParameterError(token)
                if not any(parameter is seen for seen in referenced):
                    referenced.append(parameter)
                current = parameter
                continue
            if current is not None and current.more_args():
                current.add_argument(token)
                continue
            current = None
            self.add_argument(token)
        return referenced

    async def run(self, *args: Any, context: RunContext | None = None) -> Any:
        """
        Parse `args`, validate the positional arguments and run the command.

        Raises:
            UnknownParameterError: An option token is unknown to the command.
            MissingArgumentError: Fewer positional arguments than required.
            ArityError: More positional arguments than the block accepts.
            ArgumentTypeError: An argument does not match its declared type.
        """
        referenced = self._dispatch(args)
        self._values = self.check_args()
        self._active = True

        for parameter in referenced:
            if context:
                context.current_param = parameter
            try:
                await parameter.activate()
            finally:
                if context:
                    context.current_param = None

        if context:
            context.current_command = self
        logger.debug("[Command:%s] Running with arguments %r", self.name, self._values)
        target = self.action or self._handler
        assert target is not None, "Command must have a block or a handler"
        self._result = await target(*self._values)
        return self._result

    async def activate(self) -> Any:
        return await self.run()

    def reset(self) -> None:
        super().reset()
        for parameter in {id(param): param for param in self.parameters.values()}.values():
            parameter.reset()

    def __str__(self) -> str:
        target = self.handler if self.action is None else self.action
        return (
            f"Command(name='{self.name}', description='{self.description}' "
            f"action='{target}')"
        )
