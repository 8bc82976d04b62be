# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns a flat list of CLI tokens into a `DispatchPlan`.

The dispatcher makes a single left-to-right pass:

1. The first token selects the command, unless it is missing or looks like an
   option, in which case the default command is used and the token is pushed
   back. A first token naming no command is pushed back to the default command
   too, but only when the default command accepts positional arguments.
2. Every `--name` / `-n` token is resolved against the global parameters.
   Tokens naming one of the selected command's own parameters are left for the
   command. Anything else is an `UnknownOptionError`, wherever it appears.
3. Bare tokens following a global option are collected by it while it wants
   more arguments; the rest stay for the command.

Anything starting with a dash is an option token. A positional value such as
`-1` or `-notes.txt` is therefore read as an option.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from argot.command import Command
from argot.exceptions import (
    NoDefaultCommandError,
    UnknownCommandError,
    UnknownOptionError,
)
from argot.logger import logger
from argot.parameter import Parameter
from argot.utils import option_name


@dataclass
class DispatchPlan:
    """
    The resolved (command, activated globals, positional args) of one run.

    Attributes:
        command (Command): The command to run.
        parameters (list[Parameter]): Global parameters to activate, in parse order.
        arguments (list): Tokens left for the command's own parsing.
        implicit (bool): True when the default command was selected by fallback.
    """

    command: Command
    parameters: list[Parameter] = field(default_factory=list)
    arguments: list[Any] = field(default_factory=list)
    implicit: bool = False


class ArgumentDispatcher:
    """Parses tokens against registered commands and global parameters."""

    def __init__(
        self,
        commands: dict[str, Command],
        global_parameters: dict[str, Parameter],
        default_command: str | None = None,
    ) -> None:
        self.commands = commands
        self.global_parameters = global_parameters
        self.default_command = default_command

    def _get_default(self) -> Command:
        command = (
            self.commands.get(self.default_command) if self.default_command else None
        )
        if command is None:
            raise NoDefaultCommandError()
        return command

    def select_command(self, tokens: list[Any]) -> tuple[Command, bool]:
        """Pop the command token from `tokens`; return the command and `implicit`."""
        if not tokens or option_name(tokens[0]) is not None:
            return self._get_default(), True

        name = str(tokens[0])
        command = self.commands.get(name)
        if command is not None:
            tokens.pop(0)
            return command, False

        default = (
            self.commands.get(self.default_command) if self.default_command else None
        )
        if default is not None and default.more_args():
            logger.debug("'%s' is not a command, passing it to '%s'.", name, default.name)
            return default, True
        raise UnknownCommandError(name)

    def parse(self, args: Sequence[Any]) -> DispatchPlan:
        tokens = list(args)
        command, implicit = self.select_command(tokens)

        parameters: list[Parameter] = []
        remaining: list[Any] = []
        current: Parameter | None = None
        for token in tokens:
            name = option_name(token)
            if name is not None:
                if name in command.parameters:
                    current = None
                    remaining.append(token)
                    continue
                parameter = self.global_parameters.get(name)
                if parameter is None:
                    raise UnknownOptionError(token)
                if not any(parameter is seen for seen in parameters):
                    parameters.append(parameter)
                current = parameter
                continue
            if current is not None and current.more_args():
                current.add_argument(token)
                continue
            current = None
            remaining.append(token)

        logger.debug(
            "Dispatching '%s' with globals %s and arguments %r",
            command.name,
            [parameter.name for parameter in parameters],
            remaining,
        )
        return DispatchPlan(
            command=command,
            parameters=parameters,
            arguments=remaining,
            implicit=implicit,
        )
