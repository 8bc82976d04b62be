# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for defining and running Argot command-line applications.

An `Argot` instance is an explicit application builder: commands, flags,
options and aliases are registered on it once, and `run()` (or the synchronous
`main()` entry point) executes it against a list of CLI tokens as often as
needed. Nothing runs as a side effect of defining the application.

A run goes through these stages:

- initialization (first run only): built-in `--debug`/`-d` and
  `--verbose`/`-v` flags, the `help` command, and `help` as the default
  command unless another default was declared
- alias application: pending aliases are resolved once and cleared
- dispatch: tokens become a `DispatchPlan`
- activation of global parameters, in the order they were given
- execution of the selected command
- reset of every command and parameter, on success and on failure alike

Errors raised anywhere in a run reach a single boundary that either re-raises
them (`raise_errors`) or prints `Error:` and the message and exits with
status 1.

Example:
    ```
    >>> app = Argot("greeter")
    >>> @app.default()
    ... def greet_world():
    ...     return "Hello World!"
    >>> @app.command("greet", description="Greet someone")
    ... def greet(name):
    ...     return f"Hello {name}!"
    >>> await app.run(["greet", "Ada"])
    ['Hello Ada!']
    ```
"""
from __future__ import annotations

import asyncio
import sys
from contextlib import contextmanager
from io import StringIO
from typing import Any, Callable, Iterator, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from argot.command import Command
from argot.console import get_console
from argot.context import RunContext
from argot.debug import register_debug_hooks
from argot.dispatcher import ArgumentDispatcher
from argot.exceptions import (
    ArityError,
    CommandAlreadyExistsError,
    ParameterAlreadyExistsError,
    UnknownParameterError,
)
from argot.hook_manager import Hook, HookManager, HookType
from argot.logger import logger
from argot.parameter import Flag, Option, Parameter, normalize_name
from argot.progress_bar import ProgressBar
from argot.prompt_utils import confirm_async, prompt_line
from argot.settings import Settings
from argot.throbber import Throbber
from argot.utils import get_program_invocation

DEFAULT_COMMAND = "__default"


class Argot:
    """
    Registry and execution driver of an Argot application.

    Args:
        name (str | None): Application name, stored in `settings.name`.
        settings (Settings | None): Preconfigured settings.
        hooks (HookManager | None): Preconfigured lifecycle hooks.
        **options: Any `Settings` field, e.g. `raise_errors=True`.

    Attributes:
        commands (dict[str, Command]): Commands by name and alias.
        global_parameters (dict[str, Parameter]): Global flags/options by name
            and alias.
        aliases (dict[str, str]): Pending aliases (alias → canonical name),
            applied and cleared before the next dispatch.
        default_command (str | None): Name of the command run when none is given.
        context (RunContext | None): Context of the run in progress.
        last_context (RunContext | None): Context of the last finished run.

    Methods:
        run(): Execute the application against CLI tokens (async).
        main(): Synchronous entry point around `run()`.
        add_command() / command(): Register a command.
        add_default() / default() / set_default(): Declare the default command.
        add_flag() / flag(), add_option() / option(): Register global parameters.
        add_action() / action(): Register a standalone global option.
        add_alias(): Register an alias for a command or global parameter.
        put() / puts() / putc() / input() / confirm() / throbber() /
        progress_bar() / hidden_output(): Interactive helpers.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        settings: Settings | None = None,
        hooks: HookManager | None = None,
        **options: Any,
    ) -> None:
        self.settings: Settings = settings or Settings(**options)
        if name:
            self.settings.name = name
        self.commands: dict[str, Command] = {}
        self.global_parameters: dict[str, Parameter] = {}
        self.aliases: dict[str, str] = {}
        self.default_command: str | None = None
        self.hooks: HookManager = hooks or HookManager()
        self.context: RunContext | None = None
        self.last_context: RunContext | None = None
        self._initialized: bool = False

    @property
    def name(self) -> str:
        return self.settings.name

    @property
    def istream(self) -> TextIO:
        return self.settings.istream

    @property
    def ostream(self) -> TextIO:
        return self.settings.ostream

    @property
    def console(self) -> Console:
        """A rich console bound to the current output stream."""
        return get_console(self.ostream)

    def set(self, key: str, value: Any) -> None:
        """Change a setting, e.g. `app.set("raise_errors", True)`."""
        if key not in Settings.model_fields:
            raise AttributeError(f"Unknown setting: '{key}'")
        setattr(self.settings, key, value)

    def register_hook(self, hook_type: HookType | str, hook: Hook) -> None:
        self.hooks.register(hook_type, hook)

    def add_command(
        self,
        name: str,
        action: Callable[..., Any] | None = None,
        *,
        description: str = "",
        aliases: list[str] | None = None,
        arity: int | tuple[int, int | None] | None = None,
        param_type: Any = None,
        arg_names: list[str] | None = None,
        handler: Callable[..., Any] | str | None = None,
        parameters: list[Parameter] | None = None,
        hidden: bool = False,
    ) -> Command:
        """
        Register a command.

        Without `action` or `handler`, the handler defaults to
        `<command_package>.<name>:run` when `settings.command_package` is set.

        Raises:
            CommandAlreadyExistsError: If the name is already taken.
            BlockMissingError: If no code can be found for the command.
        """
        name = normalize_name(name)
        if action is None and handler is None and self.settings.command_package:
            handler = f"{self.settings.command_package}.{name.replace('-', '_')}:run"
        command = Command(
            name=name,
            action=action,
            description=description,
            aliases=aliases or [],
            arity=arity,
            param_type=param_type,
            arg_names=arg_names or [],
            handler=handler,
            hidden=hidden,
            auto_short_aliases=self.settings.auto_short_aliases,
        )
        for parameter in parameters or []:
            command.register(parameter)
        return self.add_command_from_command(command)

    def add_command_from_command(self, command: Command) -> Command:
        if not isinstance(command, Command):
            raise TypeError("command must be an instance of Command.")
        if command.name in self.commands:
            raise CommandAlreadyExistsError(
                f"Command '{command.name}' already exists in '{self.name}'."
            )
        self.commands[command.name] = command
        command.bind_globals(self.global_parameters)
        for alias in command.aliases:
            self.add_alias(alias, command.name)
        logger.debug("[%s] Registered command '%s'.", self.name, command.name)
        return command

    def command(self, name: str, **kwargs: Any) -> Callable[[Callable], Callable]:
        """Decorator form of `add_command`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_command(name, func, **kwargs)
            return func

        return decorator

    def add_default(
        self, action: Callable[..., Any] | None = None, **kwargs: Any
    ) -> Command:
        """Register the command run when no command is given."""
        kwargs.setdefault("hidden", True)
        command = self.add_command(DEFAULT_COMMAND, action, **kwargs)
        self.default_command = command.name
        return command

    def default(self, **kwargs: Any) -> Callable[[Callable], Callable]:
        """Decorator form of `add_default`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_default(func, **kwargs)
            return func

        return decorator

    def set_default(self, name: str) -> None:
        """Use an already registered command as the default command."""
        self.default_command = normalize_name(name)

    def add_parameter(self, parameter: Parameter) -> Parameter:
        """
        Register a global parameter and queue its aliases.

        A one-letter alias made from the first character is queued as well when
        `auto_short_aliases` is on and the letter is not taken yet.

        Raises:
            ParameterAlreadyExistsError: If the name is already taken.
        """
        if not isinstance(parameter, Parameter) or isinstance(parameter, Command):
            raise TypeError("Only flags and options can be global parameters.")
        if parameter.name in self.global_parameters:
            raise ParameterAlreadyExistsError(
                f"Parameter '{parameter.name}' already exists in '{self.name}'."
            )
        self.global_parameters[parameter.name] = parameter
        for alias in list(parameter.aliases):
            self.add_alias(alias, parameter.name)
        if self.settings.auto_short_aliases and len(parameter.name) > 1:
            short = parameter.name[0]
            if short not in self.global_parameters and short not in self.aliases:
                self.add_alias(short, parameter.name)
        logger.debug("[%s] Registered global parameter '%s'.", self.name, parameter.name)
        return parameter

    def add_flag(
        self,
        name: str,
        action: Callable[..., Any] | None = None,
        *,
        description: str = "",
        aliases: list[str] | None = None,
        hidden: bool = False,
    ) -> Flag:
        """Register a global flag."""
        flag = Flag(
            name=name,
            action=action,
            description=description,
            aliases=aliases or [],
            hidden=hidden,
        )
        self.add_parameter(flag)
        return flag

    def flag(self, name: str, **kwargs: Any) -> Callable[[Callable], Callable]:
        """Decorator form of `add_flag`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_flag(name, func, **kwargs)
            return func

        return decorator

    def add_option(
        self,
        name: str,
        action: Callable[..., Any] | None = None,
        *,
        description: str = "",
        aliases: list[str] | None = None,
        param_type: Any = None,
        arity: int | tuple[int, int | None] | None = None,
        arg_names: list[str] | None = None,
        hidden: bool = False,
        standalone: bool = False,
    ) -> Option:
        """Register a global option."""
        option = Option(
            name=name,
            action=action,
            description=description,
            aliases=aliases or [],
            param_type=param_type,
            arity=arity,
            arg_names=arg_names or [],
            hidden=hidden,
            standalone=standalone,
        )
        self.add_parameter(option)
        return option

    def option(self, name: str, **kwargs: Any) -> Callable[[Callable], Callable]:
        """Decorator form of `add_option`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_option(name, func, **kwargs)
            return func

        return decorator

    def add_action(
        self, name: str, action: Callable[..., Any], **kwargs: Any
    ) -> Option:
        """
        Register a standalone action, invoked as `--name args...`.

        Its result is part of the run results, and it replaces the default
        command when that command was only selected because no command was given.
        """
        kwargs["standalone"] = True
        return self.add_option(name, action, **kwargs)

    def action(self, name: str, **kwargs: Any) -> Callable[[Callable], Callable]:
        """Decorator form of `add_action`."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_action(name, func, **kwargs)
            return func

        return decorator

    def add_alias(self, alias: str, target: str) -> None:
        """
        Queue `alias` for the command or global parameter named `target`.

        Aliases are resolved right before the next dispatch, so the target may
        be registered later. An alias already queued for another target is
        skipped in favour of the earlier one.
        """
        alias, target = normalize_name(alias), normalize_name(target)
        existing = self.aliases.get(alias)
        if existing is not None and existing != target:
            logger.debug(
                "[alias conflict] '%s' already queued for '%s'. Skipping for '%s'.",
                alias,
                existing,
                target,
            )
            unit = self.commands.get(target) or self.global_parameters.get(target)
            if unit is not None and alias in unit.aliases:
                unit.aliases.remove(alias)
            return
        self.aliases[alias] = target

    def _apply_aliases(self) -> None:
        """Resolve all queued aliases and clear the queue."""
        for alias, target in self.aliases.items():
            registry: dict[str, Any]
            if target in self.commands:
                registry = self.commands
            elif target in self.global_parameters:
                registry = self.global_parameters
            else:
                raise UnknownParameterError(target)
            unit = registry[target]
            existing = registry.get(alias)
            if existing is not None and existing is not unit:
                logger.debug(
                    "[alias conflict] '%s' already assigned to '%s'. Skipping for '%s'.",
                    alias,
                    existing.name,
                    target,
                )
                if alias in unit.aliases:
                    unit.aliases.remove(alias)
                continue
            registry[alias] = unit
            if alias != unit.name and alias not in unit.aliases:
                unit.aliases.append(alias)
        self.aliases.clear()

    def _enable_debug(self) -> None:
        if self.context:
            self.context.debug = True

    def _enable_verbose(self) -> None:
        if self.context:
            self.context.verbose = True

    def _get_help_command(self) -> Command:
        return Command(
            name="help",
            action=self._render_help,
            description="Display this help screen",
            auto_short_aliases=self.settings.auto_short_aliases,
        )

    async def _init(self, context: RunContext) -> None:
        """One-time setup of built-ins, run before the first dispatch."""
        if self._initialized:
            return
        await self.hooks.trigger(HookType.PRE_INIT, context)

        if "debug" not in self.global_parameters:
            self.add_flag(
                "debug",
                self._enable_debug,
                description="Print a backtrace when an error occurs",
                aliases=["d"],
            )
        if self.settings.include_help_command and "help" not in self.commands:
            self.add_command_from_command(self._get_help_command())
        if "verbose" not in self.global_parameters:
            self.add_flag(
                "verbose",
                self._enable_verbose,
                description="Log every stage of a run",
                aliases=["v"],
            )
        if (
            self.settings.help_as_default
            and self.default_command is None
            and "help" in self.commands
        ):
            self.default_command = "help"
        register_debug_hooks(self.hooks)

        self._initialized = True
        await self.hooks.trigger(HookType.POST_INIT, context)

    def get_dispatcher(self) -> ArgumentDispatcher:
        return ArgumentDispatcher(
            self.commands, self.global_parameters, self.default_command
        )

    async def _activate_globals(self, context: RunContext) -> None:
        for parameter in context.parameters:
            context.current_global_param = parameter
            try:
                result = await parameter.activate()
            finally:
                context.current_global_param = None
            if parameter.standalone:
                context.results.append(result)

    async def _run_command(
        self, command: Command, implicit: bool, context: RunContext
    ) -> None:
        standalone = [param for param in context.parameters if param.standalone]
        if implicit and standalone:
            if context.arguments:
                last = standalone[-1]
                _, maximum = last.bounds if isinstance(last, Option) else (0, 0)
                maximum = maximum or 0
                raise ArityError(last.name, maximum, maximum + len(context.arguments))
            logger.debug(
                "[%s] Skipping default command '%s' after standalone actions.",
                self.name,
                command.name,
            )
            return
        result = await command.run(*context.arguments, context=context)
        context.results.append(result)

    async def run(self, args: Sequence[Any] | None = None) -> list[Any]:
        """
        Run the application against `args` (defaults to `sys.argv[1:]`).

        Returns:
            list: Results of the standalone actions that fired, followed by the
            command's result.

        Raises:
            ArgotError: Any dispatch or execution error when `raise_errors` is set.
            SystemExit: With status 1 after printing the error otherwise.
        """
        tokens = list(sys.argv[1:] if args is None else args)
        context = RunContext(name=self.name, args=tokens)
        self.context = context
        context.start_timer()
        try:
            await self._init(context)
            self._apply_aliases()
            plan = self.get_dispatcher().parse(tokens)
            context.command = plan.command
            context.parameters = plan.parameters
            context.arguments = plan.arguments

            await self._activate_globals(context)
            await self.hooks.trigger(HookType.PRE_EXECUTE, context)
            await self._run_command(plan.command, plan.implicit, context)
            await self.hooks.trigger(HookType.POST_EXECUTE, context)
            return list(context.results)
        except Exception as error:
            context.exception = error
            try:
                await self.hooks.trigger(HookType.ON_ERROR, context)
            except Exception as hook_error:
                if self.settings.raise_errors:
                    raise
                logger.debug("[%s] on_error hook failed: %s", self.name, hook_error)
            if self.settings.raise_errors:
                raise
            self._render_error(error, context)
            sys.exit(1)
        finally:
            context.stop_timer()
            self.reset()
            self.context = None
            self.last_context = context
            await self.hooks.trigger(HookType.ON_TEARDOWN, context)

    def main(self, argv: Sequence[Any] | None = None) -> list[Any]:
        """Synchronous entry point: `if __name__ == "__main__": app.main()`."""
        return asyncio.run(self.run(argv))

    def reset(self) -> None:
        """Reset every registered command and global parameter."""
        units = {
            id(unit): unit
            for unit in [*self.commands.values(), *self.global_parameters.values()]
        }
        for unit in units.values():
            unit.reset()

    def _render_error(self, error: Exception, context: RunContext) -> None:
        console = self.console
        console.print(f"[error]Error:[/]\n    {escape(str(error))}")
        if context.debug:
            console.print_exception()

    def _global_parameters_text(self) -> str:
        unique = {id(param): param for param in self.global_parameters.values()}
        text = ""
        for param in sorted(unique.values(), key=lambda param: param.name):
            if param.hidden:
                continue
            suffix = " ..." if isinstance(param, Option) else ""
            text += f" [{param.usage_text()}{suffix}]"
        return text

    async def _render_help(self) -> None:
        console = self.console
        banner = self.settings.help_banner or f"Usage: {get_program_invocation()}"
        default = (
            self.commands.get(self.default_command) if self.default_command else None
        )
        command_text = "[command]" if default else "command"
        console.print(
            f"{banner}{self._global_parameters_text()} {command_text} [args]\n",
            markup=False,
        )
        if default:
            console.print(f"Without command: {default.description}\n", markup=False)

        table = Table.grid(padding=(0, 4))
        table.add_column(style="command", no_wrap=True)
        table.add_column(style="description")
        for name, command in sorted(self.commands.items()):
            if name != command.name or command.hidden:
                continue
            table.add_row(f"  {escape(name)}", escape(command.description))
        console.print("Commands:")
        console.print(table)

    def put(self, text: Any) -> None:
        """Write `text` without a line break."""
        self.ostream.write(str(text))
        self.ostream.flush()

    def puts(self, text: Any = "") -> None:
        """Write `text` followed by a line break."""
        self.ostream.write(f"{text}\n")
        self.ostream.flush()

    def putc(self, char: str | int) -> None:
        """Write a single character, given as a string or a code point."""
        self.put(chr(char) if isinstance(char, int) else str(char)[:1])

    async def input(self, prompt: str = "") -> str:
        """Write `<prompt>: ` and return one line from the input stream."""
        message = f"{prompt}: " if prompt else ""
        return await prompt_line(message, self.istream, self.ostream)

    async def confirm(self, message: str = "Are you sure?") -> bool:
        return await confirm_async(message, self.istream, self.ostream)

    async def throbber(self, work: Callable[..., Any] | Any, *args, **kwargs) -> Any:
        """Run `work` while a throbber spins on the output stream."""
        return await Throbber(self.ostream).run(work, *args, **kwargs)

    @contextmanager
    def progress_bar(
        self, maximum: int = 100, size: int = 20, char: str = "#", start: int = 0
    ) -> Iterator[ProgressBar]:
        """Yield a `ProgressBar` drawing on the output stream."""
        yield ProgressBar(
            self.ostream, maximum=maximum, size=size, char=char, start=start
        )

    @contextmanager
    def hidden_output(self) -> Iterator[TextIO]:
        """
        Hold back everything written to the output stream until the block ends.

        Yields the real stream for output that must not wait.
        """
        real = self.settings.ostream
        buffer = StringIO()
        self.settings.ostream = buffer
        try:
            yield real
        finally:
            self.settings.ostream = real
            real.write(buffer.getvalue())
            real.flush()

    def __str__(self) -> str:
        names = sorted({command.name for command in self.commands.values()})
        return f"Argot(name='{self.name}', commands={names})"


__all__ = ["Argot", "DEFAULT_COMMAND"]
