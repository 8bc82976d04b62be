# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Argot CLI framework.

These exceptions describe every way a run can fail: selecting a command,
resolving an option token, matching arguments against the declared arity and
types, or wiring a command to its code.

All exceptions inherit from `ArgotError`, the base exception for the framework.

Exception Hierarchy:
- ArgotError
    ├── UnknownCommandError
    ├── NoDefaultCommandError
    ├── UnknownParameterError
    │   └── UnknownOptionError
    ├── ArgumentError
    │   ├── MissingArgumentError
    │   ├── ArityError
    │   └── ArgumentTypeError (also a TypeError)
    ├── BlockMissingError
    ├── CommandAlreadyExistsError
    ├── ParameterAlreadyExistsError
    ├── InvalidHookError
    └── ConfigError

Errors raised while parsing or executing propagate to the top-level boundary of
`Argot.run`, which either re-raises them (`raise_errors`) or renders them and
exits with status 1.
"""


class ArgotError(Exception):
    """Base exception for the Argot framework."""


class UnknownCommandError(ArgotError):
    """Raised when the first token names no registered command."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown command: {name}")


class NoDefaultCommandError(ArgotError):
    """Raised when no command is given and no default command is configured."""

    def __init__(
        self,
        message: str = "You did not specify a command and there is no default command.",
    ):
        super().__init__(message)


class UnknownParameterError(ArgotError):
    """Raised when an option token does not resolve to a known parameter."""

    kind = "parameter"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown {self.kind}: {name}")


class UnknownOptionError(UnknownParameterError):
    """Raised when an option token resolves to no global or command parameter."""

    kind = "option"


class ArgumentError(ArgotError):
    """Base class for argument count and type mismatches."""


class MissingArgumentError(ArgumentError):
    """Raised when fewer arguments are supplied than required."""

    def __init__(self, name: str, expected: int, given: int):
        self.name = name
        self.expected = expected
        self.given = given
        super().__init__(
            f"Parameter '{name}' is missing arguments "
            f"(expected at least {expected}, got {given})."
        )


class ArityError(ArgumentError):
    """Raised when more arguments are supplied than declared."""

    def __init__(self, name: str, maximum: int, given: int):
        self.name = name
        self.maximum = maximum
        self.given = given
        super().__init__(
            f"Parameter '{name}' takes at most {maximum} argument(s), got {given}."
        )


class ArgumentTypeError(ArgumentError, TypeError):
    """Raised when an argument does not satisfy the type of its slot."""


class BlockMissingError(ArgotError):
    """Raised when a command has neither a code block nor an external handler."""

    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        message = f"Command '{name}' has no code block and no external handler."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CommandAlreadyExistsError(ArgotError):
    """Raised when a command with the same name is already registered."""


class ParameterAlreadyExistsError(ArgotError):
    """Raised when a global parameter with the same name is already registered."""


class InvalidHookError(ArgotError):
    """Raised when a hook is not callable."""


class ConfigError(ArgotError):
    """Raised when an application configuration file is invalid."""
