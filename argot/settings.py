# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Definition-time settings of an Argot application.

`Settings` collects everything that can be configured on an application before
it runs: its name, the streams it talks to and how it behaves on errors and
when no command is given. Assignments are validated, so

    app.settings.raise_errors = "yes"

fails instead of silently storing a string.
"""
import sys
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Settings(BaseModel):
    """
    Attributes:
        name (str): Application name, used in logs and the default help banner.
        istream (TextIO): Stream read by `Argot.input` and `Argot.confirm`.
        ostream (TextIO): Stream written by output helpers, help and errors.
        autorun (bool): Run the application as soon as `python -m argot` loaded it.
        auto_short_aliases (bool): Give parameters a one-letter alias made from
            their first character when that letter is free.
        raise_errors (bool): Re-raise errors to the caller instead of printing
            them and exiting with status 1.
        help_as_default (bool): Make `help` the default command when no default
            command is declared.
        include_help_command (bool): Register the built-in `help` command.
        help_banner (str | None): First line of the help screen.
        command_package (str | None): Package searched for external command
            handlers, `<command_package>.<command name>:run`.
    """

    name: str = "argot"
    istream: Any = Field(default_factory=lambda: sys.stdin)
    ostream: Any = Field(default_factory=lambda: sys.stdout)
    autorun: bool = True
    auto_short_aliases: bool = True
    raise_errors: bool = False
    help_as_default: bool = True
    include_help_command: bool = True
    help_banner: str | None = None
    command_package: str | None = None

    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    @field_validator("istream")
    @classmethod
    def validate_istream(cls, stream: Any) -> Any:
        if not callable(getattr(stream, "readline", None)):
            raise ValueError("istream must provide readline().")
        return stream

    @field_validator("ostream")
    @classmethod
    def validate_ostream(cls, stream: Any) -> Any:
        if not callable(getattr(stream, "write", None)):
            raise ValueError("ostream must provide write().")
        return stream
