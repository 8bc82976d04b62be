# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Argot applications.

An application can be declared in a YAML or TOML file instead of Python code:

    name: deploy
    raise_errors: false
    default: status
    global_parameters:
      - name: env
        kind: option
        param_type: [str]
        handler: tasks.settings:select_env
    commands:
      - name: status
        description: Show the deployment status
        handler: tasks.status:run
      - name: push
        description: Push a release
        handler: tasks.push:run
        aliases: [p]
        parameters:
          - name: force
            kind: flag
            handler: tasks.push:force
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from argot.argot import Argot
from argot.exceptions import (
    BlockMissingError,
    ConfigError,
    ParameterAlreadyExistsError,
)
from argot.importer import resolve_action
from argot.logger import logger
from argot.parameter import Flag, Option, Parameter
from argot.settings import Settings

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".toml")


def listify(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def import_handler(path: str | None, owner: str) -> Any:
    if path is None:
        return None
    try:
        return resolve_action(path)
    except (ImportError, ValueError) as error:
        logger.error("Failed to resolve handler '%s' of '%s': %s", path, owner, error)
        raise ConfigError(
            f"Could not resolve handler '{path}' of '{owner}': {error}"
        ) from error


class RawParameter(BaseModel):
    """Raw flag or option entry of an Argot configuration file."""

    name: str
    kind: Literal["flag", "option"] = "flag"
    description: str = ""
    handler: str | None = None
    aliases: list[str] = Field(default_factory=list)
    param_type: list[str] = Field(default_factory=list)
    arity: int | list[int | None] | None = None
    arg_names: list[str] = Field(default_factory=list)
    hidden: bool = False
    standalone: bool = False

    @field_validator("param_type", mode="before")
    @classmethod
    def normalize_param_type(cls, value: Any) -> list[Any]:
        return listify(value)

    def to_parameter(self) -> Parameter:
        action = import_handler(self.handler, self.name)
        try:
            return self._build(action)
        except (ValueError, TypeError) as error:
            raise ConfigError(f"Invalid parameter '{self.name}': {error}") from error

    def _build(self, action: Any) -> Parameter:
        if self.kind == "flag":
            if self.param_type or self.arity or self.arg_names:
                raise ConfigError(f"Flag '{self.name}' cannot take arguments.")
            return Flag(
                name=self.name,
                description=self.description,
                aliases=self.aliases,
                action=action,
                hidden=self.hidden,
                standalone=self.standalone,
            )
        return Option(
            name=self.name,
            description=self.description,
            aliases=self.aliases,
            action=action,
            param_type=self.param_type,
            arity=tuple(self.arity) if isinstance(self.arity, list) else self.arity,
            arg_names=self.arg_names,
            hidden=self.hidden,
            standalone=self.standalone,
        )


class RawCommand(BaseModel):
    """Raw command entry of an Argot configuration file."""

    name: str
    description: str = ""
    handler: str | None = None
    aliases: list[str] = Field(default_factory=list)
    arity: int | list[int | None] | None = None
    param_type: list[str] = Field(default_factory=list)
    arg_names: list[str] = Field(default_factory=list)
    parameters: list[RawParameter] = Field(default_factory=list)
    hidden: bool = False

    @field_validator("param_type", mode="before")
    @classmethod
    def normalize_param_type(cls, value: Any) -> list[Any]:
        return listify(value)


class RawApp(BaseModel):
    """Top level of an Argot configuration file."""

    name: str = "argot"
    autorun: bool = True
    auto_short_aliases: bool = True
    raise_errors: bool = False
    help_as_default: bool = True
    include_help_command: bool = True
    help_banner: str | None = None
    command_package: str | None = None
    default: str | None = None
    commands: list[RawCommand] = Field(default_factory=list)
    global_parameters: list[RawParameter] = Field(default_factory=list)

    def settings(self) -> Settings:
        return Settings(
            **self.model_dump(
                exclude={"default", "commands", "global_parameters"},
            )
        )

    def to_argot(self) -> Argot:
        app = Argot(settings=self.settings())
        for raw_parameter in self.global_parameters:
            try:
                app.add_parameter(raw_parameter.to_parameter())
            except ParameterAlreadyExistsError as error:
                raise ConfigError(str(error)) from error
        for raw_command in self.commands:
            try:
                app.add_command(
                    raw_command.name,
                    description=raw_command.description,
                    aliases=raw_command.aliases,
                    arity=(
                        tuple(raw_command.arity)
                        if isinstance(raw_command.arity, list)
                        else raw_command.arity
                    ),
                    param_type=raw_command.param_type or None,
                    arg_names=raw_command.arg_names,
                    handler=import_handler(raw_command.handler, raw_command.name),
                    parameters=[raw.to_parameter() for raw in raw_command.parameters],
                    hidden=raw_command.hidden,
                )
            except ConfigError:
                raise
            except (BlockMissingError, ValueError, TypeError) as error:
                raise ConfigError(
                    f"Invalid command '{raw_command.name}': {error}"
                ) from error
        if self.default:
            if self.default not in app.commands:
                raise ConfigError(f"Default command '{self.default}' is not defined.")
            app.set_default(self.default)
        return app


def loader(file_path: Path | str) -> Argot:
    """
    Load an Argot application from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the configuration file.

    Returns:
        Argot: The application, ready to run.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed or describes an invalid app.
    """
    if not isinstance(file_path, (str, Path)):
        raise TypeError("file_path must be a string or Path object.")
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    if suffix not in SUPPORTED_SUFFIXES:
        raise ConfigError(f"Unsupported config format: {suffix}")

    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raw_config = yaml.safe_load(config_file)
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse '{path}': {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping.\n"
            "Example:\n"
            "name: 'my-cli'\n"
            "commands:\n"
            "  - name: 'hello'\n"
            "    description: 'Say hello'\n"
            "    handler: 'my_module:hello'"
        )

    try:
        raw_app = RawApp(**raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in '{path}':\n{error}") from error
    logger.debug("Loaded configuration for '%s' from %s", raw_app.name, path)
    return raw_app.to_argot()
