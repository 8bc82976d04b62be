# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""debug.py"""
import logging

from argot.context import RunContext
from argot.hook_manager import HookManager, HookType
from argot.logger import logger


def _level(context: RunContext) -> int:
    return logging.INFO if context.verbose else logging.DEBUG


def log_pre_execute(context: RunContext):
    """Log the selected command and the activated global parameters."""
    command = context.command.name if context.command else None
    parameters = ", ".join(param.name for param in context.parameters)
    logger.log(
        _level(context),
        "[%s] Running '%s' with globals [%s] and arguments %r",
        context.name,
        command,
        parameters,
        context.arguments,
    )


def log_post_execute(context: RunContext):
    """Log the results of a successful run."""
    result_str = repr(context.results)
    if len(result_str) > 100:
        result_str = f"{result_str[:100]} ..."
    logger.log(_level(context), "[%s] Success -> Results: %s", context.name, result_str)


def log_error(context: RunContext):
    """Log an error that ended the run."""
    logger.log(
        logging.ERROR if context.verbose else logging.DEBUG,
        "[%s] Error (%s): %s",
        context.name,
        type(context.exception).__name__,
        context.exception,
        exc_info=context.debug,
    )


def log_teardown(context: RunContext):
    """Log a one-line summary of the run, regardless of success or failure."""
    logger.log(_level(context), "%s", context.to_log_line())


def register_debug_hooks(hooks: HookManager):
    hooks.register(HookType.PRE_EXECUTE, log_pre_execute)
    hooks.register(HookType.POST_EXECUTE, log_post_execute)
    hooks.register(HookType.ON_ERROR, log_error)
    hooks.register(HookType.ON_TEARDOWN, log_teardown)
