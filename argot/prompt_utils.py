# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Utilities for reading user input in Argot applications.

Both helpers talk to the application's configured streams. When the input
stream is an interactive terminal they use a prompt_toolkit session (history,
line editing, validation while typing); otherwise they write the prompt to the
output stream and read one line from the input stream, which keeps them
usable with pipes, files and in-memory streams.

Includes:
- `prompt_line()` for free-form input.
- `confirm_async()` for yes/no confirmation.
"""
import sys
from typing import TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError, Validator

from argot.logger import logger
from argot.validators import yes_no_validator


def is_interactive(istream: TextIO) -> bool:
    """Whether `istream` is the process's terminal."""
    if istream is not sys.stdin:
        return False
    try:
        return istream.isatty()
    except (AttributeError, ValueError):
        return False


def _read_line(istream: TextIO) -> str:
    line = istream.readline()
    if not line:
        raise EOFError("No more input available.")
    return line.rstrip("\r\n")


async def prompt_line(
    message: str,
    istream: TextIO,
    ostream: TextIO,
    validator: Validator | None = None,
    session: PromptSession | None = None,
) -> str:
    """
    Show `message` and return one line of input without its line break.

    Non-interactive input that fails `validator` is asked for again.

    Raises:
        EOFError: When the input stream is exhausted.
    """
    if is_interactive(istream):
        session = session or PromptSession()
        return await session.prompt_async(message, validator=validator)

    while True:
        ostream.write(message)
        ostream.flush()
        answer = _read_line(istream)
        if validator is None:
            return answer
        try:
            validator.validate(Document(answer))
            return answer
        except ValidationError as error:
            logger.debug("Rejected input %r: %s", answer, error.message)
            ostream.write(f"{error.message}\n")


async def confirm_async(
    message: str,
    istream: TextIO,
    ostream: TextIO,
    session: PromptSession | None = None,
) -> bool:
    """Prompt the user with a yes/no confirmation and return True for 'Y'."""
    answer = await prompt_line(
        f"{message} [Y/n] ",
        istream,
        ostream,
        validator=yes_no_validator(),
        session=session,
    )
    return answer.upper() == "Y"
