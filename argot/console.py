# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Console construction for Argot CLI applications."""
import sys
from typing import TextIO

from rich.console import Console

from argot.themes import get_theme

console = Console(theme=get_theme(), highlight=False)


def get_console(file: TextIO | None = None) -> Console:
    """
    Return a rich console writing to `file`.

    The shared module console is returned for the process stdout so terminal
    detection and width only happen once; any other stream gets its own console.
    """
    if file is None or file is sys.stdout:
        return console
    return Console(file=file, theme=get_theme(), highlight=False, soft_wrap=True)
