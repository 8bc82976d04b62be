# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""A plain character progress bar written to an output stream."""
from __future__ import annotations

from typing import TextIO


class ProgressBar:
    """
    Draws `size` cells of `char` as progress moves from 0 to `maximum`.

    Only newly filled cells are written, so the bar can share a line with text
    printed before it. A newline is written once the maximum is reached.

    Example:
        >>> bar = ProgressBar(sys.stdout, maximum=1000, size=30, char="+")
        >>> for _ in range(1000):
        ...     bar += 1
    """

    def __init__(
        self,
        ostream: TextIO,
        maximum: int = 100,
        size: int = 20,
        char: str = "#",
        start: int = 0,
    ) -> None:
        if maximum <= 0:
            raise ValueError("maximum must be positive")
        if size <= 0:
            raise ValueError("size must be positive")
        if len(char) != 1:
            raise ValueError("char must be a single character")
        self.ostream = ostream
        self.maximum = maximum
        self.size = size
        self.char = char
        self.progress = 0
        self.filled = 0
        self.finished = False
        if start:
            self.increment(start)

    def increment(self, value: int = 1) -> ProgressBar:
        self.progress = min(self.progress + value, self.maximum)
        filled = self.progress * self.size // self.maximum
        if filled > self.filled:
            self.ostream.write(self.char * (filled - self.filled))
            self.ostream.flush()
            self.filled = filled
        if self.progress >= self.maximum and not self.finished:
            self.finished = True
            self.ostream.write("\n")
            self.ostream.flush()
        return self

    def __iadd__(self, value: int) -> ProgressBar:
        return self.increment(value)
