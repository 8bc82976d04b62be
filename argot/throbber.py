# Argot CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
A terminal throbber shown while a piece of work runs.

The work runs as a worker (an asyncio task for coroutines, a thread for
blocking callables) and a separate ticking task polls the worker every
`interval` seconds, overwriting the previous frame with a backspace. As soon as
the ticker sees the worker finished it erases the last frame and stops, so the
animation ends within one interval of the work completing.

The ticker and the worker share nothing but the worker's done state and the
output stream, which only the ticker writes to.

Example:
    ```python
    >>> throbber = Throbber(sys.stdout)
    >>> await throbber.run(time.sleep, 2)
    ```
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, TextIO

from rich.spinner import Spinner

from argot.logger import logger
from argot.utils import is_coroutine


class Throbber:
    """
    Animates a one-character spinner on `ostream` while a worker is alive.

    Attributes:
        ostream (TextIO): Stream the frames are written to.
        interval (float): Seconds between liveness polls and frames.
        frames (list[str]): Frames of the rich spinner preset, `- \\ | /` by default.
        ticks (int): Number of frames written by the last run.
    """

    def __init__(
        self, ostream: TextIO, interval: float = 0.25, spinner_type: str = "line"
    ) -> None:
        self.ostream = ostream
        self.interval = interval
        self.frames: list[str] = list(Spinner(spinner_type).frames)
        self.ticks = 0

    async def watch(self, worker: asyncio.Future) -> None:
        """Write frames until `worker` is done, then erase the last one."""
        step = 0
        self.ticks = 0
        self.ostream.write(" ")
        while not worker.done():
            self.ostream.write(f"\b{self.frames[step]}")
            self.ostream.flush()
            self.ticks += 1
            step = (step + 1) % len(self.frames)
            await asyncio.sleep(self.interval)
        self.ostream.write("\b")
        self.ostream.flush()

    def _start_worker(
        self, work: Callable[..., Any] | Any, *args, **kwargs
    ) -> asyncio.Future:
        if inspect.isawaitable(work):
            return asyncio.ensure_future(work)
        if is_coroutine(work):
            return asyncio.ensure_future(work(*args, **kwargs))
        if callable(work):
            return asyncio.ensure_future(asyncio.to_thread(work, *args, **kwargs))
        raise TypeError(f"{work!r} is neither callable nor awaitable")

    async def run(self, work: Callable[..., Any] | Any, *args, **kwargs) -> Any:
        """Run `work` under the throbber and return its result."""
        worker = self._start_worker(work, *args, **kwargs)
        ticker = asyncio.create_task(self.watch(worker))
        try:
            return await worker
        finally:
            await ticker
            logger.debug("Throbber stopped after %d frame(s).", self.ticks)
