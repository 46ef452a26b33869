"""Eager, non-blocking file reads for the tracer."""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable

ReadFile = Callable[[Path, str], Awaitable[str]]


async def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a text file in a worker thread so the event loop keeps running."""
    return await asyncio.to_thread(path.read_text, encoding=encoding)


def start_read(path: Path, read_file: ReadFile = read_text, encoding: str = "utf-8") -> "asyncio.Task[str]":
    """
    Schedule a read now and return the task to await later.
    
    Reads are often started long before anything awaits them, and some are
    never awaited when an earlier read aborts the trace. A failed task that
    nobody retrieved makes asyncio log "Task exception was never retrieved",
    so the exception is marked retrieved as soon as the task finishes.
    Awaiting the task still raises it.
    """
    task = asyncio.ensure_future(read_file(path, encoding))
    task.add_done_callback(_mark_exception_retrieved)
    return task


def _mark_exception_retrieved(task: "asyncio.Task[str]") -> None:
    if not task.cancelled():
        task.exception()
