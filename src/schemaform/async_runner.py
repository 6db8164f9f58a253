"""Run the async I/O boundaries (schema load, submission) from sync callers."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from schemaform.exceptions import AsyncExecutionError

if TYPE_CHECKING:
    from collections.abc import Coroutine


def _run_on_worker_loop[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine on a fresh event loop owned by a worker thread.

    Raises:
        AsyncExecutionError: If the coroutine raises.
    """
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="schemaform-io") as executor:
        future = executor.submit(asyncio.run, coro)
        try:
            return future.result()
        except Exception as exc:
            raise AsyncExecutionError(result=exc) from exc


def run_async[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from both sync and async contexts.

    Without a running loop the coroutine runs on a new loop in the calling
    thread and its exceptions propagate unchanged. Inside a running loop it is
    handed to a worker thread, and failures surface as `AsyncExecutionError`.

    Args:
        coro: The coroutine to run.

    Returns:
        The result of the coroutine.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    return _run_on_worker_loop(coro)
