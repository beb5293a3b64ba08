"""Fire-and-forget background tasks.

Side-channel work (alert delivery and similar enrichment) is dispatched as a
detached asyncio task. Its outcome is logged and discarded, so it can neither
fail nor delay the response of the request that started it.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any

import logfire

# Strong references keep running tasks from being garbage collected
_background_tasks: set[asyncio.Task[Any]] = set()


def fire_and_forget(coro: Coroutine[Any, Any, Any], *, name: str) -> asyncio.Task[Any]:
    """Schedule a coroutine without awaiting it.

    Args:
        coro: Coroutine to run
        name: Task name used in logs

    Returns:
        The scheduled task (callers normally ignore it)
    """
    task = asyncio.create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_on_task_done)
    return task


def _on_task_done(task: asyncio.Task[Any]) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        logfire.debug("Background task cancelled", task=task.get_name())
        return

    error = task.exception()
    if error is not None:
        logfire.warn(
            "Background task failed",
            task=task.get_name(),
            error=str(error),
            error_type=type(error).__name__,
        )


def pending_background_tasks() -> int:
    return len(_background_tasks)


async def drain_background_tasks(timeout: float = 5.0) -> None:
    """Wait for outstanding background tasks, cancelling stragglers.

    Called on application shutdown so in-flight deliveries get a chance to
    finish.

    Args:
        timeout: Seconds to wait before cancelling what is left
    """
    if not _background_tasks:
        return

    tasks = list(_background_tasks)
    done, still_running = await asyncio.wait(tasks, timeout=timeout)
    for task in still_running:
        task.cancel()

    logfire.info(
        "Background tasks drained",
        finished=len(done),
        cancelled=len(still_running),
    )
