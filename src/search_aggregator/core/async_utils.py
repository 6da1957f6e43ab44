"""
Async Utilities for Provider Fan-out.

Python 3.12+ features used:
- asyncio.TaskGroup for structured concurrency (3.11+)
- Type parameter syntax for generic functions

Provides:
- Parallel execution with per-call failure boundaries
- Order-preserving result collection
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


# =============================================================================
# Failure Boundary
# =============================================================================

async def run_isolated[T](
    coro: Awaitable[T],
    fallback: Callable[[], T],
    label: str = "task",
) -> T:
    """
    Await a coroutine, replacing any exception with a fallback value.

    The exception is logged and never propagated.

    Args:
        coro: Coroutine to execute
        fallback: Factory for the value returned on failure
        label: Name used in the log message

    Returns:
        Coroutine result, or fallback() if it raised
    """
    try:
        return await coro
    except Exception as e:
        logger.warning(f"{label} failed, using fallback: {e}")
        return fallback()


# =============================================================================
# Parallel Execution with TaskGroup
# =============================================================================

async def gather_with_errors[T](
    *coros: Awaitable[T],
    return_exceptions: bool = False,
) -> list[T | Exception]:
    """
    Execute coroutines in parallel using TaskGroup.

    Results are returned in argument order, regardless of which
    coroutine finished first.

    Args:
        *coros: Coroutines to execute
        return_exceptions: If True, return exceptions instead of raising

    Returns:
        List of results (or exceptions if return_exceptions=True)

    Example:
        wiki, hn = await gather_with_errors(
            wikipedia.search("python"),
            hackernews.search("python"),
            return_exceptions=True,
        )
    """
    results: list[T | Exception | None] = [None] * len(coros)

    if return_exceptions:
        async def safe_run(coro: Awaitable[T], index: int) -> None:
            try:
                results[index] = await coro
            except Exception as e:
                results[index] = e

        async with asyncio.TaskGroup() as tg:
            for i, coro in enumerate(coros):
                tg.create_task(safe_run(coro, i))
    else:
        # Fail fast on any exception
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
        results = [task.result() for task in tasks]

    return results  # type: ignore[return-value]
