"""Concurrent fan-out with first-failure-wins semantics."""

import asyncio
from collections.abc import Coroutine, Iterable
from typing import Any, TypeVar

T = TypeVar("T")


async def gather_ordered(coros: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """
    Run coroutines concurrently and return their results in input order.

    The first exception raised by any branch cancels the branches still
    running and is re-raised as-is (not wrapped in an ExceptionGroup). Work
    the cancelled branches already finished is not undone.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except ExceptionGroup as eg:
        # Failures are collected in completion order
        raise eg.exceptions[0]

    return [task.result() for task in tasks]
