"""Shared thread pool for the blocking device clients."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Optional

# Default thread pool for blocking operations
_DEFAULT_EXECUTOR: Optional[ThreadPoolExecutor] = None


def get_executor() -> ThreadPoolExecutor:
    """Get or create the default thread pool executor."""
    global _DEFAULT_EXECUTOR
    if _DEFAULT_EXECUTOR is None:
        _DEFAULT_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix="samsung_cast_tv")
    return _DEFAULT_EXECUTOR


async def run_blocking(
    func: Callable,
    *args,
    executor: Optional[ThreadPoolExecutor] = None,
    **kwargs,
) -> Any:
    """Run a sync function in the executor.

    Args:
        func: Sync function to run
        *args: Positional arguments
        executor: Custom executor (uses default if None)
        **kwargs: Keyword arguments

    Returns:
        Function result
    """
    loop = asyncio.get_running_loop()
    if kwargs:
        func = partial(func, **kwargs)
    return await loop.run_in_executor(executor or get_executor(), func, *args)
