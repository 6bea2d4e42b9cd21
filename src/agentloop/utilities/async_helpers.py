import asyncio
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def synchronize(afunc: Callable[..., Coroutine[Any, Any, T]], *args, **kwargs) -> T:
    """Run async function in synchronous context.

    Raises
    ------
    RuntimeError
        If called while an event loop is already running in this thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(afunc(*args, **kwargs))
    raise RuntimeError(f"Cannot synchronize {afunc.__name__} inside a running event loop; await it instead.")
