"""
Hook pipeline: named, ordered chains of callbacks run one at a time.

A callback may be a coroutine function or a plain function; awaitable
results are awaited before the next callback starts. A callback vetoes the
rest of the chain by raising, and the exception reaches the emitter
unchanged.

Callbacks written in continuation style, ``fn(*args, next_)``, are adapted
with ``continuation(fn)``.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .exceptions import HookContinuationError, HookError
from .utils.logging import log_event

# Lifecycle events emitted by Factory.create
PRE_BUILD = "pre:build"
PRE_SAVE = "pre:save"
POST_SAVE = "post:save"

HookCallback = Callable[..., Any]
Continuation = Callable[..., None]


class HookTable:
    """Mapping of event key to the ordered callbacks registered for it."""

    def __init__(self):
        self._chains: Dict[str, List[HookCallback]] = {}

    def add(self, key: str, callback: HookCallback) -> None:
        """Append ``callback`` to the chain for ``key``."""
        if not callable(callback):
            raise TypeError(f"Hook callback for '{key}' must be callable")
        self._chains.setdefault(key, []).append(callback)

    def callbacks(self, key: str) -> List[HookCallback]:
        """Return a copy of the chain for ``key``."""
        return list(self._chains.get(key, ()))

    def events(self) -> List[str]:
        """Event keys in first-registration order."""
        return list(self._chains)

    def items(self) -> Iterator[Tuple[str, List[HookCallback]]]:
        for key in self.events():
            yield key, self.callbacks(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self._chains.get(key))

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._chains.values())

    async def emit(self, key: str, *args: Any) -> None:
        """
        Run the chain for ``key`` with ``args``.

        The chain is snapshotted first, so callbacks registered while it runs
        take effect on the next emit.

        Raises:
            Whatever a callback raises; remaining callbacks are skipped.
        """
        for position, callback in enumerate(self.callbacks(key)):
            try:
                result = callback(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                log_event(
                    "hook_chain_failed",
                    {
                        "event_key": key,
                        "position": position,
                        "callback": getattr(callback, "__qualname__", repr(callback)),
                        "error_type": type(e).__name__,
                        "error_message": str(e),
                    },
                    level=logging.DEBUG,
                )
                raise


def continuation(fn: Callable[..., Any]) -> HookCallback:
    """
    Adapt a continuation-style callback into an awaitable hook.

    ``fn`` receives the event arguments followed by ``next_``. Calling
    ``next_()`` lets the chain continue; ``next_(error)`` aborts it with
    ``error``. Until ``next_`` is called the chain waits.
    """

    @functools.wraps(fn)
    async def stage(*args: Any) -> None:
        done: asyncio.Future = asyncio.get_running_loop().create_future()

        def next_(error: Optional[Any] = None) -> None:
            if done.done():
                raise HookContinuationError(
                    f"Continuation of {getattr(fn, '__qualname__', fn)!r} "
                    "called more than once"
                )
            if error is None:
                done.set_result(None)
            elif isinstance(error, BaseException):
                done.set_exception(error)
            else:
                done.set_exception(HookError(str(error), error=error))

        result = fn(*args, next_)
        if inspect.isawaitable(result):
            await result
        await done

    return stage


def legacy_post_save(fn: Callable[[Continuation], Any]) -> HookCallback:
    """
    Adapt an old-style ``after`` callback, ``fn(next_)``, to ``post:save``.

    The saved instance is dropped from the arguments, so ``fn`` never sees it.
    """

    @functools.wraps(fn)
    def discard_instance(instance: Any, next_: Continuation) -> Any:
        return fn(next_)

    return continuation(discard_instance)
