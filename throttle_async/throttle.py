"""Throttle decorator that coalesces bursts of async calls.

Each entry point owns one window. The first call of a window invokes the
wrapped operation immediately (leading edge, unless disabled). Calls that
arrive while the window is open each schedule a trailing evaluation; only
the most recent one invokes the operation once the wait has elapsed from
the window start, and every earlier one is rejected with the cancel value.
Every call gets its own future.

Example:
    from throttle_async import Superseded, throttle

    @throttle(0.1)
    async def save(doc: dict) -> str:
        return await store.put(doc)

    first = save({"v": 1})   # invoked now
    second = save({"v": 2})  # superseded by the third call
    third = save({"v": 3})   # invoked 100ms after the first

    await first              # result of save({"v": 1})
    await third              # result of save({"v": 3})
    try:
        await second
    except Superseded as e:
        assert e.value == "canceled"

    # Trailing edge only
    @throttle(0.1, leading=False)
    async def refresh() -> None: ...

    # Wait computed at every scheduling decision
    @throttle(wait=lambda: limiter.interval)
    async def poll() -> None: ...
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
import itertools
import types
from collections.abc import Awaitable, Callable
from typing import Any, overload

from loguru import logger

from throttle_async.errors import CANCELED, rejection
from throttle_async.options import Computed, Fixed, ThrottleOptions, Wait, duration
from throttle_async.window import Window


class Throttled[**P, T]:
    """Rate-limited entry point for an async operation.

    Calling it returns an ``asyncio.Future`` that resolves with the wrapped
    operation's result, raises the operation's exception, or is rejected
    because a later call superseded it. Accessed through an instance, it
    binds that instance as the first argument; all instances share the one
    window.
    """

    def __init__(
        self,
        operation: Callable[P, Awaitable[T]],
        wait: Wait = 0,
        options: ThrottleOptions | None = None,
    ) -> None:
        functools.update_wrapper(self, operation)
        self._operation = operation
        self._wait = duration(wait)
        self._options = options or ThrottleOptions()
        self._window = Window()
        self._tickets = itertools.count(1)
        self._log = logger.bind(
            component="throttle",
            name=getattr(operation, "__qualname__", repr(operation)),
        )

    @property
    def options(self) -> ThrottleOptions:
        return self._options

    @property
    def wait(self) -> float:
        """Current wait in seconds (evaluated now for dynamic waits)."""
        return self._wait()

    @property
    def window(self) -> Window:
        return self._window

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> asyncio.Future[T]:
        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[T] = loop.create_future()
        ticket = next(self._tickets)
        window = self._window
        now = loop.time()

        if not window.is_open and self._options.leading:
            window.open(ticket, now)
            self._log.debug(f"Window opened by call #{ticket}, invoking on leading edge")
            self._invoke(outcome, args, kwargs)
            return outcome

        # Window state is only touched once the delay is known
        try:
            wait = self._wait()
        except Exception as e:
            self._log.debug(f"Call #{ticket} failed to compute its wait: {e!r}")
            outcome.set_exception(e)
            return outcome

        if not window.is_open:
            window.open(ticket, now)
            self._log.debug(f"Window opened by call #{ticket}, trailing in {wait:.3f}s")
            window.timer = self._schedule(loop, wait, ticket, outcome, args, kwargs)
            return outcome

        previous = window.ticket
        delay = max(wait - window.elapsed(now), 0.0)
        window.claim(ticket)
        self._log.trace(f"Call #{ticket} supersedes #{previous}, trailing in {delay:.3f}s")
        window.timer = self._schedule(loop, delay, ticket, outcome, args, kwargs)
        return outcome

    def _schedule(
        self,
        loop: asyncio.AbstractEventLoop,
        delay: float,
        ticket: int,
        outcome: asyncio.Future[T],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> asyncio.TimerHandle:
        return loop.call_later(
            delay,
            self._evaluate,
            ticket,
            outcome,
            args,
            kwargs,
            context=contextvars.copy_context(),
        )

    def _evaluate(
        self,
        ticket: int,
        outcome: asyncio.Future[T],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        if self._window.is_stale(ticket):
            self._log.trace(f"Call #{ticket} was superseded, rejecting")
            if not outcome.done():
                outcome.set_exception(rejection(self._options.cancel_obj))
            return

        self._log.debug(f"Invoking on trailing edge with call #{ticket}")
        self._invoke(outcome, args, kwargs)
        self._window.close()
        self._log.debug("Window closed")

    def _invoke(
        self,
        outcome: asyncio.Future[T],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        try:
            task = asyncio.ensure_future(self._operation(*args, **kwargs))
        except Exception as e:
            self._log.debug(f"Operation failed before returning an awaitable: {e!r}")
            if not outcome.done():
                outcome.set_exception(e)
            return
        task.add_done_callback(functools.partial(self._deliver, outcome))

    def _deliver(self, outcome: asyncio.Future[T], task: asyncio.Future[T]) -> None:
        if outcome.done():
            if not task.cancelled() and task.exception() is not None:
                self._log.debug(f"Dropping failure of abandoned call: {task.exception()!r}")
            return
        if task.cancelled():
            outcome.cancel()
        elif (exc := task.exception()) is not None:
            outcome.set_exception(exc)
        else:
            outcome.set_result(task.result())

    def __repr__(self) -> str:
        return f"Throttled({self._operation!r}, wait={self._wait!r}, options={self._options!r})"


@overload
def throttle[**P, T](
    operation: Callable[P, Awaitable[T]],
    wait: Wait = 0,
    *,
    leading: bool = True,
    cancel_obj: object = CANCELED,
) -> Throttled[P, T]: ...


@overload
def throttle[**P, T](
    operation: None = None,
    wait: Wait = 0,
    *,
    leading: bool = True,
    cancel_obj: object = CANCELED,
) -> Callable[[Callable[P, Awaitable[T]]], Throttled[P, T]]: ...


def throttle(
    operation: Any = None,
    wait: Wait = 0,
    *,
    leading: bool = True,
    cancel_obj: object = CANCELED,
) -> Any:
    """Throttle an async operation.

    Args:
        operation: Async callable to wrap. Omit to use as a decorator
                   factory, e.g. ``@throttle(0.5)``.
        wait: Minimum seconds between effective invocations, or a
              zero-argument callable returning them. A callable wait
              must be passed by keyword, ``@throttle(wait=fn)``; a
              positional callable is taken as the operation.
        leading: Invoke immediately when a window opens.
        cancel_obj: Value delivered to superseded callers.

    Returns:
        A ``Throttled`` entry point, or a decorator producing one.
    """
    options = ThrottleOptions(leading=leading, cancel_obj=cancel_obj)

    # @throttle(0.5) passes the wait positionally
    if isinstance(operation, int | float | Fixed | Computed):
        wait, operation = operation, None

    if operation is None:
        return lambda fn: Throttled(fn, wait, options)

    return Throttled(operation, wait, options)
