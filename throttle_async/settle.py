"""Collect the outcomes of a batch of throttled calls, keeping positions."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable

from throttle_async.errors import Superseded


async def settle[T](outcomes: Iterable[Awaitable[T] | None]) -> list[T | object | None]:
    """Wait for every outcome and return them in input order.

    Fulfilled outcomes yield their value, superseded ones the cancel value,
    and any other failure the exception instance itself. ``None`` slots stay
    ``None``, so sparse batches keep their shape.

    Example:
        >>> calls = [save(x) if x is not None else None for x in [1, 2, None]]
        >>> await settle(calls)
        [1, 2, None]
    """
    slots = list(outcomes)
    pending = [asyncio.ensure_future(o) for o in slots if o is not None]
    results = iter(await asyncio.gather(*pending, return_exceptions=True))

    settled: list[T | object | None] = []
    for slot in slots:
        if slot is None:
            settled.append(None)
            continue
        match next(results):
            case Superseded(value=value):
                settled.append(value)
            case result:
                settled.append(result)
    return settled
