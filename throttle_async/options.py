"""Controller configuration: edge options and wait duration providers.

A wait is either a fixed number of seconds or a zero-argument callable.
Callables are evaluated at every scheduling decision, so the spacing can
change between windows or between calls inside one window.

Example:
    from throttle_async import Throttled, ThrottleOptions

    Throttled(save, 0.5, ThrottleOptions(leading=False))
    Throttled(save, lambda: backoff.current, ThrottleOptions())
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from throttle_async.errors import CANCELED


@dataclass(frozen=True, slots=True)
class ThrottleOptions:
    """Edge and rejection behaviour of a throttled entry point.

    Attributes:
        leading: Invoke immediately when a window opens. Defaults to True.
        cancel_obj: Value delivered to superseded callers. An exception
            instance or class is raised as-is; anything else is wrapped in
            ``Superseded``. Defaults to ``CANCELED``.
    """

    leading: bool = True
    cancel_obj: object = CANCELED


@dataclass(frozen=True, slots=True)
class Fixed:
    seconds: float

    def __call__(self) -> float:
        return self.seconds


@dataclass(frozen=True, slots=True)
class Computed:
    fn: Callable[[], float]

    def __call__(self) -> float:
        return float(self.fn())


type DurationProvider = Fixed | Computed
type Wait = float | int | Callable[[], float] | DurationProvider


def duration(wait: Wait) -> DurationProvider:
    """Normalize a wait specification into a duration provider.

    Raises:
        TypeError: If wait is neither a number nor callable.
    """
    match wait:
        case Fixed() | Computed():
            return wait
        case bool():
            raise TypeError(f"wait must be seconds or a callable, got {wait!r}")
        case int() | float():
            return Fixed(float(wait))
        case _ if callable(wait):
            return Computed(wait)
        case _:
            raise TypeError(f"wait must be seconds or a callable, got {wait!r}")
