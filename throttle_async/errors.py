"""Exceptions raised by throttled entry points."""

from __future__ import annotations

CANCELED = "canceled"


class ThrottleError(Exception):
    """Base class for errors raised by throttle_async."""


class Superseded(ThrottleError):
    """A later call in the same window claimed the trailing invocation.

    The call that receives this never reached the wrapped operation.
    ``value`` holds the configured cancel value.
    """

    def __init__(self, value: object = CANCELED) -> None:
        super().__init__(value)
        self.value = value

    def __repr__(self) -> str:
        return f"Superseded({self.value!r})"


def rejection(cancel_obj: object) -> BaseException:
    """Build the exception delivered to a superseded caller."""
    match cancel_obj:
        case BaseException():
            return cancel_obj
        case type() if issubclass(cancel_obj, BaseException):
            return cancel_obj()
        case _:
            return Superseded(cancel_obj)
