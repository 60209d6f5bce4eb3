"""Helpers for handing results back as concurrent.futures.Future."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable


def completed_future(value: Any) -> Future:
    fut: Future = Future()
    fut.set_result(value)
    return fut


def failed_future(exc: BaseException) -> Future:
    """Return a future that already failed with `exc`, so the caller sees it on .result()."""
    fut: Future = Future()
    fut.set_exception(exc)
    return fut


def chain(source: Future, fn: Callable[[Any], Any]) -> Future:
    """
    Return a future resolving to fn(source.result()).

    Failures of `source`, and anything `fn` raises, fail the returned future.
    Cancelling `source` cancels the returned future.
    """
    out: Future = Future()

    def _done(f: Future) -> None:
        if f.cancelled():
            out.cancel()
            out.set_running_or_notify_cancel()
            return
        exc = f.exception()
        if exc is not None:
            out.set_exception(exc)
            return
        try:
            out.set_result(fn(f.result()))
        except Exception as e:
            out.set_exception(e)

    source.add_done_callback(_done)
    return out
