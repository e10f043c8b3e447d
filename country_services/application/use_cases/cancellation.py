"""
Cooperative cancellation for asynchronous lookups.

An asyncio.Event acts as the cancellation signal. The network exchange runs
as its own task and is raced against the event; whichever finishes first
decides the outcome.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from country_services.domain.exceptions import LookupCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def raise_if_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise LookupCancelledError("Lookup cancelled before the request was sent.")


async def run_cancellable(
    call: Callable[[], Awaitable[T]],
    cancel_event: Optional[asyncio.Event] = None,
) -> T:
    """Await ``call()`` unless *cancel_event* is set first.

    The coroutine is only created once we know the signal is not already set,
    so an early cancellation never sends a request.

    Raises:
        LookupCancelledError: if *cancel_event* is set before ``call()`` completes.
        asyncio.CancelledError: if the awaiting task itself is cancelled.
        Any exception raised by ``call()``.
    """
    if cancel_event is None:
        return await call()
    raise_if_cancelled(cancel_event)

    request = asyncio.ensure_future(call())
    signal = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({request, signal}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        request.cancel()
        raise
    finally:
        signal.cancel()

    if request.done():
        return request.result()

    request.cancel()
    await asyncio.wait({request})
    # retrieve a failure raised while the call unwinds
    failure = None if request.cancelled() else request.exception()
    if failure is not None:
        logger.debug("Request failed while being cancelled: %r", failure)
    raise LookupCancelledError("Lookup cancelled while the request was in flight.")
