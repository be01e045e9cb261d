"""Cancellable asynchronous calls.

Every network operation of the client returns a ``CancellableCall``. The call
wraps an ``asyncio.Task`` running the request pipeline and a
``CancellationToken`` that the pipeline checks between its steps (before the
request, after decoding, before building entities).

Once ``cancel()`` has been called, neither the success nor the failure
callback of that call will run, and awaiting it raises
``asyncio.CancelledError``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """Flag shared between a call handle and the pipeline it drives."""

    def __init__(self) -> None:
        """Initialize an uncancelled token."""
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    def raise_if_cancelled(self) -> None:
        """Abort the current pipeline step if cancellation was requested.

        Raises:
            asyncio.CancelledError: If the token is cancelled.
        """
        if self._cancelled:
            raise asyncio.CancelledError("Mobilitybox request was cancelled")


class CancellableCall(Generic[T]):
    """Handle for an in-flight API request.

    The request starts as soon as the handle is created, so it must be created
    inside a running event loop. Await the handle to get the result, or
    register callbacks with ``then``.
    """

    def __init__(self, operation: Callable[[CancellationToken], Awaitable[T]]) -> None:
        """Start the operation.

        Args:
            operation: Coroutine function performing the request; receives the
                token it must check between steps.

        Raises:
            RuntimeError: If no event loop is running.
        """
        loop = asyncio.get_running_loop()
        self._token = CancellationToken()
        self._task: asyncio.Future[T] = loop.create_task(_run(operation, self._token))
        self._has_failure_handler = False

    @property
    def cancelled(self) -> bool:
        """Whether the call was cancelled while still pending."""
        return self._token.cancelled

    def done(self) -> bool:
        """Whether the call has finished, failed or been cancelled."""
        return self._task.done()

    def cancel(self) -> bool:
        """Cancel the call.

        A call that has already finished is left untouched.

        Returns:
            True if the call was still pending, False if it had already finished.
        """
        if self._task.done():
            return False
        self._token.cancel()
        self._task.cancel()
        return True

    def then(
        self,
        on_success: Callable[[T], Any],
        on_failure: Callable[[BaseException], Any] | None = None,
    ) -> CancellableCall[T]:
        """Register callbacks run when the call completes.

        Neither callback runs if the call is cancelled.

        Args:
            on_success: Called with the result.
            on_failure: Called with the exception if the call fails.

        Returns:
            This call, for chaining.
        """
        if on_failure is not None:
            self._has_failure_handler = True

        def _dispatch(task: asyncio.Future[T]) -> None:
            if self._token.cancelled or task.cancelled():
                return
            error = task.exception()
            if error is None:
                on_success(task.result())
            elif on_failure is not None:
                on_failure(error)
            elif not self._has_failure_handler:
                logger.warning(f"Mobilitybox request failed without a failure callback: {error}")

        self._task.add_done_callback(_dispatch)
        return self

    def __await__(self) -> Generator[Any, None, T]:
        return self._task.__await__()


async def _run(operation: Callable[[CancellationToken], Awaitable[T]], token: CancellationToken) -> T:
    token.raise_if_cancelled()
    result = await operation(token)
    token.raise_if_cancelled()
    return result
