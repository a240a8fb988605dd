"""
Typed event streams over Server-Sent Events responses.

An EventStream is single-pass: iterate it once, or close it early with
`aclose()` / `async with`. The underlying HTTP response is released as soon as
iteration stops for any reason.
"""

import logging
from typing import AsyncGenerator, AsyncIterable, Awaitable, Callable, Generic, Optional

import httpx

from aiopenai.exceptions import APITimeoutError, TransportError
from aiopenai.utils.sse import EventT, FrameSplitter, decode_frame

logger = logging.getLogger(__name__)


async def iter_events(
    chunks: AsyncIterable[bytes], event_model: type[EventT]
) -> AsyncGenerator[EventT, None]:
    """
    Decode a chunked SSE byte stream into typed events.

    Args:
        chunks: Raw bytes as delivered by the transport, split anywhere
        event_model: Pydantic model each data frame is validated into

    Yields:
        One event per data frame, in arrival order, until the [DONE] frame or
        a clean end of the byte stream

    Raises:
        FramingError: the byte stream ended inside a frame
        PayloadError: a frame held invalid JSON or an unexpected shape
        APIError: the server sent an error object mid-stream
        TransportError: the connection failed while reading
    """
    splitter = FrameSplitter()
    count = 0
    try:
        async for chunk in chunks:
            for frame in splitter.feed(chunk):
                event = decode_frame(frame, event_model)
                if event is None:
                    logger.debug(f"Stream terminated after {count} events")
                    return
                count += 1
                yield event
    except httpx.TimeoutException as e:
        raise APITimeoutError(f"Stream timed out: {e}") from e
    except httpx.TransportError as e:
        raise TransportError(f"Stream error: {e}") from e

    if splitter.close() is not None:
        logger.debug(f"Stream terminated after {count} events")
        return
    logger.debug(f"Stream closed by server after {count} events")


class EventStream(Generic[EventT]):
    """Async iterator of typed events that owns its HTTP response."""

    def __init__(
        self,
        events: AsyncGenerator[EventT, None],
        close: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self._events = events
        self._close = close
        self._closed = False

    @classmethod
    def from_chunks(
        cls,
        chunks: AsyncIterable[bytes],
        event_model: type[EventT],
        close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> "EventStream[EventT]":
        return cls(iter_events(chunks, event_model), close=close)

    @classmethod
    def from_response(cls, response: httpx.Response, event_model: type[EventT]) -> "EventStream[EventT]":
        return cls.from_chunks(response.aiter_bytes(), event_model, close=response.aclose)

    @classmethod
    def from_events(cls, events: list[EventT]) -> "EventStream[EventT]":
        """Stream over already-decoded events, used for buffered responses."""
        return cls(_replay(events))

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "EventStream[EventT]":
        return self

    async def __anext__(self) -> EventT:
        if self._closed:
            raise StopAsyncIteration
        try:
            return await self._events.__anext__()
        except BaseException:
            # Any exit from the generator releases the response
            await self.aclose()
            raise

    async def aclose(self) -> None:
        """Stop the stream and release the underlying response. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            await self._events.aclose()
        finally:
            if self._close is not None:
                await self._close()

    async def collect(self) -> list[EventT]:
        """Drain the stream into a list."""
        return [event async for event in self]

    async def __aenter__(self) -> "EventStream[EventT]":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


async def _replay(events: list[EventT]) -> AsyncGenerator[EventT, None]:
    for event in events:
        yield event
