"""
Server-Sent Events framing for streamed API responses.

Chat completion and transcription streams are both sent as

    data: {...json...}\\n\\n
    data: {...json...}\\n\\n
    data: [DONE]\\n\\n

`FrameSplitter` reassembles frames from arbitrarily chunked bytes and
`decode_frame` turns one frame into a typed event.
"""

import logging
from dataclasses import dataclass
from typing import Optional, TypeVar

import orjson
from pydantic import BaseModel, ValidationError

from aiopenai.exceptions import APIError, FramingError, PayloadError, error_from_body

logger = logging.getLogger(__name__)

# Constants
SSE_DATA_FIELD = b"data"
SSE_EVENT_FIELD = b"event"
SSE_DONE_SIGNAL = b"[DONE]"

EventT = TypeVar("EventT", bound=BaseModel)


@dataclass(frozen=True)
class StreamFrame:
    """One dispatched SSE event."""

    data: bytes
    event: Optional[str] = None

    @property
    def is_terminator(self) -> bool:
        return self.data.strip() == SSE_DONE_SIGNAL


class FrameSplitter:
    """Incremental SSE parser. One instance per stream."""

    def __init__(self):
        self._buffer = bytearray()
        self._data_lines: list[bytes] = []
        self._event: Optional[str] = None
        # Raw bytes of the frame being assembled, for error reporting
        self._pending = bytearray()

    def feed(self, chunk: bytes) -> list[StreamFrame]:
        """Add a chunk and return every frame it completes."""
        if not chunk:
            return []
        self._buffer += chunk

        frames = []
        while True:
            newline = self._buffer.find(b"\n")
            if newline < 0:
                break
            line = bytes(self._buffer[:newline])
            del self._buffer[:newline + 1]
            if line.endswith(b"\r"):
                line = line[:-1]

            frame = self._process_line(line)
            if frame is not None:
                frames.append(frame)
        return frames

    def close(self) -> Optional[StreamFrame]:
        """Signal a clean end of the byte stream.

        Returns the terminator frame if the stream ended after `data: [DONE]`
        without the closing blank line. Raises FramingError if any other
        incomplete frame is still buffered.
        """
        leftover = bytes(self._pending)
        line = bytes(self._buffer).rstrip(b"\r")
        if line.strip() and not line.startswith(b":"):
            # Last line arrived without its newline
            leftover += bytes(self._buffer)
            self._process_line(line)

        frame = StreamFrame(data=b"\n".join(self._data_lines), event=self._event)
        self._buffer.clear()
        self._pending.clear()
        self._data_lines = []
        self._event = None
        if frame.is_terminator:
            return frame
        if leftover.strip():
            raise FramingError("Stream ended in the middle of a frame", raw=leftover)
        return None

    def _process_line(self, line: bytes) -> Optional[StreamFrame]:
        if not line:
            return self._dispatch()

        # Comment line, typically a keep-alive
        if line.startswith(b":"):
            return None

        self._pending += line + b"\n"

        field, sep, value = line.partition(b":")
        if sep and value.startswith(b" "):
            value = value[1:]

        if field == SSE_DATA_FIELD:
            self._data_lines.append(value)
        elif field == SSE_EVENT_FIELD:
            self._event = value.decode("utf-8", errors="replace")
        # id/retry and unknown fields are ignored
        return None

    def _dispatch(self) -> Optional[StreamFrame]:
        data = b"\n".join(self._data_lines)
        event = self._event
        self._data_lines = []
        self._event = None
        self._pending.clear()

        # Keep-alive or empty frame
        if not data.strip():
            return None
        return StreamFrame(data=data, event=event)


def decode_frame(frame: StreamFrame, event_model: type[EventT]) -> Optional[EventT]:
    """Decode one frame into `event_model`.

    Returns None for the terminator frame. Raises PayloadError when the payload
    is not JSON or does not fit the model, and APIError when the server sent an
    error object instead of an event.
    """
    if frame.is_terminator:
        return None

    try:
        data = orjson.loads(frame.data)
    except orjson.JSONDecodeError as e:
        logger.debug(f"JSON parse error in stream frame: {e}")
        raise PayloadError(f"Invalid JSON in stream frame: {e}", raw=frame.data) from e

    if isinstance(data, dict) and data.get("error") and "error" not in event_model.model_fields:
        message, error_type, code = error_from_body(data, "Stream reported an error")
        raise APIError(message, type=error_type, code=code, body=data)

    try:
        return event_model.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Unexpected stream frame shape for {event_model.__name__}: {e}")
        raise PayloadError(
            f"Stream frame does not match {event_model.__name__}: {e}", raw=frame.data
        ) from e
