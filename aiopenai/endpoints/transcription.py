import logging
import mimetypes
from typing import Union

import httpx

from aiopenai.api import API, parse_response
from aiopenai.endpoints.base import enum_value
from aiopenai.models.enums import TranscriptionModel, TranscriptionResponseFormat
from aiopenai.models.response import TranscriptionEvent
from aiopenai.streaming import EventStream

logger = logging.getLogger(__name__)

SSE_CONTENT_TYPE = "text/event-stream"

# Response formats the streaming transcription models can stream
STREAMABLE_FORMATS = (TranscriptionResponseFormat.JSON.value, TranscriptionResponseFormat.TEXT.value)
JSON_FORMATS = (TranscriptionResponseFormat.JSON.value, TranscriptionResponseFormat.VERBOSE_JSON.value)


def supports_streaming(model: str) -> bool:
    try:
        return TranscriptionModel(model).supports_streaming
    except ValueError:
        # Unknown model ids follow the naming of the streaming models
        return model.endswith("-transcribe")


class CreateTranscriptionRequest:
    path = "/audio/transcriptions"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, TranscriptionModel],
        file: bytes,
        file_name: str,
        language: str = "",
        prompt: str = "",
        response_format: Union[str, TranscriptionResponseFormat] = TranscriptionResponseFormat.JSON,
        temperature: float = 0.0,
    ) -> EventStream[TranscriptionEvent]:
        """Transcribe an audio file.

        Streaming models produce delta events followed by a done event; other
        models produce a single done event holding the whole transcription.
        """
        model = enum_value(model)
        response_format = enum_value(response_format)
        stream = supports_streaming(model) and response_format in STREAMABLE_FORMATS

        data = {
            "model": model,
            "response_format": response_format,
            "temperature": str(temperature),
        }
        if language:
            data["language"] = language
        if prompt:
            data["prompt"] = prompt
        if stream:
            data["stream"] = "true"

        content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        files = {"file": (file_name, file, content_type)}

        response = await api.stream("POST", self.path, api_key, data=data, files=files)
        if response.headers.get("content-type", "").startswith(SSE_CONTENT_TYPE):
            return EventStream.from_response(response, TranscriptionEvent)

        await api.read(response)
        logger.debug(f"Transcription of {file_name} returned a buffered {response_format} body")
        return EventStream.from_events([self._buffered_event(response, response_format)])

    def _buffered_event(self, response: httpx.Response, response_format: str) -> TranscriptionEvent:
        if response_format in JSON_FORMATS:
            return parse_response(response, TranscriptionEvent)
        # text, srt and vtt bodies are returned verbatim
        return TranscriptionEvent(text=response.text)
