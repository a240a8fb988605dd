import logging
from typing import Union

from aiopenai.api import API
from aiopenai.endpoints.base import enum_value
from aiopenai.models.enums import SpeechResponseFormat, TTSModel, Voice
from aiopenai.models.request import SpeechRequest

logger = logging.getLogger(__name__)


class CreateSpeechRequest:
    path = "/audio/speech"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, TTSModel],
        input: str,
        voice: Union[str, Voice] = Voice.ALLOY,
        response_format: Union[str, SpeechResponseFormat] = SpeechResponseFormat.MP3,
        speed: float = 1.0,
    ) -> bytes:
        """Synthesize `input` and return the encoded audio bytes."""
        body = SpeechRequest(
            model=enum_value(model),
            input=input,
            voice=enum_value(voice),
            response_format=enum_value(response_format),
            speed=speed,
        )
        response = await api.request("POST", self.path, api_key, json=body.model_dump())
        audio = response.content
        logger.debug(f"Speech: {len(audio)} bytes of {body.response_format} for {len(input)} chars")
        return audio
