"""
Async client for the OpenAI API.

Usage:
    async with OpenAIClient(api_key="sk-...") as client:
        models = await client.list_models()

        stream = await client.create_chat_completions_stream(
            model=ChatModel.GPT_4O,
            messages=[ChatMessage(role=Role.USER, content="Hello!")],
        )
        async for chunk in stream:
            print(chunk.content, end="")
"""

from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union

from aiopenai.api import API
from aiopenai.config import settings
from aiopenai.endpoints import (
    CompletionsRequest,
    CreateChatCompletionsRequest,
    CreateChatCompletionsStreamRequest,
    CreateImagesRequest,
    CreateSpeechRequest,
    CreateTranscriptionRequest,
    EmbeddingsRequest,
    ListModelsRequest,
    ModerationsRequest,
)
from aiopenai.exceptions import ConfigurationError
from aiopenai.models.enums import (
    ChatModel,
    CompletionsModel,
    EmbeddingModel,
    ImageModel,
    ImageSize,
    SpeechResponseFormat,
    TranscriptionModel,
    TranscriptionResponseFormat,
    TTSModel,
    Voice,
)
from aiopenai.models.request import ChatCompletionsOptionalParameters, CompletionsOptionalParameters
from aiopenai.models.response import (
    ChatCompletions,
    ChatCompletionsStreamChunk,
    Completions,
    CreateImage,
    EmbeddingResponse,
    ModelList,
    Moderation,
    TranscriptionEvent,
)
from aiopenai.streaming import EventStream
from aiopenai.utils.message_helpers import MessageLike

# Every request callable takes (api, api_key, *operation arguments)
RequestCallable = Callable[..., Awaitable[Any]]


class OpenAIClient:
    """
    Typed async client for the OpenAI API.

    Each operation delegates to a request callable. They default to the
    request classes in aiopenai.endpoints and can be replaced, for example with
    fakes in tests.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api: Optional[API] = None,
        list_models_request: Optional[RequestCallable] = None,
        completions_request: Optional[RequestCallable] = None,
        create_chat_completions_request: Optional[RequestCallable] = None,
        create_chat_completions_stream_request: Optional[RequestCallable] = None,
        create_images_request: Optional[RequestCallable] = None,
        embeddings_request: Optional[RequestCallable] = None,
        moderations_request: Optional[RequestCallable] = None,
        create_speech_request: Optional[RequestCallable] = None,
        create_transcription_request: Optional[RequestCallable] = None,
    ):
        self.api_key = api_key or settings.api_key
        if not self.api_key:
            raise ConfigurationError(
                "No API key provided. Pass api_key or set OPENAI_API_KEY."
            )
        self.api = api or API()

        self._list_models = list_models_request or ListModelsRequest().execute
        self._completions = completions_request or CompletionsRequest().execute
        self._create_chat_completions = (
            create_chat_completions_request or CreateChatCompletionsRequest().execute
        )
        self._create_chat_completions_stream = (
            create_chat_completions_stream_request or CreateChatCompletionsStreamRequest().execute
        )
        self._create_images = create_images_request or CreateImagesRequest().execute
        self._embeddings = embeddings_request or EmbeddingsRequest().execute
        self._moderations = moderations_request or ModerationsRequest().execute
        self._create_speech = create_speech_request or CreateSpeechRequest().execute
        self._create_transcription = (
            create_transcription_request or CreateTranscriptionRequest().execute
        )

    async def list_models(self) -> ModelList:
        """List the models available to this API key."""
        return await self._list_models(self.api, self.api_key)

    async def completions(
        self,
        model: Union[str, CompletionsModel],
        optional_parameters: Optional[CompletionsOptionalParameters] = None,
    ) -> Completions:
        """
        Complete a prompt with a legacy completions model.

        Args:
            model: Completions model, e.g. CompletionsModel.GPT_3_5_TURBO_INSTRUCT
            optional_parameters: Prompt and sampling parameters; API defaults if None
        """
        return await self._completions(self.api, self.api_key, model, optional_parameters)

    async def create_chat_completions(
        self,
        model: Union[str, ChatModel],
        messages: Sequence[MessageLike],
        optional_parameters: Optional[ChatCompletionsOptionalParameters] = None,
    ) -> ChatCompletions:
        """Generate a chat completion and return it as a single response."""
        return await self._create_chat_completions(
            self.api, self.api_key, model, messages, optional_parameters
        )

    async def create_chat_completions_stream(
        self,
        model: Union[str, ChatModel],
        messages: Sequence[MessageLike],
        optional_parameters: Optional[ChatCompletionsOptionalParameters] = None,
    ) -> EventStream[ChatCompletionsStreamChunk]:
        """
        Generate a chat completion as a stream of chunks.

        The request is sent before this returns, so HTTP errors are raised here.
        Iterate the returned stream once; close it early with `aclose()` or by
        using it as an async context manager.
        """
        return await self._create_chat_completions_stream(
            self.api, self.api_key, model, messages, optional_parameters
        )

    async def create_images(
        self,
        model: Union[str, ImageModel],
        prompt: str,
        number_of_images: int = 1,
        size: Union[str, ImageSize] = ImageSize.S1024,
    ) -> CreateImage:
        """Generate images from a prompt."""
        return await self._create_images(
            self.api, self.api_key, model, prompt, number_of_images, size
        )

    async def embeddings(
        self, model: Union[str, EmbeddingModel], input: Union[str, List[str]]
    ) -> EmbeddingResponse:
        """Embed one text or a batch of texts."""
        return await self._embeddings(self.api, self.api_key, model, input)

    async def moderations(self, input: Union[str, List[str]]) -> Moderation:
        """Classify text against the moderation categories."""
        return await self._moderations(self.api, self.api_key, input)

    async def create_speech(
        self,
        model: Union[str, TTSModel],
        input: str,
        voice: Union[str, Voice] = Voice.ALLOY,
        response_format: Union[str, SpeechResponseFormat] = SpeechResponseFormat.MP3,
        speed: float = 1.0,
    ) -> bytes:
        """
        Convert text to speech.

        Args:
            model: TTS model
            input: Text to synthesize (at most 4096 characters)
            voice: Voice to use
            response_format: Audio encoding of the result
            speed: 0.25 - 4.0, 1.0 is normal speed

        Returns:
            Encoded audio bytes
        """
        return await self._create_speech(
            self.api, self.api_key, model, input, voice, response_format, speed
        )

    async def create_transcription(
        self,
        model: Union[str, TranscriptionModel],
        file: bytes,
        file_name: str,
        language: str = "",
        prompt: str = "",
        response_format: Union[str, TranscriptionResponseFormat] = TranscriptionResponseFormat.JSON,
        temperature: float = 0.0,
    ) -> EventStream[TranscriptionEvent]:
        """
        Transcribe audio to text.

        Models that support streaming yield "transcript.text.delta" events
        followed by a "transcript.text.done" event; other models yield a single
        done event.
        """
        return await self._create_transcription(
            self.api,
            self.api_key,
            model,
            file,
            file_name,
            language,
            prompt,
            response_format,
            temperature,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.api.aclose()

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
