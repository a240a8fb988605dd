"""
Typed async client for the OpenAI API.

Provides model listing, completions, chat completions (buffered and
streamed), image generation, embeddings, moderation, text-to-speech and
speech-to-text on top of httpx, with pydantic models for every result.
"""

import logging

from aiopenai.api import API
from aiopenai.client import OpenAIClient
from aiopenai.config import Settings, settings, setup_logging
from aiopenai.exceptions import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    DecodeFailure,
    FramingError,
    InternalServerError,
    NotFoundError,
    OpenAIError,
    PayloadError,
    PermissionDeniedError,
    RateLimitError,
    TransportError,
    UnprocessableEntityError,
)
from aiopenai.models import (
    ChatCompletions,
    ChatCompletionsOptionalParameters,
    ChatCompletionsStreamChunk,
    ChatMessage,
    ChatModel,
    Completions,
    CompletionsModel,
    CompletionsOptionalParameters,
    CreateImage,
    EmbeddingModel,
    EmbeddingResponse,
    ImageContent,
    ImageModel,
    ImageSize,
    ImageSource,
    ImageURL,
    ImageURLContent,
    Model,
    ModelList,
    Moderation,
    Role,
    SpeechResponseFormat,
    TextContent,
    TranscriptionEvent,
    TranscriptionModel,
    TranscriptionResponseFormat,
    TTSModel,
    Usage,
    Voice,
)
from aiopenai.models import __all__ as _models_all
from aiopenai.streaming import EventStream

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
_logger.setLevel(settings.log_level)

__version__ = "1.0.0"

__all__ = [
    "API",
    "APIConnectionError",
    "APIError",
    "APIStatusError",
    "APITimeoutError",
    "AuthenticationError",
    "BadRequestError",
    "ConfigurationError",
    "DecodeFailure",
    "EventStream",
    "FramingError",
    "InternalServerError",
    "NotFoundError",
    "OpenAIClient",
    "OpenAIError",
    "PayloadError",
    "PermissionDeniedError",
    "RateLimitError",
    "Settings",
    "TransportError",
    "UnprocessableEntityError",
    "settings",
    "setup_logging",
    *_models_all,
]
