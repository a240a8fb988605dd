from aiopenai.models.enums import (
    ChatModel,
    CompletionsModel,
    EmbeddingModel,
    ImageModel,
    ImageSize,
    Role,
    SpeechResponseFormat,
    TranscriptionModel,
    TranscriptionResponseFormat,
    TTSModel,
    Voice,
)
from aiopenai.models.request import (
    ChatCompletionsOptionalParameters,
    ChatMessage,
    CompletionsOptionalParameters,
    ImageContent,
    ImageSource,
    ImageURL,
    ImageURLContent,
    TextContent,
)
from aiopenai.models.response import (
    ChatCompletions,
    ChatCompletionsStreamChunk,
    Completions,
    CreateImage,
    EmbeddingResponse,
    Model,
    ModelList,
    Moderation,
    TranscriptionEvent,
    Usage,
)

__all__ = [
    "ChatCompletions",
    "ChatCompletionsOptionalParameters",
    "ChatCompletionsStreamChunk",
    "ChatMessage",
    "ChatModel",
    "Completions",
    "CompletionsModel",
    "CompletionsOptionalParameters",
    "CreateImage",
    "EmbeddingModel",
    "EmbeddingResponse",
    "ImageContent",
    "ImageModel",
    "ImageSize",
    "ImageSource",
    "ImageURL",
    "ImageURLContent",
    "Model",
    "ModelList",
    "Moderation",
    "Role",
    "SpeechResponseFormat",
    "TTSModel",
    "TextContent",
    "TranscriptionEvent",
    "TranscriptionModel",
    "TranscriptionResponseFormat",
    "Usage",
    "Voice",
]
