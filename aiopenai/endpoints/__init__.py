from aiopenai.endpoints.chat_completions import CreateChatCompletionsRequest
from aiopenai.endpoints.chat_completions_stream import CreateChatCompletionsStreamRequest
from aiopenai.endpoints.completions import CompletionsRequest
from aiopenai.endpoints.embeddings import EmbeddingsRequest
from aiopenai.endpoints.images import CreateImagesRequest
from aiopenai.endpoints.list_models import ListModelsRequest
from aiopenai.endpoints.moderations import ModerationsRequest
from aiopenai.endpoints.speech import CreateSpeechRequest
from aiopenai.endpoints.transcription import CreateTranscriptionRequest

__all__ = [
    "CompletionsRequest",
    "CreateChatCompletionsRequest",
    "CreateChatCompletionsStreamRequest",
    "CreateImagesRequest",
    "CreateSpeechRequest",
    "CreateTranscriptionRequest",
    "EmbeddingsRequest",
    "ListModelsRequest",
    "ModerationsRequest",
]
