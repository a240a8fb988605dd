"""
Typed results returned by the client.

Every model ignores fields it does not declare, so new fields added by the API
do not break decoding.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class APIModel(BaseModel):
    model_config = ConfigDict(extra="ignore", protected_namespaces=())


class Usage(APIModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


# ============================================================================
# Models
# ============================================================================

# Substrings of model ids that are not chat/text-generation models
NON_CHAT_PATTERNS = ("text-embedding", "whisper", "tts-", "dall-e", "davinci", "babbage", "moderation", "transcribe")


class Model(APIModel):
    id: str
    object: str = "model"
    created: Optional[int] = None
    owned_by: Optional[str] = None


class ModelList(APIModel):
    object: str = "list"
    data: List[Model] = Field(default_factory=list)

    def chat_models(self) -> List[Model]:
        """Models usable for chat, sorted by id."""
        models = [
            m for m in self.data
            if not any(pattern in m.id.lower() for pattern in NON_CHAT_PATTERNS)
        ]
        models.sort(key=lambda m: m.id)
        return models


# ============================================================================
# Completions
# ============================================================================

class CompletionChoice(APIModel):
    text: str = ""
    index: int = 0
    logprobs: Optional[Dict[str, Any]] = None
    finish_reason: Optional[str] = None


class Completions(APIModel):
    id: str
    object: str = "text_completion"
    created: Optional[int] = None
    model: str = ""
    choices: List[CompletionChoice]
    usage: Optional[Usage] = None


# ============================================================================
# Chat completions
# ============================================================================

class ToolFunction(APIModel):
    name: Optional[str] = None
    arguments: str = ""


class ToolCall(APIModel):
    index: Optional[int] = None
    id: Optional[str] = None
    type: str = "function"
    function: ToolFunction = Field(default_factory=ToolFunction)


class ChatCompletionMessage(APIModel):
    role: str = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class ChatCompletionChoice(APIModel):
    index: int = 0
    message: ChatCompletionMessage
    finish_reason: Optional[str] = None


class ChatCompletions(APIModel):
    id: str
    object: str = "chat.completion"
    created: Optional[int] = None
    model: str = ""
    choices: List[ChatCompletionChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None


class ChoiceDelta(APIModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class ChatCompletionStreamChoice(APIModel):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None


class ChatCompletionsStreamChunk(APIModel):
    """One increment of a streamed chat completion."""
    id: Optional[str] = None
    object: str = "chat.completion.chunk"
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[ChatCompletionStreamChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    @property
    def content(self) -> str:
        """Text delta of the first choice, or "" when there is none."""
        if not self.choices:
            return ""
        return self.choices[0].delta.content or ""

    @property
    def finish_reason(self) -> Optional[str]:
        return self.choices[0].finish_reason if self.choices else None


# ============================================================================
# Images, embeddings, moderation
# ============================================================================

class ImageData(APIModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class CreateImage(APIModel):
    created: int
    data: List[ImageData]


class Embedding(APIModel):
    object: str = "embedding"
    index: int = 0
    embedding: List[float]


class EmbeddingResponse(APIModel):
    object: str = "list"
    model: str = ""
    data: List[Embedding]
    usage: Optional[Usage] = None


class ModerationResult(APIModel):
    flagged: bool
    categories: Dict[str, bool] = Field(default_factory=dict)
    category_scores: Dict[str, float] = Field(default_factory=dict)


class Moderation(APIModel):
    id: str
    model: str = ""
    results: List[ModerationResult]


# ============================================================================
# Transcription
# ============================================================================

class TranscriptionSegment(APIModel):
    id: int
    start: float
    end: float
    text: str


class TranscriptionEvent(APIModel):
    """One increment of a transcription.

    Streamed transcriptions produce "transcript.text.delta" events followed by a
    "transcript.text.done" event; buffered transcriptions produce a single
    "transcript.text.done" event carrying the whole text.
    """
    type: str = "transcript.text.done"
    delta: Optional[str] = None
    text: Optional[str] = None
    language: Optional[str] = None
    duration: Optional[float] = None
    segments: Optional[List[TranscriptionSegment]] = None
    logprobs: Optional[List[Dict[str, Any]]] = None

    @property
    def is_done(self) -> bool:
        return self.type == "transcript.text.done"
