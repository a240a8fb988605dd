from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional, Literal, Union

from aiopenai.models.enums import Role


class TextContent(BaseModel):
    """Text content part of a multimodal message"""
    type: Literal["text"] = "text"
    text: str


class ImageSource(BaseModel):
    """Image source with base64 data"""
    type: Literal["base64"] = "base64"
    media_type: str  # e.g., "image/jpeg", "image/png"
    data: str  # Base64-encoded image data (without data URL prefix)


class ImageContent(BaseModel):
    """Inline base64 image; sent to the API as an image_url data URL"""
    type: Literal["image"] = "image"
    source: ImageSource


class ImageURL(BaseModel):
    url: str
    detail: Optional[Literal["auto", "low", "high"]] = None


class ImageURLContent(BaseModel):
    """Image referenced by URL (http(s) or data URL)"""
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Union[TextContent, ImageContent, ImageURLContent]


class ChatMessage(BaseModel):
    """Message with either text-only (string) or multimodal (array) content"""
    role: Role
    content: Union[str, List[ContentPart]]
    name: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "role": "system",
                    "content": "You are a helpful assistant."
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": "What's in this image?"},
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": "image/jpeg",
                                "data": "iVBORw0KGgoAAAANSUhEUgAA..."
                            }
                        }
                    ]
                }
            ]
        }
    )


class CompletionsOptionalParameters(BaseModel):
    """Body fields for /completions besides the model.

    Fields left as None are not sent.
    """
    prompt: Union[str, List[str]] = ""
    suffix: Optional[str] = None
    max_tokens: Optional[int] = Field(default=16, ge=1)
    temperature: Optional[float] = Field(default=1.0, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=1.0, ge=0.0, le=1.0)
    n: Optional[int] = Field(default=1, ge=1)
    logprobs: Optional[int] = Field(default=None, ge=0, le=5)
    echo: Optional[bool] = False
    stop: Optional[Union[str, List[str]]] = None
    presence_penalty: Optional[float] = Field(default=0.0, ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(default=0.0, ge=-2.0, le=2.0)
    best_of: Optional[int] = Field(default=1, ge=1)
    logit_bias: Optional[Dict[str, int]] = None
    user: Optional[str] = None


class ChatCompletionsOptionalParameters(BaseModel):
    """Body fields for /chat/completions besides model and messages.

    `stream` is forced by the operation used, so setting it here has no effect.
    """
    temperature: Optional[float] = Field(default=1.0, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=1.0, ge=0.0, le=1.0)
    n: Optional[int] = Field(default=1, ge=1)
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False
    max_tokens: Optional[int] = Field(default=None, ge=1)
    presence_penalty: Optional[float] = Field(default=0.0, ge=-2.0, le=2.0)
    frequency_penalty: Optional[float] = Field(default=0.0, ge=-2.0, le=2.0)
    logit_bias: Optional[Dict[str, int]] = None
    user: Optional[str] = None
    response_format: Optional[Dict[str, Any]] = None
    seed: Optional[int] = None


class ImageGenerationRequest(BaseModel):
    model: str
    prompt: str = Field(..., min_length=1)
    n: int = Field(default=1, ge=1, le=10)
    size: str = "1024x1024"


class SpeechRequest(BaseModel):
    """Request body for text-to-speech synthesis."""
    model: str
    input: str = Field(..., min_length=1, max_length=4096, description="Text to synthesize")
    voice: str = Field(default="alloy", description="Voice ID (e.g., 'alloy', 'nova')")
    response_format: str = "mp3"
    speed: float = Field(default=1.0, ge=0.25, le=4.0, description="Speech speed (0.25 - 4.0)")
