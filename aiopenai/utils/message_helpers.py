"""Conversion of chat messages to the /chat/completions wire format."""

import base64
from typing import Any, Sequence, Union

from aiopenai.models.request import ChatMessage, ImageContent, ImageSource, TextContent

MessageLike = Union[ChatMessage, dict[str, Any]]


def format_for_openai(message: MessageLike) -> dict[str, Any]:
    """
    Convert a message to the OpenAI wire format.

    Base64 image parts become data URLs:
    {
        "role": "user",
        "content": [
            {"type": "text", "text": "What's in this image?"},
            {
                "type": "image_url",
                "image_url": {
                    "url": "data:image/jpeg;base64,iVBORw0KGgoAAAANSUhEUgAA..."
                }
            }
        ]
    }

    Args:
        message: ChatMessage, or a dict in the same shape

    Returns:
        OpenAI-formatted message dict
    """
    if isinstance(message, dict):
        message = ChatMessage.model_validate(message)

    formatted: dict[str, Any] = {"role": message.role.value}
    if message.name:
        formatted["name"] = message.name

    # Text-only: pass through
    if isinstance(message.content, str):
        formatted["content"] = message.content
        return formatted

    openai_content = []
    for part in message.content:
        if isinstance(part, TextContent):
            openai_content.append({"type": "text", "text": part.text})
        elif isinstance(part, ImageContent):
            openai_content.append({
                "type": "image_url",
                "image_url": {"url": to_data_url(part.source)}
            })
        else:
            openai_content.append(part.model_dump(exclude_none=True))

    formatted["content"] = openai_content
    return formatted


def format_messages(messages: Sequence[MessageLike]) -> list[dict[str, Any]]:
    return [format_for_openai(message) for message in messages]


def to_data_url(source: ImageSource) -> str:
    return f"data:{source.media_type};base64,{source.data}"


def image_part(data: bytes, media_type: str = "image/jpeg") -> ImageContent:
    """Build an inline image part from raw image bytes."""
    encoded = base64.b64encode(data).decode("ascii")
    return ImageContent(source=ImageSource(media_type=media_type, data=encoded))
