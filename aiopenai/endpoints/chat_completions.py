from typing import Any, Optional, Sequence, Union

from aiopenai.api import API, parse_response
from aiopenai.endpoints.base import compact, enum_value
from aiopenai.models.enums import ChatModel
from aiopenai.models.request import ChatCompletionsOptionalParameters
from aiopenai.models.response import ChatCompletions
from aiopenai.utils.message_helpers import MessageLike, format_messages


def chat_body(
    model: Union[str, ChatModel],
    messages: Sequence[MessageLike],
    optional_parameters: Optional[ChatCompletionsOptionalParameters],
    stream: bool,
) -> dict[str, Any]:
    """Request body shared by the buffered and streaming chat operations."""
    if not messages:
        raise ValueError("messages must contain at least one message")

    parameters = optional_parameters or ChatCompletionsOptionalParameters()
    return {
        "model": enum_value(model),
        "messages": format_messages(messages),
        **compact(parameters.model_dump(exclude={"stream"})),
        "stream": stream,
    }


class CreateChatCompletionsRequest:
    path = "/chat/completions"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, ChatModel],
        messages: Sequence[MessageLike],
        optional_parameters: Optional[ChatCompletionsOptionalParameters] = None,
    ) -> ChatCompletions:
        body = chat_body(model, messages, optional_parameters, stream=False)
        response = await api.request("POST", self.path, api_key, json=body)
        return parse_response(response, ChatCompletions)
