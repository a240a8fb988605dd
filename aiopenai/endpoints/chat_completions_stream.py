from typing import Optional, Sequence, Union

from aiopenai.api import API
from aiopenai.endpoints.chat_completions import chat_body
from aiopenai.models.enums import ChatModel
from aiopenai.models.request import ChatCompletionsOptionalParameters
from aiopenai.models.response import ChatCompletionsStreamChunk
from aiopenai.streaming import EventStream
from aiopenai.utils.message_helpers import MessageLike


class CreateChatCompletionsStreamRequest:
    path = "/chat/completions"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, ChatModel],
        messages: Sequence[MessageLike],
        optional_parameters: Optional[ChatCompletionsOptionalParameters] = None,
    ) -> EventStream[ChatCompletionsStreamChunk]:
        """Open a streamed chat completion.

        HTTP errors are raised here; the returned stream yields one chunk per
        SSE frame until the server sends [DONE].
        """
        body = chat_body(model, messages, optional_parameters, stream=True)
        response = await api.stream("POST", self.path, api_key, json=body)
        return EventStream.from_response(response, ChatCompletionsStreamChunk)
