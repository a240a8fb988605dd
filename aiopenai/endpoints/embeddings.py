from typing import List, Union

from aiopenai.api import API, parse_response
from aiopenai.endpoints.base import enum_value
from aiopenai.models.enums import EmbeddingModel
from aiopenai.models.response import EmbeddingResponse


class EmbeddingsRequest:
    path = "/embeddings"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, EmbeddingModel],
        input: Union[str, List[str]],
    ) -> EmbeddingResponse:
        body = {"model": enum_value(model), "input": input}
        response = await api.request("POST", self.path, api_key, json=body)
        return parse_response(response, EmbeddingResponse)
