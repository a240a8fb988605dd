from aiopenai.api import API, parse_response
from aiopenai.models.response import ModelList


class ListModelsRequest:
    path = "/models"

    async def execute(self, api: API, api_key: str) -> ModelList:
        response = await api.request("GET", self.path, api_key)
        return parse_response(response, ModelList)
