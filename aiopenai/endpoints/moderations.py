from typing import List, Union

from aiopenai.api import API, parse_response
from aiopenai.models.response import Moderation


class ModerationsRequest:
    path = "/moderations"

    async def execute(self, api: API, api_key: str, input: Union[str, List[str]]) -> Moderation:
        response = await api.request("POST", self.path, api_key, json={"input": input})
        return parse_response(response, Moderation)
