from typing import Optional, Union

from aiopenai.api import API, parse_response
from aiopenai.endpoints.base import compact, enum_value
from aiopenai.models.enums import CompletionsModel
from aiopenai.models.request import CompletionsOptionalParameters
from aiopenai.models.response import Completions


class CompletionsRequest:
    path = "/completions"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, CompletionsModel],
        optional_parameters: Optional[CompletionsOptionalParameters] = None,
    ) -> Completions:
        parameters = optional_parameters or CompletionsOptionalParameters()
        body = {
            "model": enum_value(model),
            **compact(parameters.model_dump()),
            "stream": False,
        }
        response = await api.request("POST", self.path, api_key, json=body)
        return parse_response(response, Completions)
