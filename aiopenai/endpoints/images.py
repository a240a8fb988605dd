from typing import Union

from aiopenai.api import API, parse_response
from aiopenai.endpoints.base import enum_value
from aiopenai.models.enums import ImageModel, ImageSize
from aiopenai.models.request import ImageGenerationRequest
from aiopenai.models.response import CreateImage


class CreateImagesRequest:
    path = "/images/generations"

    async def execute(
        self,
        api: API,
        api_key: str,
        model: Union[str, ImageModel],
        prompt: str,
        number_of_images: int = 1,
        size: Union[str, ImageSize] = ImageSize.S1024,
    ) -> CreateImage:
        body = ImageGenerationRequest(
            model=enum_value(model),
            prompt=prompt,
            n=number_of_images,
            size=enum_value(size),
        )
        response = await api.request("POST", self.path, api_key, json=body.model_dump())
        return parse_response(response, CreateImage)
