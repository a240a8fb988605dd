"""
HTTP transport for the OpenAI API.

`API` owns one httpx.AsyncClient and knows nothing about individual endpoints;
the request classes in aiopenai.endpoints build bodies and decode results.
"""

import logging
from typing import Any, Optional, TypeVar

import httpx
import orjson
from pydantic import BaseModel, ValidationError

from aiopenai.config import settings
from aiopenai.exceptions import (
    APITimeoutError,
    PayloadError,
    TransportError,
    raise_for_status,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class API:
    """Transport adapter: sends requests and returns buffered or streaming responses."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        organization: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.organization = organization or settings.organization
        self.timeout = float(timeout if timeout is not None else settings.timeout)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
        )

    def _headers(self, api_key: str, json_body: bool) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.organization:
            headers["OpenAI-Organization"] = self.organization
        return headers

    def _build_request(
        self,
        method: str,
        path: str,
        api_key: str,
        json: Optional[dict[str, Any]] = None,
        data: Optional[dict[str, Any]] = None,
        files: Optional[dict[str, Any]] = None,
    ) -> httpx.Request:
        content = orjson.dumps(json) if json is not None else None
        return self._client.build_request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(api_key, json_body=content is not None),
            content=content,
            data=data,
            files=files,
        )

    async def _send(self, request: httpx.Request, stream: bool) -> httpx.Response:
        logger.debug(f"{request.method} {request.url} (stream={stream})")
        try:
            return await self._client.send(request, stream=stream)
        except httpx.TimeoutException as e:
            raise APITimeoutError(f"Request timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Connection error: {e}") from e

    async def request(self, method: str, path: str, api_key: str, **kwargs) -> httpx.Response:
        """Send a request and return the fully read response.

        Raises an APIStatusError subclass for non-2xx responses.
        """
        response = await self._send(self._build_request(method, path, api_key, **kwargs), stream=False)
        raise_for_status(response)
        return response

    async def stream(self, method: str, path: str, api_key: str, **kwargs) -> httpx.Response:
        """Send a request and return the response with its body still unread.

        The caller owns the response and must close it. Error responses are
        read, closed and raised here.
        """
        response = await self._send(self._build_request(method, path, api_key, **kwargs), stream=True)
        if not response.is_success:
            await self.read(response)
            raise_for_status(response)
        return response

    async def read(self, response: httpx.Response) -> bytes:
        """Read the rest of a streaming response's body and close it."""
        try:
            return await response.aread()
        except httpx.TimeoutException as e:
            raise APITimeoutError(f"Reading response timed out: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Error reading response: {e}") from e
        finally:
            await response.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "API":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def parse_response(response: httpx.Response, model: type[ModelT]) -> ModelT:
    """Decode a buffered JSON response into `model`.

    Raises PayloadError carrying the raw body when it is not valid JSON or does
    not fit the model.
    """
    raw = response.content
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        logger.debug(f"JSON parse error in {model.__name__} response: {e}")
        raise PayloadError(f"Invalid JSON in response: {e}", raw=raw) from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Unexpected {model.__name__} response shape: {e}")
        raise PayloadError(f"Response does not match {model.__name__}: {e}", raw=raw) from e
