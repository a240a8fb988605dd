import httpx
import pytest

from aiopenai.api import API
from aiopenai.client import OpenAIClient

BASE_URL = "https://api.test/v1"


@pytest.fixture
def make_client():
    """Build an OpenAIClient whose HTTP traffic goes to `handler`."""
    def _make(handler) -> OpenAIClient:
        api = API(base_url=BASE_URL, organization="org-test", transport=httpx.MockTransport(handler))
        return OpenAIClient(api_key="sk-test", api=api)

    return _make


def sse(*payloads: bytes) -> bytes:
    """Encode payloads as an SSE body terminated by [DONE]."""
    return b"".join(b"data: " + payload + b"\n\n" for payload in payloads) + b"data: [DONE]\n\n"
