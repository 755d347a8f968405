"""HTTP client for the chat-completions provider.

One ``httpx.AsyncClient`` is opened per call and closed when the call, or
the stream, finishes.
"""

from __future__ import annotations

from typing import AsyncIterator, Dict, Optional

import httpx
from loguru import logger

from roadaware.errors import ProviderConfigError, ProviderError
from roadaware.schemas import ChatCompletionRequest
from roadaware.settings import Settings, settings as default_settings

stream_log = logger.bind(tag="STREAM")


class ProviderClient:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or default_settings
        self._transport = transport

    @property
    def url(self) -> str:
        if not self.settings.PROVIDER_ENDPOINT:
            raise ProviderConfigError("PROVIDER_ENDPOINT is not set")
        return self.settings.chat_completions_url

    @property
    def headers(self) -> Dict[str, str]:
        key = self.settings.PROVIDER_API_KEY
        return {
            "Authorization": f"Bearer {key}",
            "api-key": key,
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self.headers,
            timeout=httpx.Timeout(self.settings.PROVIDER_TIMEOUT),
            transport=self._transport,
        )

    async def complete(self, request: ChatCompletionRequest) -> httpx.Response:
        """POST *request* and return the fully read response, whatever its status."""
        url = self.url
        async with self._client() as client:
            response = await client.post(url, json=request.to_payload())
        logger.debug("Provider responded {} ({} bytes)", response.status_code, len(response.content))
        return response

    async def stream_lines(self, request: ChatCompletionRequest) -> AsyncIterator[str]:
        """POST *request* and yield the response body line by line.

        Raises ``ProviderError`` before yielding anything when the provider
        answers with a non-success status.
        """
        url = self.url
        async with self._client() as client:
            async with client.stream("POST", url, json=request.to_payload()) as response:
                if response.is_error:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise ProviderError(response.status_code, body)
                stream_log.info("Connected to provider. Streaming response...")
                async for line in response.aiter_lines():
                    yield line


def get_provider_client() -> ProviderClient:
    """FastAPI dependency; tests override it with a mocked transport."""
    return ProviderClient()
