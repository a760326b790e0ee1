"""
Thin HTTP client for the Gemini REST API.

Wraps httpx with API-key authentication and maps transport
and HTTP failures onto UpstreamError.
"""

from typing import Any, Optional

import httpx

from ragbot.core.config import get_settings
from ragbot.core.exceptions import UpstreamError
from ragbot.core.logging import get_logger

logger = get_logger(__name__)


def model_path(model: str) -> str:
    """Normalize a model name to the "models/<name>" resource form."""
    return model if model.startswith("models/") else f"models/{model}"


class GeminiClient:
    """
    Async client for Gemini model endpoints.

    A new httpx.AsyncClient is opened per call; a transport may be
    injected for testing.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self._transport = transport

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"x-goog-api-key": self.api_key},
            timeout=timeout or self.timeout,
            transport=self._transport,
        )

    async def call(self, model: str, method: str, payload: dict) -> dict[str, Any]:
        """
        Invoke a model method such as "embedContent" or "generateContent".

        Args:
            model: Model name, with or without the "models/" prefix
            method: Model method name
            payload: JSON request body

        Returns:
            Decoded JSON response

        Raises:
            UpstreamError: On connection, timeout, HTTP or decoding failure
        """
        url = f"/{model_path(model)}:{method}"

        try:
            async with self._client() as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                return response.json()

        except httpx.ConnectError:
            raise UpstreamError(
                message="Cannot connect to the Gemini API",
                details={"base_url": self.base_url, "method": method},
            )
        except httpx.TimeoutException:
            raise UpstreamError(
                message="Gemini request timed out",
                details={"timeout": self.timeout, "method": method},
            )
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                message=f"Gemini API error: {e.response.status_code}",
                details={"method": method, "response": e.response.text},
            )
        except ValueError as e:
            raise UpstreamError(
                message=f"Invalid JSON from Gemini API: {str(e)}",
                details={"method": method},
            )
        except httpx.HTTPError as e:
            raise UpstreamError(
                message=f"Gemini request failed: {str(e)}",
                details={"method": method},
            )

    async def get_model(self, model: str) -> bool:
        """Check that a model resource is reachable."""
        try:
            async with self._client(timeout=5) as client:
                response = await client.get(f"/{model_path(model)}")
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"Gemini model check failed: {e}")
            return False
