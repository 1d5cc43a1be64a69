"""Client for OpenAI-compatible chat completion APIs."""

import json
from typing import Any

import httpx

from recipeindex.config import Settings
from recipeindex.ingest.connectors.base import ConnectorError
from recipeindex.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."
JSON_SYSTEM_PROMPT = (
    "You are a helpful assistant that must respond only with valid JSON. "
    "Do not include any other text or formatting."
)


class LLMClient:
    """Thin async client for a chat completions endpoint.

    Every call is attempted exactly once; transport errors, non-2xx responses
    and malformed bodies are raised as ConnectorError.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        self.url = settings.chat_completions_url
        self.api_key = settings.llm_api_key
        self.model = settings.llm_model
        self.timeout = settings.llm_timeout
        self._client = http_client

    @property
    def name(self) -> str:
        """Return connector name."""
        return "llm"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": "RecipeIndex/1.0",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, payload: dict[str, Any]) -> str:
        """POST a chat completion request and return the first message content."""
        client = await self._get_client()

        try:
            response = await client.post(
                self.url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise ConnectorError(f"LLM request failed: {e}") from e

        if response.status_code >= 400:
            error_detail = response.text[:500] if response.text else "No details"
            logger.error(f"LLM API error {response.status_code}: {error_detail}")
            raise ConnectorError(
                f"LLM API error: {response.reason_phrase}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ConnectorError(
                "Malformed chat completion response",
                status_code=response.status_code,
                response=response.text[:500],
            ) from e

        if not isinstance(content, str):
            raise ConnectorError("Chat completion returned no text content")
        return content

    async def call(self, prompt: str, model: str | None = None) -> str:
        """Send a prompt and return the raw text answer."""
        return await self._request(
            {
                "model": model or self.model,
                "messages": [
                    {"role": "system", "content": DEFAULT_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            }
        )

    async def call_json(self, prompt: str, model: str | None = None) -> Any:
        """Send a prompt in JSON mode and return the decoded answer."""
        content = await self._request(
            {
                "model": model or self.model,
                "messages": [
                    {"role": "system", "content": JSON_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "response_format": {"type": "json_object"},
            }
        )

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            logger.error(f"LLM returned invalid JSON: {content[:200]}")
            raise ConnectorError("LLM returned invalid JSON", response=content) from e

    async def __aenter__(self) -> "LLMClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
