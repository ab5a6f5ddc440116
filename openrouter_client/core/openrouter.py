from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from openrouter_client.core.errors import (
    ApiError,
    NoChoices,
    RequestError,
    SerializationError,
)
from openrouter_client.core.message_builder import build_chat_request, build_messages
from openrouter_client.models.config import OpenRouterConfig
from openrouter_client.models.openrouter import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Message,
    ModelsResponse,
)
from openrouter_client.utils.config import resolve_from_environment
from openrouter_client.utils.logging import get_logger


logger = get_logger("openrouter")

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class OpenRouterClient:
    """Async client for OpenRouter API.

    One instance may be shared by concurrent tasks: calls keep no state on the
    client beyond the pooled HTTP connection.
    """

    def __init__(
        self,
        config: OpenRouterConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_env(cls) -> "OpenRouterClient":
        """Create client from OPENROUTER_* environment variables."""
        return cls(resolve_from_environment())

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.api_key.get_secret_value()}",
        }
        # Optional site headers for OpenRouter rankings
        if self.config.site_url:
            headers["HTTP-Referer"] = self.config.site_url
        if self.config.site_name:
            headers["X-Title"] = self.config.site_name
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers=self._build_headers(),
                timeout=httpx.Timeout(self.config.timeout_sec),
                limits=httpx.Limits(
                    max_connections=50,
                    max_keepalive_connections=20,
                    keepalive_expiry=30,
                ),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        client = await self._get_client()
        logger.debug(f"{method} {path}")

        try:
            response = await client.request(method, path, **kwargs)
            logger.debug(f"{method} {path} -> {response.status_code}")
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            raise ApiError(e.response.status_code, e.response.text) from e

        except httpx.RequestError as e:
            raise RequestError(f"Request failed: {e!r}") from e

    @staticmethod
    def _parse(response: httpx.Response, model: type[ResponseT]) -> ResponseT:
        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise SerializationError(
                f"Unexpected response body for {model.__name__}: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    async def create_chat_completion(
        self, request: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """Send non-streaming chat completion request."""
        if request.stream:
            raise ValueError("Streaming responses are not supported")

        response = await self._request(
            "POST",
            "/chat/completions",
            json=request.to_payload(),
            headers={"Content-Type": "application/json"},
        )
        return self._parse(response, ChatCompletionResponse)

    async def list_models(self) -> ModelsResponse:
        """Get list of available models."""
        response = await self._request("GET", "/models")
        return self._parse(response, ModelsResponse)

    async def send_message(self, model: str, message: str) -> str:
        """Send a single user message and return the assistant's reply."""
        return await self.send_with_parameters(model, build_messages(message))

    async def send_conversation(
        self,
        model: str,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Send a conversation as given and return the assistant's reply."""
        return await self.send_with_parameters(
            model, messages, temperature=temperature, max_tokens=max_tokens
        )

    async def send_with_parameters(
        self,
        model: str,
        messages: list[Message],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Send a conversation with optional sampling parameters.

        Args:
            model: Model slug
            messages: Conversation; role order is up to the caller
            temperature: Sampling temperature, None to use the model default
            max_tokens: Completion length limit, None for no limit

        Returns:
            Content of the first choice

        Raises:
            NoChoices: Response contained no choices
        """
        request = build_chat_request(
            model, messages, temperature=temperature, max_tokens=max_tokens
        )
        response = await self.create_chat_completion(request)

        if not response.choices:
            raise NoChoices()
        return response.choices[0].message.content

    async def __aenter__(self) -> "OpenRouterClient":
        await self._get_client()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
