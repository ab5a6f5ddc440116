from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """Single role-tagged chat message."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)


class ChatCompletionRequest(BaseModel):
    """Request to OpenRouter /chat/completions endpoint."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: list[Message]
    temperature: float | None = None
    max_tokens: int | None = None
    stream: bool | None = None

    @classmethod
    def new(cls, model: str, messages: list[Message]) -> "ChatCompletionRequest":
        return cls(model=model, messages=list(messages))

    def with_max_tokens(self, max_tokens: int) -> "ChatCompletionRequest":
        return self.model_copy(update={"max_tokens": max_tokens})

    def with_temperature(self, temperature: float) -> "ChatCompletionRequest":
        return self.model_copy(update={"temperature": temperature})

    def with_stream(self, stream: bool) -> "ChatCompletionRequest":
        return self.model_copy(update={"stream": stream})

    def to_payload(self) -> dict[str, Any]:
        """JSON body; unset optional fields are left out entirely."""
        return self.model_dump(exclude_none=True)


class Usage(BaseModel):
    """Token usage in completion response."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)


class Choice(BaseModel):
    """Single choice in completion response."""

    index: int = 0
    message: Message
    finish_reason: str | None = None


class ChatCompletionResponse(BaseModel):
    """Response from OpenRouter /chat/completions endpoint."""

    # Fields OpenRouter adds later are kept but not interpreted
    model_config = ConfigDict(extra="allow")

    id: str = ""
    object: str = "chat.completion"
    created: int = 0
    model: str = ""
    choices: list[Choice]
    usage: Usage | None = None


class Model(BaseModel):
    """Model info from OpenRouter /models endpoint.

    Everything besides ``id``, ``object`` and ``owned_by`` ends up in
    ``details`` untouched, so new provider fields never break parsing.
    """

    id: str
    object: str = "model"
    owned_by: str = ""
    details: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_details(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = {k: v for k, v in data.items() if k in cls.model_fields}
        extra = {k: v for k, v in data.items() if k not in cls.model_fields}
        details = known.get("details", {})
        if isinstance(details, dict):
            known["details"] = {**details, **extra}
        else:
            known["details"] = {**extra, "details": details}
        return known

    @property
    def name(self) -> str:
        return self.details.get("name") or self.id

    @property
    def context_length(self) -> int:
        return int(self.details.get("context_length") or 0)


class ModelsResponse(BaseModel):
    """Response from OpenRouter /models endpoint."""

    data: list[Model]


# Commonly used model slugs, for callers that want a quick sanity check.
# The client itself never checks model ids against this list.
KNOWN_MODELS: tuple[str, ...] = (
    "openai/gpt-4o",
    "openai/gpt-4o-mini",
    "openai/gpt-4-turbo",
    "openai/gpt-3.5-turbo",
    "anthropic/claude-3.5-sonnet",
    "anthropic/claude-3-opus",
    "anthropic/claude-3-haiku",
    "google/gemini-pro",
    "meta-llama/llama-3-70b-instruct",
    "mistralai/mistral-7b-instruct",
)


def is_known_model(model: str) -> bool:
    return model in KNOWN_MODELS
