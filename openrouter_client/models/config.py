from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from openrouter_client.core.errors import ConfigError


DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT_SEC = 30.0


class OpenRouterConfig(BaseModel):
    """Connection settings for one client. Immutable; use the ``with_*`` methods."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1)
    timeout_sec: float = Field(default=DEFAULT_TIMEOUT_SEC, gt=0)
    site_url: str | None = None
    site_name: str | None = None

    @classmethod
    def new(cls, api_key: str) -> "OpenRouterConfig":
        """Create config for ``api_key`` with default base URL and timeout."""
        _check_api_key(api_key)
        return cls(api_key=SecretStr(api_key))

    def with_base_url(self, url: str) -> "OpenRouterConfig":
        return self._replace(base_url=url.rstrip("/"))

    def with_timeout(self, seconds: float) -> "OpenRouterConfig":
        return self._replace(timeout_sec=seconds)

    def with_site_metadata(
        self, url: str | None, name: str | None
    ) -> "OpenRouterConfig":
        """Set the ``HTTP-Referer`` / ``X-Title`` values sent with requests."""
        _check_header_value("site URL", url)
        _check_header_value("site name", name)
        return self._replace(site_url=url, site_name=name)

    @property
    def masked_api_key(self) -> str:
        # Show only last 4 characters
        key = self.api_key.get_secret_value()
        return f"sk-or-...{key[-4:]}" if len(key) > 4 else "****"

    def _replace(self, **changes) -> "OpenRouterConfig":
        try:
            return type(self).model_validate({**self.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def _check_api_key(api_key: str) -> None:
    if not api_key or not api_key.strip():
        raise ConfigError("API key is empty")
    if any(ch.isspace() for ch in api_key) or not api_key.isascii():
        raise ConfigError("API key contains characters not allowed in a header")


def _check_header_value(label: str, value: str | None) -> None:
    if value is None:
        return
    if not value.isascii() or any(ch in value for ch in "\r\n\0"):
        raise ConfigError(f"Invalid {label}: {value!r} cannot be sent as a header value")
