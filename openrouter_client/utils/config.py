import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

from openrouter_client.core.errors import ConfigError
from openrouter_client.models.config import OpenRouterConfig


API_KEY_VAR = "OPENROUTER_API_KEY"
SITE_URL_VAR = "OPENROUTER_SITE_URL"
SITE_NAME_VAR = "OPENROUTER_SITE_NAME"
BASE_URL_VAR = "OPENROUTER_BASE_URL"
TIMEOUT_VAR = "OPENROUTER_TIMEOUT"


def get_project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent.parent


def get_api_key(environ: Mapping[str, str] | None = None) -> str:
    """Get OpenRouter API key from environment."""
    if environ is None:
        environ = os.environ
    key = environ.get(API_KEY_VAR, "")
    if not key.strip():
        raise ConfigError(f"{API_KEY_VAR} environment variable is not set")
    return key


def resolve_from_environment(
    environ: Mapping[str, str] | None = None,
) -> OpenRouterConfig:
    """
    Build client configuration from environment variables.

    Args:
        environ: Mapping to read from, ``os.environ`` when omitted

    Returns:
        OpenRouterConfig with defaults for anything not set

    Raises:
        ConfigError: API key missing or an override is malformed
    """
    if environ is None:
        environ = os.environ

    config = OpenRouterConfig.new(get_api_key(environ))

    site_url = environ.get(SITE_URL_VAR) or None
    site_name = environ.get(SITE_NAME_VAR) or None
    if site_url or site_name:
        config = config.with_site_metadata(site_url, site_name)

    base_url = environ.get(BASE_URL_VAR)
    if base_url:
        config = config.with_base_url(base_url)

    timeout = environ.get(TIMEOUT_VAR)
    if timeout:
        try:
            seconds = float(timeout)
        except ValueError as e:
            raise ConfigError(f"{TIMEOUT_VAR} must be a number, got {timeout!r}") from e
        config = config.with_timeout(seconds)

    return config


def load_config(env_path: Path | None = None) -> OpenRouterConfig:
    """Load .env file into the environment, then resolve configuration."""
    if env_path is None:
        env_path = get_project_root() / ".env"

    # Variables already in the environment win over the file
    load_dotenv(env_path)

    return resolve_from_environment()
