class OpenRouterError(Exception):
    """OpenRouter client error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(OpenRouterError):
    """Required credential missing or malformed."""


class RequestError(OpenRouterError):
    """Transport-level failure: connect, DNS, TLS, timeout."""


class ApiError(OpenRouterError):
    """OpenRouter answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"OpenRouter API error ({status_code}): {body}", status_code=status_code)
        self.body = body


class SerializationError(OpenRouterError):
    """Successful response whose body could not be parsed."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message, status_code=status_code)
        self.body = body


class NoChoices(OpenRouterError):
    """Completion response contained no choices."""

    def __init__(self, message: str = "No response choices available"):
        super().__init__(message)
