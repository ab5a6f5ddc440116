from openrouter_client.models.openrouter import ChatCompletionRequest, Message


def build_messages(user_prompt: str, system_prompt: str = "") -> list[Message]:
    """Build message list: optional system prompt followed by the user prompt."""
    messages: list[Message] = []

    # Add system message if provided
    if system_prompt:
        messages.append(Message.system(system_prompt))

    messages.append(Message.user(user_prompt))
    return messages


def build_chat_request(
    model: str,
    messages: list[Message],
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> ChatCompletionRequest:
    """
    Build ChatCompletionRequest from messages and optional sampling parameters.

    Args:
        model: Model slug (e.g., 'anthropic/claude-3.5-sonnet')
        messages: Conversation, passed through as given
        temperature: Sampling temperature, omitted from the body when None
        max_tokens: Completion length limit, omitted from the body when None

    Returns:
        ChatCompletionRequest ready to send to OpenRouter API
    """
    request = ChatCompletionRequest.new(model, messages)

    if temperature is not None:
        request = request.with_temperature(temperature)
    if max_tokens is not None:
        request = request.with_max_tokens(max_tokens)

    return request
