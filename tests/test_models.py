import pytest
from pydantic import ValidationError

from openrouter_client.core.message_builder import build_chat_request, build_messages
from openrouter_client.models.openrouter import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    Message,
    ModelsResponse,
    is_known_model,
)


def test_message_creation():
    assert Message.user("Hello").model_dump() == {"role": "user", "content": "Hello"}
    assert Message.assistant("Hi there!").model_dump() == {"role": "assistant", "content": "Hi there!"}
    assert Message.system("You are helpful").model_dump() == {"role": "system", "content": "You are helpful"}


def test_message_content_passthrough():
    assert Message.user("  keep  spacing \n").content == "  keep  spacing \n"


def test_message_rejects_unknown_role():
    with pytest.raises(ValidationError):
        Message(role="tool", content="x")


def test_request_with_optional_fields():
    request = (
        ChatCompletionRequest.new("test-model", [Message.user("Test message")])
        .with_max_tokens(100)
        .with_temperature(0.7)
        .with_stream(False)
    )

    assert request.to_payload() == {
        "model": "test-model",
        "messages": [{"role": "user", "content": "Test message"}],
        "max_tokens": 100,
        "temperature": 0.7,
        "stream": False,
    }


def test_request_omits_unset_fields():
    payload = ChatCompletionRequest.new("test-model", [Message.user("hi")]).to_payload()

    assert set(payload) == {"model", "messages"}


def test_request_builders_return_copies():
    request = ChatCompletionRequest.new("test-model", [Message.user("hi")])
    limited = request.with_max_tokens(10)

    assert limited is not request
    assert request.max_tokens is None
    assert limited.max_tokens == 10


def test_response_parsing_with_usage_and_extra_fields():
    body = """
    {
        "id": "gen-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "openai/gpt-4o",
        "provider": "OpenAI",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": "Hi"}, "finish_reason": "stop"}
        ],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4}
    }
    """
    response = ChatCompletionResponse.model_validate_json(body)

    assert response.choices[0].message.content == "Hi"
    assert response.choices[0].finish_reason == "stop"
    assert response.usage.total_tokens == 4
    assert response.model_extra == {"provider": "OpenAI"}


def test_response_usage_optional_and_choices_may_be_empty():
    response = ChatCompletionResponse.model_validate(
        {"id": "gen-2", "model": "m", "choices": []}
    )

    assert response.usage is None
    assert response.choices == []


def test_usage_rejects_negative_counts():
    with pytest.raises(ValidationError):
        ChatCompletionResponse.model_validate({
            "id": "gen-3",
            "model": "m",
            "choices": [],
            "usage": {"prompt_tokens": -1, "completion_tokens": 0, "total_tokens": 0},
        })


def test_models_response_keeps_additional_fields():
    models = ModelsResponse.model_validate({
        "data": [
            {
                "id": "openai/gpt-4o",
                "object": "model",
                "owned_by": "openai",
                "name": "GPT-4o",
                "context_length": 128000,
                "pricing": {"prompt": "0.000005"},
            },
            {"id": "mistralai/mistral-7b-instruct"},
        ]
    })

    first, second = models.data
    assert first.owned_by == "openai"
    assert first.details == {
        "name": "GPT-4o",
        "context_length": 128000,
        "pricing": {"prompt": "0.000005"},
    }
    assert first.name == "GPT-4o"
    assert first.context_length == 128000
    assert second.details == {}
    assert second.name == "mistralai/mistral-7b-instruct"
    assert second.context_length == 0


def test_known_models():
    assert is_known_model("openai/gpt-4o")
    assert not is_known_model("nobody/nothing")


def test_build_messages():
    assert build_messages("question") == [Message.user("question")]
    assert build_messages("question", system_prompt="be brief") == [
        Message.system("be brief"),
        Message.user("question"),
    ]


def test_build_chat_request_threads_parameters():
    messages = [Message.user("hi")]

    plain = build_chat_request("m", messages)
    tuned = build_chat_request("m", messages, temperature=0.2, max_tokens=50)

    assert plain.to_payload() == {"model": "m", "messages": [{"role": "user", "content": "hi"}]}
    assert tuned.temperature == 0.2
    assert tuned.max_tokens == 50
    assert tuned.stream is None


def test_response_with_only_choices():
    response = ChatCompletionResponse.model_validate_json(
        '{"choices": [{"message": {"role": "assistant", "content": "Hi"}}]}'
    )

    assert response.id == ""
    assert response.model == ""
    assert response.usage is None
    assert response.choices[0].index == 0
    assert response.choices[0].message.content == "Hi"
