import asyncio
import sys

from openrouter_client.core.errors import ConfigError, OpenRouterError
from openrouter_client.core.openrouter import OpenRouterClient
from openrouter_client.models.config import OpenRouterConfig
from openrouter_client.models.openrouter import Message
from openrouter_client.utils.config import load_config
from openrouter_client.utils.logging import setup_logging


DEMO_MODEL = "openai/gpt-3.5-turbo"


async def run_demo(client: OpenRouterClient) -> None:
    print("Fetching available models...")
    try:
        models = await client.list_models()
        print("Available models (showing first 5):")
        for i, model in enumerate(models.data[:5], start=1):
            print(f"  {i}. {model.id} ({model.name})")
    except OpenRouterError as e:
        print(f"Failed to list models: {e}")

    print(f"\nSending a simple message to {DEMO_MODEL}...")
    try:
        reply = await client.send_message(DEMO_MODEL, "Tell me a fun fact about Python.")
        print(f"Response: {reply}")
    except OpenRouterError as e:
        print(f"Failed to send message: {e}")

    print(f"\nSending a conversation to {DEMO_MODEL}...")
    messages = [
        Message.system("You are a helpful assistant that explains programming concepts clearly."),
        Message.user("What is async programming in Python?"),
        Message.assistant("Async programming lets one thread interleave many waiting tasks..."),
        Message.user("Can you give me a simple example?"),
    ]
    try:
        reply = await client.send_conversation(DEMO_MODEL, messages, temperature=0.7, max_tokens=300)
        print(f"Response: {reply}")
    except OpenRouterError as e:
        print(f"Failed to send conversation: {e}")


def main() -> None:
    """Entry point for the OpenRouter client demo."""
    setup_logging()

    try:
        config = load_config()
    except ConfigError:
        if len(sys.argv) < 2:
            print("OPENROUTER_API_KEY is not set; pass the API key as the first argument.")
            sys.exit(1)
        config = OpenRouterConfig.new(sys.argv[1]).with_timeout(60)

    async def _run() -> None:
        async with OpenRouterClient(config) as client:
            await run_demo(client)

    asyncio.run(_run())


if __name__ == "__main__":
    main()
