from typing import Any

from .base import AssistantClient
from .providers import OpenAIAssistantClient


def create_assistant_client(provider: str = "openai", **config: Any) -> AssistantClient:
    """Create a remote assistant client.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (currently only 'openai')
        **config: Provider-specific configuration
            For OpenAI:
                - api_key: str (required)
                - vision_model: str (default: 'gpt-4o-mini')
                - chat_model: str (default: 'gpt-4o-mini')
                - speech_model: str (default: 'gpt-4o-mini-tts')
                - base_url: str | None
                - request_timeout: float (default: 30)
                - resource_timeout: float (default: 60)

    Returns:
        Initialized assistant client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_assistant_client("openai", api_key="sk-...")
    """
    provider_lower = provider.lower()

    if provider_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIAssistantClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai'"
    )
