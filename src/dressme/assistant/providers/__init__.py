from .openai import OpenAIAssistantClient

__all__ = ["OpenAIAssistantClient"]
