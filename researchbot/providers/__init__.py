"""LLM provider abstraction module."""

from researchbot.providers.base import LLMProvider, LLMResponse, ToolCallRequest
from researchbot.providers.ollama import OllamaProvider

__all__ = ["LLMProvider", "LLMResponse", "OllamaProvider", "ToolCallRequest"]
