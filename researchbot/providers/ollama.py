"""Ollama provider using the native /api/chat endpoint."""

import json
from typing import Any

import httpx
import json_repair
from loguru import logger

from researchbot.providers.base import LLMProvider, LLMResponse, ToolCallRequest
from researchbot.providers.errors import ModelNotFoundError, ProviderConnectionError, ProviderError

DEFAULT_API_BASE = "http://localhost:11434"
DEFAULT_MODEL = "llama3.2"


class OllamaProvider(LLMProvider):
    """
    LLM provider backed by a local Ollama server.

    Messages are kept in the OpenAI-style shape the agent builds and converted
    to Ollama's shape on the way out: tool-call arguments become objects and
    tool results carry ``tool_name``.
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        default_model: str = DEFAULT_MODEL,
        timeout: float = 120.0,
    ):
        super().__init__(api_key=None, api_base=api_base.rstrip("/"))
        self.default_model = default_model
        self.timeout = timeout

    def get_default_model(self) -> str:
        return self.default_model

    async def chat(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> LLMResponse:
        model = model or self.default_model
        payload: dict[str, Any] = {
            "model": model,
            "messages": [self._to_ollama_message(m) for m in messages],
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        if tools:
            payload["tools"] = tools

        url = f"{self.api_base}/api/chat"
        logger.debug("Ollama chat: model={} messages={} tools={}", model, len(messages), len(tools or []))
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, json=payload, timeout=self.timeout)
        except httpx.ConnectError as e:
            raise ProviderConnectionError(self.api_base) from e
        except httpx.TimeoutException as e:
            raise ProviderError(f"Ollama request timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            raise ProviderError(f"Ollama request failed: {e}") from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise ModelNotFoundError(model)
        if not response.is_success:
            detail = self._error_detail(response)
            if "not found" in detail.lower() and "model" in detail.lower():
                raise ModelNotFoundError(model)
            raise ProviderError(f"Ollama returned HTTP {response.status_code}: {detail}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Ollama returned invalid JSON: {e}") from e
        return self._parse_response(data)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(data, dict) and data.get("error"):
            return str(data["error"])
        return response.text[:200]

    @staticmethod
    def _to_ollama_message(message: dict[str, Any]) -> dict[str, Any]:
        converted: dict[str, Any] = {
            "role": message["role"],
            "content": message.get("content") or "",
        }
        if message["role"] == "tool" and message.get("name"):
            converted["tool_name"] = message["name"]

        tool_calls = message.get("tool_calls")
        if tool_calls:
            converted["tool_calls"] = []
            for call in tool_calls:
                function = call.get("function", {})
                arguments = function.get("arguments") or {}
                if isinstance(arguments, str):
                    arguments = json.loads(arguments) if arguments.strip() else {}
                converted["tool_calls"].append(
                    {"function": {"name": function.get("name", ""), "arguments": arguments}}
                )
        return converted

    @staticmethod
    def _parse_response(data: dict[str, Any]) -> LLMResponse:
        message = data.get("message") or {}

        tool_calls: list[ToolCallRequest] = []
        for index, call in enumerate(message.get("tool_calls") or []):
            function = call.get("function") or {}
            arguments = function.get("arguments") or {}
            # Some models emit arguments as a (possibly malformed) JSON string.
            if isinstance(arguments, str):
                arguments = json_repair.loads(arguments) if arguments.strip() else {}
            if not isinstance(arguments, dict):
                arguments = {}
            tool_calls.append(
                ToolCallRequest(
                    id=call.get("id") or f"call_{index}",
                    name=function.get("name", ""),
                    arguments=arguments,
                )
            )

        usage = {
            "prompt_tokens": int(data.get("prompt_eval_count") or 0),
            "completion_tokens": int(data.get("eval_count") or 0),
        }
        usage["total_tokens"] = usage["prompt_tokens"] + usage["completion_tokens"]

        return LLMResponse(
            content=message.get("content") or None,
            tool_calls=tool_calls,
            finish_reason=data.get("done_reason") or "stop",
            usage=usage,
            reasoning_content=message.get("thinking") or None,
        )
