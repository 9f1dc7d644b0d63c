"""Agent loop: the bounded research orchestration."""

import json
import re
from typing import Any

from loguru import logger

from researchbot.agent.context import ContextBuilder
from researchbot.agent.session import OrchestrationSession
from researchbot.agent.tools.registry import ToolRegistry
from researchbot.agent.tools.web import WebSearchTool
from researchbot.config.schema import Config
from researchbot.providers.base import LLMProvider
from researchbot.providers.ollama import OllamaProvider


class ResearchAgent:
    """
    The research agent drives one bounded conversation per query.

    It:
    1. Sends the query and the web_search tool to the LLM
    2. Executes the tool calls it asks for, at most ``max_tool_calls`` per query
    3. Feeds results back until the LLM answers without a tool call
    """

    def __init__(
        self,
        provider: LLMProvider,
        model: str | None = None,
        max_search_results: int = 5,
        max_tool_calls: int = 5,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        search_tool: WebSearchTool | None = None,
    ):
        self.provider = provider
        self.model = model or provider.get_default_model()
        self.max_search_results = max_search_results
        self.max_tool_calls = max_tool_calls
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.context = ContextBuilder()
        self.search_tool = search_tool or WebSearchTool(max_results=max_search_results)
        self.tools = ToolRegistry()
        self._register_default_tools()

    @classmethod
    def from_config(cls, config: Config) -> "ResearchAgent":
        """Build an agent talking to the Ollama server named in the config."""
        provider = OllamaProvider(
            api_base=config.ollama_api_base_url,
            default_model=config.ollama_model,
            timeout=config.request_timeout,
        )
        return cls(
            provider=provider,
            model=config.ollama_model,
            max_search_results=config.max_search_results,
            max_tool_calls=config.max_tool_calls,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    def _register_default_tools(self) -> None:
        """Register the default set of tools."""
        self.tools.register(self.search_tool)

    @staticmethod
    def _strip_think(text: str | None) -> str | None:
        """Remove <think>...</think> blocks that some models embed in content."""
        if not text:
            return None
        return re.sub(r"<think>[\s\S]*?</think>", "", text).strip() or None

    @staticmethod
    def _tool_hint(tool_calls: list) -> str:
        """Format tool calls as concise hint, e.g. 'web_search("query")'."""
        def _fmt(tc):
            val = next(iter(tc.arguments.values()), None) if tc.arguments else None
            if not isinstance(val, str):
                return tc.name
            return f'{tc.name}("{val[:40]}...")' if len(val) > 40 else f'{tc.name}("{val}")'
        return ", ".join(_fmt(tc) for tc in tool_calls)

    async def research(self, query: str) -> str:
        """
        Research a topic and return the model's summary.

        Tool failures are shown to the model as tool results. Provider errors
        propagate and end the request.
        """
        logger.info("Starting research task: {}", query)

        initial_messages = self.context.build_messages(query)
        final_content, tools_used = await self._run_agent_loop(initial_messages)
        if final_content is None:
            final_content = "I've completed processing but have no response to give."

        logger.info("Research completed ({} tool calls)", len(tools_used))
        return final_content

    async def quick_search(self, query: str) -> str:
        """Run the search tool directly, without the model. Search errors propagate."""
        logger.info("Performing quick search: {}", query)
        return await self.search_tool.execute(query=query)

    async def _run_agent_loop(
        self,
        initial_messages: list[dict[str, Any]],
    ) -> tuple[str | None, list[str]]:
        """
        Run the agent iteration loop.

        Once the tool budget is spent the LLM is called without tools so it has
        to answer. A model that keeps asking for tools anyway gets a fixed
        closing message.

        Args:
            initial_messages: Starting messages for the LLM conversation.

        Returns:
            Tuple of (final_content, list_of_tools_used).
        """
        messages = initial_messages
        session = OrchestrationSession(turn_cap=self.max_tool_calls)
        final_content = None
        tools_used: list[str] = []

        while True:
            response = await self.provider.chat(
                messages=messages,
                tools=None if session.exhausted else self.tools.get_definitions(),
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )

            if not response.has_tool_calls:
                final_content = self._strip_think(response.content)
                break

            if session.exhausted:
                logger.warning(
                    "Tool call limit ({}) reached, ignoring: {}",
                    session.turn_cap,
                    self._tool_hint(response.tool_calls),
                )
                final_content = (
                    self._strip_think(response.content)
                    or f"Reached {session.turn_cap} tool calls without a final answer."
                )
                break

            tool_call_dicts = [
                {
                    "id": tc.id,
                    "type": "function",
                    "function": {
                        "name": tc.name,
                        "arguments": json.dumps(tc.arguments, ensure_ascii=False),
                    },
                }
                for tc in response.tool_calls
            ]
            messages = self.context.add_assistant_message(
                messages,
                response.content,
                tool_call_dicts,
                reasoning_content=response.reasoning_content,
            )

            for tool_call in response.tool_calls:
                if session.exhausted:
                    result = (
                        f"Error: tool call limit of {session.turn_cap} reached; "
                        "answer with the results you already have."
                    )
                else:
                    session.record_tool_call()
                    tools_used.append(tool_call.name)
                    args_str = json.dumps(tool_call.arguments, ensure_ascii=False)
                    logger.info(
                        "Tool call {}/{}: {}({})",
                        session.turns_used,
                        session.turn_cap,
                        tool_call.name,
                        args_str[:200],
                    )
                    result = await self.tools.execute(tool_call.name, tool_call.arguments)
                messages = self.context.add_tool_result(
                    messages,
                    tool_call.id,
                    tool_call.name,
                    result,
                )

        return final_content, tools_used
