"""Context builder for assembling the research conversation."""

from typing import Any

RESEARCH_SYSTEM_PROMPT = """You are a helpful AI research assistant. Your job is to research topics and provide summaries.

IMPORTANT INSTRUCTIONS:
1. Use the web_search tool ONCE to find relevant information
2. After receiving search results, IMMEDIATELY synthesize them into a summary
3. Do NOT make multiple search requests - one search is enough
4. If the first search returns no results, try ONE simpler query, then summarize

Response format after receiving search results:
- **Overview**: Brief introduction to the topic
- **Key Sources Found**: List the URLs from the search
- **Summary**: What these sources likely cover, based on their titles/domains
- **Next Steps**: Suggest what the user might explore

Always provide a response after receiving search results. Do not keep searching indefinitely."""

RESEARCH_INSTRUCTION = (
    "Research the following topic. Use the web_search tool once to find current "
    "information, then provide a comprehensive summary with sources:\n\n{query}"
)


class ContextBuilder:
    """
    Builds the message list sent to the LLM.

    The instruction to search once is only a hint to the model; the agent
    enforces the real tool-call limit.
    """

    def __init__(self, system_prompt: str = RESEARCH_SYSTEM_PROMPT):
        self.system_prompt = system_prompt

    def build_messages(self, query: str) -> list[dict[str, Any]]:
        """Build the opening messages for a research request."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": RESEARCH_INSTRUCTION.format(query=query)},
        ]

    def add_assistant_message(
        self,
        messages: list[dict[str, Any]],
        content: str | None,
        tool_calls: list[dict[str, Any]] | None = None,
        reasoning_content: str | None = None,
    ) -> list[dict[str, Any]]:
        """Append an assistant message, with any tool calls it made."""
        msg: dict[str, Any] = {"role": "assistant", "content": content or ""}
        if tool_calls:
            msg["tool_calls"] = tool_calls
        if reasoning_content:
            msg["reasoning_content"] = reasoning_content
        messages.append(msg)
        return messages

    def add_tool_result(
        self,
        messages: list[dict[str, Any]],
        tool_call_id: str,
        tool_name: str,
        result: str,
    ) -> list[dict[str, Any]]:
        """Append the result of one tool call."""
        messages.append(
            {
                "role": "tool",
                "tool_call_id": tool_call_id,
                "name": tool_name,
                "content": result,
            }
        )
        return messages
