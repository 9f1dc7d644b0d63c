"""Agent core module."""

from researchbot.agent.context import ContextBuilder
from researchbot.agent.loop import ResearchAgent
from researchbot.agent.session import OrchestrationSession

__all__ = ["ContextBuilder", "OrchestrationSession", "ResearchAgent"]
