"""Agent tools module."""

from researchbot.agent.tools.base import Tool
from researchbot.agent.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolRegistry"]
