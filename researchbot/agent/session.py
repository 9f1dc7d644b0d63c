"""Per-request orchestration state."""

from dataclasses import dataclass


@dataclass
class OrchestrationSession:
    """
    Tool-call budget for one research request.

    Created when a request starts and dropped when it finishes; nothing here
    outlives the request.
    """

    turn_cap: int = 5
    turns_used: int = 0

    @property
    def remaining(self) -> int:
        return max(self.turn_cap - self.turns_used, 0)

    @property
    def exhausted(self) -> bool:
        return self.turns_used >= self.turn_cap

    def record_tool_call(self) -> None:
        """Consume one tool call from the budget."""
        if self.exhausted:
            raise RuntimeError(f"tool call budget of {self.turn_cap} already used")
        self.turns_used += 1
