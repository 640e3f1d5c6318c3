"""
Agent specification.

An AgentSpec is pure data: who the agent is, which model it talks to,
how it should behave, and which tools it may call.
"""

from dataclasses import dataclass, field
from typing import Tuple

from zkstudy.shared.llm.base import ModelBinding
from zkstudy.tools.registry import ToolRegistry


@dataclass(frozen=True)
class AgentSpec:
    """
    Immutable configuration of one agent role.

    Attributes:
        name: Display name, also used as origin_agent on produced messages
        model: Provider/model binding
        description: One-line description of the role
        instructions: Ordered behavioral instructions
        tools: Tools this agent is allowed to call
    """

    name: str
    model: ModelBinding
    description: str
    instructions: Tuple[str, ...] = ()
    tools: ToolRegistry = field(default_factory=ToolRegistry)

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("AgentSpec.name must not be empty")
        # Accept lists from callers but store an immutable tuple
        object.__setattr__(self, "instructions", tuple(self.instructions))
