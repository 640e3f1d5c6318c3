"""
Generic agent building blocks.

Role-specific agents (research, summary) are AgentSpec instances run by
ModelAgent.
"""

from zkstudy.agent.spec import AgentSpec
from zkstudy.agent.runner import Agent, ModelAgent

__all__ = ["AgentSpec", "Agent", "ModelAgent"]
