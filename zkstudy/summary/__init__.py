"""
Summary agent for condensing research output.

Reads the research agent's analysis and produces the bullet-point digest
returned to the caller.
"""

from zkstudy.summary.config import SUMMARY_AGENT_SPEC, SUMMARY_MODEL

__all__ = ["SUMMARY_AGENT_SPEC", "SUMMARY_MODEL"]
