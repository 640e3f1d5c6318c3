"""
Research agent for gathering source material.

Calls the fetch-news tool for the requested topic and produces an
analysis of the returned articles for the summary agent.
"""

from zkstudy.research.config import RESEARCH_AGENT_SPEC, RESEARCH_MODEL

__all__ = ["RESEARCH_AGENT_SPEC", "RESEARCH_MODEL"]
