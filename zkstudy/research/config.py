"""
Research agent configuration.

The research agent fetches source articles for the requested topic and
analyzes them for the summary agent.
"""

from zkstudy.agent.spec import AgentSpec
from zkstudy.shared.llm.base import ModelBinding
from zkstudy.shared.llm.client import OPENAI_PROVIDER
from zkstudy.tools import DEFAULT_TOOLS


RESEARCH_MODEL = ModelBinding(provider=OPENAI_PROVIDER, model_name="gpt-4o-mini")

RESEARCH_AGENT_SPEC = AgentSpec(
    name="Research Agent",
    model=RESEARCH_MODEL,
    description="An AI researcher that fetches and analyzes news articles.",
    instructions=(
        "Use the fetch-news tool to get articles about the requested topic",
        "Analyze the content of the articles",
        "Identify key trends and insights",
        "Reference the titles of the articles you rely on",
    ),
    tools=DEFAULT_TOOLS.subset(["fetch-news"]),
)
