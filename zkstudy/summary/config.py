"""
Summary agent configuration.

The summary agent condenses the research analysis into a short digest.
It has no tools.
"""

from zkstudy.agent.spec import AgentSpec
from zkstudy.shared.llm.base import ModelBinding
from zkstudy.shared.llm.client import OPENAI_PROVIDER


SUMMARY_MODEL = ModelBinding(provider=OPENAI_PROVIDER, model_name="gpt-4o-mini")

SUMMARY_AGENT_SPEC = AgentSpec(
    name="Summary Agent",
    model=SUMMARY_MODEL,
    description="An AI writer that creates concise summaries from research analysis.",
    instructions=(
        "Review the research analysis provided",
        "Create a clear and concise summary",
        "Highlight the most important points",
        "Use bullet points for key takeaways",
    ),
)
