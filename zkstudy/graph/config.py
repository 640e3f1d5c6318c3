"""
Pipeline configuration.

Centralizes the workflow metadata, the topic rules and the graph limits.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WorkflowConfig:
    """
    Metadata of the research workflow.

    Attributes:
        description: Workflow description shown to every agent
        output_contract: What the workflow should produce
        topic_template: Template for the seed user message
        min_topic_length: Minimum trimmed topic length (inclusive)
        max_topic_length: Maximum trimmed topic length (inclusive)
    """

    description: str = "Discuss about Zero Knowledge Proof academic papers to generate Insight"
    output_contract: str = "A discussion based on papers and key insights"
    topic_template: str = "Analyze the latest papers about {topic}"
    min_topic_length: int = 3
    max_topic_length: int = 200


@dataclass
class PipelineGraphConfig:
    """
    Configuration for the pipeline graph.

    Attributes:
        recursion_limit: Maximum number of graph steps. None derives it
            from the number of agents.
        recursion_margin: Extra steps allowed on top of one per agent
    """

    recursion_limit: Optional[int] = None
    recursion_margin: int = 5

    def limit_for(self, agent_count: int) -> int:
        if self.recursion_limit is not None:
            return self.recursion_limit
        return agent_count + self.recursion_margin


# Default configuration instances
DEFAULT_WORKFLOW = WorkflowConfig()
DEFAULT_GRAPH_CONFIG = PipelineGraphConfig()
