"""
Top-level pipeline graph.

Composes agents into a sequential pipeline under one deadline:
    topic -> research agent (fetch-news tool) -> summary agent -> done

The orchestrator owns one ConversationState per run and returns a
classified PipelineResult.
"""

from zkstudy.graph.build import create_pipeline_graph
from zkstudy.graph.orchestrator import run_pipeline
from zkstudy.graph.pipeline import (
    ResearchPipeline,
    build_default_pipeline,
    create_initial_state,
    validate_topic,
)

__all__ = [
    "create_pipeline_graph",
    "run_pipeline",
    "ResearchPipeline",
    "build_default_pipeline",
    "create_initial_state",
    "validate_topic",
]
