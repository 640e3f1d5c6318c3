"""
Research pipeline assembly.

Ties topic validation, the seed conversation and the orchestrator
together, and builds the default research -> summary pipeline.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from zkstudy.agent.runner import Agent, ModelAgent
from zkstudy.graph.config import DEFAULT_WORKFLOW, WorkflowConfig
from zkstudy.graph.orchestrator import run_pipeline
from zkstudy.research.config import RESEARCH_AGENT_SPEC
from zkstudy.shared.contracts.pipeline_result import PipelineResult
from zkstudy.shared.errors import TopicValidationError
from zkstudy.shared.llm.base import LanguageModel
from zkstudy.shared.llm.client import build_language_model
from zkstudy.shared.logging.debug_logger import get_or_create_logger, remove_logger
from zkstudy.shared.schemas.conversation import ConversationState, user_message
from zkstudy.shared.settings import Settings, get_settings
from zkstudy.summary.config import SUMMARY_AGENT_SPEC


logger = logging.getLogger(__name__)


def validate_topic(topic: Any, workflow: WorkflowConfig = DEFAULT_WORKFLOW) -> str:
    """
    Validate and normalize an inbound topic.

    Args:
        topic: Raw topic from the request
        workflow: Provides the allowed length range

    Returns:
        The trimmed topic

    Raises:
        TopicValidationError: If the topic is missing, not a string, or its
            trimmed length is outside [min_topic_length, max_topic_length]
    """
    if topic is None:
        raise TopicValidationError(["topic is required"])
    if not isinstance(topic, str):
        raise TopicValidationError([f"topic must be a string, got {type(topic).__name__}"])

    trimmed = topic.strip()
    if len(trimmed) < workflow.min_topic_length:
        raise TopicValidationError(
            [f"Topic must be at least {workflow.min_topic_length} characters long"]
        )
    if len(trimmed) > workflow.max_topic_length:
        raise TopicValidationError(
            [f"Topic must be at most {workflow.max_topic_length} characters long"]
        )
    return trimmed


def create_initial_state(
    topic: str,
    workflow: WorkflowConfig = DEFAULT_WORKFLOW,
    session_id: Optional[str] = None,
) -> ConversationState:
    """Seed a conversation with a single user message asking about `topic`."""
    return ConversationState(
        description=workflow.description,
        output_contract=workflow.output_contract,
        messages=[user_message(workflow.topic_template.format(topic=topic))],
        session_id=session_id,
    )


@dataclass(frozen=True)
class ResearchPipeline:
    """
    A configured pipeline: ordered agents plus workflow and deadline.

    Built once at startup and shared by all requests; every call to
    analyze() gets its own ConversationState.
    """

    agents: Tuple[Agent, ...]
    workflow: WorkflowConfig = DEFAULT_WORKFLOW
    deadline_seconds: float = 60.0
    debug_log_dir: Optional[str] = None

    async def analyze(
        self,
        topic: str,
        session_id: Optional[str] = None,
    ) -> Tuple[PipelineResult, ConversationState]:
        """
        Run the pipeline for an already validated topic.

        Args:
            topic: Validated topic
            session_id: Run identifier (generated if omitted)

        Returns:
            Tuple of (result, conversation). The conversation is returned
            for diagnostics only; on failure it holds the partial transcript.
        """
        session_id = session_id or str(uuid.uuid4())
        state = create_initial_state(topic, self.workflow, session_id)

        debug_logger = (
            get_or_create_logger(session_id, self.debug_log_dir) if self.debug_log_dir else None
        )
        start_time = time.perf_counter()
        try:
            result = await run_pipeline(self.agents, state, self.deadline_seconds)
        except Exception as e:
            if debug_logger:
                debug_logger.log_run_summary(
                    "error", (time.perf_counter() - start_time) * 1000, state.messages, str(e)
                )
            raise
        finally:
            remove_logger(session_id)

        if debug_logger:
            debug_logger.log_run_summary(
                result.outcome.value,
                (time.perf_counter() - start_time) * 1000,
                state.messages,
                result.detail,
            )
        return result, state


def build_default_pipeline(
    settings: Optional[Settings] = None,
    model: Optional[LanguageModel] = None,
    agents: Optional[Sequence[Agent]] = None,
) -> ResearchPipeline:
    """
    Build the research -> summary pipeline.

    Args:
        settings: Settings to use. Defaults to the process-wide settings.
        model: LanguageModel for both agents. Defaults to LLM_BACKEND's model.
        agents: Override the agent sequence entirely.

    Returns:
        Configured ResearchPipeline
    """
    settings = settings or get_settings()
    if agents is None:
        model = model or build_language_model(settings)
        agents = (
            ModelAgent(RESEARCH_AGENT_SPEC, model),
            ModelAgent(SUMMARY_AGENT_SPEC, model),
        )

    return ResearchPipeline(
        agents=tuple(agents),
        deadline_seconds=settings.deadline_seconds,
        debug_log_dir=settings.debug_log_dir,
    )
