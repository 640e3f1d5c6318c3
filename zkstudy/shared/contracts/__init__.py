"""Contracts handed from the orchestrator to the request boundary."""

from zkstudy.shared.contracts.pipeline_result import PipelineOutcome, PipelineResult

__all__ = ["PipelineOutcome", "PipelineResult"]
