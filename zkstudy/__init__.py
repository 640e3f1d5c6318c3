"""
ZK Study agents package.

This package contains:
- shared/: Common infrastructure (LLM client, logging, settings, contracts, schemas)
- tools/: Tool registry and the fetch-news tool
- agent/: Generic agent spec and turn execution
- research/: Research agent configuration
- summary/: Summary agent configuration
- graph/: Pipeline orchestrator (research -> summary) and the HTTP boundary
"""

from zkstudy.graph.orchestrator import run_pipeline
from zkstudy.graph.pipeline import build_default_pipeline

__all__ = ["run_pipeline", "build_default_pipeline"]
