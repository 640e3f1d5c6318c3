"""
Tools that agents may call during their turn.

DEFAULT_TOOLS is the process-wide registry; agents are configured with a
subset of it.
"""

from zkstudy.tools.registry import ToolRegistry, ToolSpec
from zkstudy.tools.fetch_news import FETCH_NEWS_TOOL, FetchNewsArgs

DEFAULT_TOOLS = ToolRegistry([FETCH_NEWS_TOOL])

__all__ = ["ToolRegistry", "ToolSpec", "FETCH_NEWS_TOOL", "FetchNewsArgs", "DEFAULT_TOOLS"]
