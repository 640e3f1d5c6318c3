"""
Shared infrastructure for all agents.

Modules:
- llm: Language model interface, OpenAI client, fixture model
- logging: Log configuration and per-run debug logs
- contracts: Pipeline result contract
- schemas: Conversation state
- settings: Process-wide configuration
- errors: Error taxonomy
"""

from zkstudy.shared.errors import (
    ConversationClosedError,
    ModelError,
    ModelErrorKind,
    ToolError,
    ToolErrorKind,
    TopicValidationError,
)
from zkstudy.shared.settings import Settings, get_settings, load_settings

__all__ = [
    "ConversationClosedError",
    "ModelError",
    "ModelErrorKind",
    "ToolError",
    "ToolErrorKind",
    "TopicValidationError",
    "Settings",
    "get_settings",
    "load_settings",
]
