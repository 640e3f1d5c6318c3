"""
Prompt builders for agents.

These functions turn an AgentSpec and the conversation history into the
chat messages sent to the model.
"""

from typing import Any, Dict, List

from zkstudy.agent.spec import AgentSpec
from zkstudy.shared.schemas.conversation import ConversationState, Message, MessageRole


def build_system_prompt(spec: AgentSpec, state: ConversationState) -> str:
    """
    Build the system prompt for an agent's turn.

    Args:
        spec: Agent configuration
        state: Conversation state (for workflow description and output contract)

    Returns:
        System prompt text
    """
    sections = [
        f"You are {spec.name}. {spec.description}",
        f"Workflow: {state.description}\nExpected workflow output: {state.output_contract}",
    ]

    if spec.instructions:
        numbered = "\n".join(f"{i}. {text}" for i, text in enumerate(spec.instructions, 1))
        sections.append(f"Instructions:\n{numbered}")

    if len(spec.tools):
        listed = "\n".join(f"- {tool.id}: {tool.description}" for tool in spec.tools.values())
        sections.append(f"Available tools:\n{listed}")

    return "\n\n".join(sections)


def render_history_message(spec: AgentSpec, message: Message) -> Dict[str, Any]:
    """
    Render one conversation message as a chat message for `spec`'s model.

    The agent's own earlier output is an assistant turn; everything else
    (user requests, other agents' output, earlier tool results) is shown
    as user input labeled with its origin.
    """
    if message.role == MessageRole.USER:
        return {"role": "user", "content": message.content}

    if message.role == MessageRole.AGENT:
        if message.origin_agent == spec.name:
            return {"role": "assistant", "content": message.content}
        return {
            "role": "user",
            "content": f"Message from {message.origin_agent or 'another agent'}:\n{message.content}",
        }

    return {
        "role": "user",
        "content": f"Tool output received by {message.origin_agent or 'an agent'}:\n{message.content}",
    }


def build_chat_messages(spec: AgentSpec, state: ConversationState) -> List[Dict[str, Any]]:
    """Build the full chat message list for the start of an agent's turn."""
    messages: List[Dict[str, Any]] = [
        {"role": "system", "content": build_system_prompt(spec, state)}
    ]
    messages.extend(render_history_message(spec, m) for m in state.messages)
    return messages
