"""
Deterministic stand-in for the language model.

Produces fixed, contextually aware replies so the pipeline can run end
to end without network access (LLM_BACKEND=fixture) and so tests get
byte-identical output across runs.
"""

import json
from typing import Any, Dict, List

from zkstudy.shared.llm.base import ModelBinding, ModelReply, ToolCallRequest


class FixtureLanguageModel:
    """
    Rule-based LanguageModel.

    - With tools available and no tool results yet in this turn: requests
      the first tool with the user's request as topic.
    - With tool results in this turn: writes an analysis listing every
      returned article.
    - Without tools: condenses the bullet lines of the latest message into
      key takeaways.
    """

    def __init__(self, default_limit: int = 3):
        self.default_limit = default_limit

    async def generate(
        self,
        binding: ModelBinding,
        messages: List[Dict[str, Any]],
        tools: List[Dict[str, Any]],
    ) -> ModelReply:
        tool_results = [m["content"] for m in messages if m.get("role") == "tool"]

        if tools and not tool_results:
            return ModelReply(
                tool_calls=[
                    ToolCallRequest(
                        id="call_1",
                        name=tools[0]["function"]["name"],
                        arguments=json.dumps(
                            {"topic": _first_user_content(messages), "limit": self.default_limit}
                        ),
                    )
                ]
            )

        if tool_results:
            return ModelReply(content=_analyze(tool_results))

        return ModelReply(content=_summarize(messages))


def _first_user_content(messages: List[Dict[str, Any]]) -> str:
    for message in messages:
        if message.get("role") == "user":
            return message["content"]
    return ""


def _analyze(tool_results: List[str]) -> str:
    articles = []
    for raw in tool_results:
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, list):
            articles.extend(a for a in parsed if isinstance(a, dict))

    if not articles:
        return "Research analysis: no source material was returned."

    lines = [f"Research analysis of {len(articles)} sources:"]
    for article in articles:
        lines.append(f"- {article.get('title', 'Untitled')}: {article.get('content', '')}")
    lines.append(
        "Key trends: " + "; ".join(a.get("title", "Untitled") for a in articles) + "."
    )
    return "\n".join(lines)


def _summarize(messages: List[Dict[str, Any]]) -> str:
    source = ""
    for message in reversed(messages):
        if message.get("role") != "system" and message.get("content"):
            source = message["content"]
            break

    bullets = [
        line.strip()[2:].split(":", 1)[0]
        for line in source.splitlines()
        if line.strip().startswith("- ")
    ]
    if not bullets:
        return "Summary:\n- No key points were identified."

    return "Summary of key takeaways:\n" + "\n".join(f"- {b}" for b in bullets)
