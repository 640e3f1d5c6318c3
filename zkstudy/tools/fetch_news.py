"""
fetch-news tool.

Returns source articles about a topic for the research agent. Backed by
fixture data; results are deterministic for a given limit.
"""

import json
import logging

from pydantic import BaseModel, Field, StrictInt

from zkstudy.tools.mock_data import get_mock_articles
from zkstudy.tools.registry import ToolSpec


logger = logging.getLogger(__name__)


MAX_ARTICLES = 10


class FetchNewsArgs(BaseModel):
    """Arguments accepted by fetch-news."""

    topic: str = Field(min_length=1, description="The topic to search for")
    limit: StrictInt = Field(
        default=3, ge=1, le=MAX_ARTICLES, description="Number of articles to fetch"
    )


def fetch_news(args: FetchNewsArgs) -> str:
    """
    Fetch articles about a topic.

    Args:
        args: Validated tool arguments

    Returns:
        JSON array of {title, content} objects
    """
    articles = get_mock_articles(args.limit)
    logger.info(
        f"[tool=fetch-news] Returning {len(articles)} articles | "
        f"topic={args.topic!r}, limit={args.limit}"
    )
    return json.dumps(articles)


FETCH_NEWS_TOOL = ToolSpec(
    id="fetch-news",
    description="Fetch the latest news articles about a given topic",
    input_schema=FetchNewsArgs,
    execute=fetch_news,
)
