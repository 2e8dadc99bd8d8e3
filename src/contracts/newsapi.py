"""Contracts for NewsAPI /v2/everything responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import PayloadModel


class NewsAPISource(PayloadModel):
    id: Optional[str] = None
    name: Optional[str] = None


class NewsAPIArticle(PayloadModel):
    """One article as returned by NewsAPI."""

    source: NewsAPISource = Field(default_factory=NewsAPISource)
    author: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    content: Optional[str] = None


class NewsAPIResponse(PayloadModel):
    """Envelope of a NewsAPI search.

    Error payloads carry ``status="error"`` together with ``code`` and
    ``message`` instead of articles.
    """

    status: str
    total_results: int = Field(default=0, alias="totalResults")
    articles: List[NewsAPIArticle] = Field(default_factory=list)
    code: Optional[str] = None
    message: Optional[str] = None
