"""Contracts for X (Twitter) v2 recent search responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import PayloadModel


class PublicMetrics(PayloadModel):
    retweet_count: int = 0
    reply_count: int = 0
    like_count: int = 0
    quote_count: int = 0


class Tweet(PayloadModel):
    id: str
    text: str = ""
    created_at: Optional[datetime] = None
    public_metrics: PublicMetrics = Field(default_factory=PublicMetrics)


class XMeta(PayloadModel):
    newest_id: Optional[str] = None
    oldest_id: Optional[str] = None
    result_count: int = 0
    next_token: Optional[str] = None


class XProblem(PayloadModel):
    """Error object reported by the API inside a 200 response."""

    title: Optional[str] = None
    detail: Optional[str] = None
    type: Optional[str] = None


class XResponse(PayloadModel):
    data: Optional[List[Tweet]] = None
    meta: XMeta = Field(default_factory=XMeta)
    errors: List[XProblem] = Field(default_factory=list)

    @property
    def tweets(self) -> List[Tweet]:
        return self.data or []
