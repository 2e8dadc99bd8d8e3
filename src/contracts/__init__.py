"""Decoded payload contracts for every supported provider."""

from .common import PayloadModel
from .feeds import FeedChannel, FeedCollection, FeedFailure, FeedItem
from .gdelt import GdeltArticle, GdeltResponse
from .guardian import GuardianArticle, GuardianResponse, GuardianResult
from .newsapi import NewsAPIArticle, NewsAPIResponse, NewsAPISource
from .x import PublicMetrics, Tweet, XMeta, XProblem, XResponse

__all__ = [
    "FeedChannel",
    "FeedCollection",
    "FeedFailure",
    "FeedItem",
    "GdeltArticle",
    "GdeltResponse",
    "GuardianArticle",
    "GuardianResponse",
    "GuardianResult",
    "NewsAPIArticle",
    "NewsAPIResponse",
    "NewsAPISource",
    "PayloadModel",
    "PublicMetrics",
    "Tweet",
    "XMeta",
    "XProblem",
    "XResponse",
]
