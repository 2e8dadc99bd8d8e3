"""Normalized view of a parsed RSS/Atom feed."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import PayloadModel


class FeedItem(PayloadModel):
    """Single feed entry reduced to the fields shown in reports."""

    title: str = ""
    link: str = ""
    published: str = ""
    description: str = ""
    categories: List[str] = Field(default_factory=list)
    author: Optional[str] = None
    image: Optional[str] = None
    enclosure: Optional[str] = None


class FeedChannel(PayloadModel):
    url: str
    title: str = ""
    description: str = ""
    items: List[FeedItem] = Field(default_factory=list)


class FeedFailure(PayloadModel):
    """A feed that could not be read; the rest of the run continues."""

    url: str
    error: str


class FeedCollection(PayloadModel):
    """Result of reading every configured feed once."""

    channels: List[FeedChannel] = Field(default_factory=list)
    failures: List[FeedFailure] = Field(default_factory=list)

    @property
    def items(self) -> List[FeedItem]:
        return [item for channel in self.channels for item in channel.items]

    @property
    def ok(self) -> bool:
        return not self.failures
