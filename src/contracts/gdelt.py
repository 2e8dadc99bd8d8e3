"""Contracts for GDELT DOC 2.0 ``artlist`` responses."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import PayloadModel


class GdeltArticle(PayloadModel):
    url: Optional[str] = None
    url_mobile: Optional[str] = None
    title: Optional[str] = None
    # seendate keeps GDELT's compact form, e.g. 20230514T101500Z
    seen_date: Optional[str] = Field(default=None, alias="seendate")
    social_image: Optional[str] = Field(default=None, alias="socialimage")
    domain: Optional[str] = None
    language: Optional[str] = None
    source_country: Optional[str] = Field(default=None, alias="sourcecountry")


class GdeltResponse(PayloadModel):
    """GDELT answers ``{}`` when nothing matches, hence the empty default."""

    articles: List[GdeltArticle] = Field(default_factory=list)
