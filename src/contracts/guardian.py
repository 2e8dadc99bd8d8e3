"""Contracts for The Guardian content API search responses."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import PayloadModel


class GuardianArticle(PayloadModel):
    id: str = ""
    type: Optional[str] = None
    section_id: Optional[str] = Field(default=None, alias="sectionId")
    section_name: Optional[str] = Field(default=None, alias="sectionName")
    web_title: Optional[str] = Field(default=None, alias="webTitle")
    web_url: Optional[str] = Field(default=None, alias="webUrl")
    web_publication_date: Optional[datetime] = Field(
        default=None, alias="webPublicationDate"
    )


class GuardianResult(PayloadModel):
    """Contents of the ``response`` object."""

    status: str
    total: int = 0
    page_size: int = Field(default=0, alias="pageSize")
    current_page: int = Field(default=0, alias="currentPage")
    pages: int = 0
    results: List[GuardianArticle] = Field(default_factory=list)
    message: Optional[str] = None


class GuardianResponse(PayloadModel):
    response: GuardianResult
