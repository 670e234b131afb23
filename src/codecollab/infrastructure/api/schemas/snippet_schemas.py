"""Pydantic schemas for snippet endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from codecollab.infrastructure.api.schemas.common import CamelModel


class SnippetAuthor(CamelModel):
    """The public fields of a snippet's author."""

    id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None


class ReviewCount(BaseModel):
    """Related-row counts shown with a snippet.

    Reviews are not stored by this service, so the count is always 0.
    """

    reviews: int = 0


class SnippetResponse(CamelModel):
    """Public view of a snippet."""

    id: str
    title: str
    description: Optional[str] = None
    content: str
    language: str
    tags: list[str]
    is_public: bool
    views: int
    likes: int
    author_id: str
    author: Optional[SnippetAuthor] = None
    created_at: datetime
    updated_at: datetime
    count: ReviewCount = Field(default_factory=ReviewCount, alias="_count")


class PaginationResponse(CamelModel):
    """Page metadata."""

    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class SnippetData(BaseModel):
    """``data`` payload carrying one snippet."""

    snippet: SnippetResponse


class SnippetListData(BaseModel):
    """``data`` payload of the search endpoint."""

    snippets: list[SnippetResponse]
    pagination: PaginationResponse


class SnippetCountData(BaseModel):
    """``data`` payload of the unpaginated lists: public feed and per-user."""

    snippets: list[SnippetResponse]
    count: int
