"""Snippet service for business logic.

Every read and write goes through the OwnershipPolicy after the snippet is
loaded: absent snippets are 404, present but inaccessible ones are 403.
"""

from dataclasses import dataclass
from math import ceil
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from codecollab.core.logging import get_logger
from codecollab.domain.exceptions import NotFoundError
from codecollab.domain.services.ownership_policy import OwnershipPolicy
from codecollab.domain.services.snippet_validator import (
    SnippetCreateInput,
    SnippetQuery,
    SnippetUpdateInput,
)
from codecollab.infrastructure.persistence.models import SnippetModel
from codecollab.infrastructure.persistence.repositories import (
    SnippetRepository,
    UserRepository,
)

logger = get_logger(__name__)


@dataclass
class Pagination:
    """Page metadata for list responses."""

    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = ceil(total_count / limit) if total_count else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        )


@dataclass
class SnippetPage:
    """One page of search results."""

    snippets: list[SnippetModel]
    pagination: Pagination


class SnippetService:
    """Service for snippet management business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the snippet service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.snippet_repo = SnippetRepository(session)
        self.user_repo = UserRepository(session)
        self.policy = OwnershipPolicy()

    async def create(self, data: SnippetCreateInput, author_id: str) -> SnippetModel:
        """Create a snippet owned by ``author_id``.

        Raises:
            NotFoundError: If the author no longer exists.
        """
        if await self.user_repo.get_by_id(author_id) is None:
            raise NotFoundError("User not found")

        snippet = SnippetModel(
            title=data.title,
            description=data.description,
            content=data.content,
            language=data.language,
            tags=list(data.tags),
            is_public=data.is_public,
            author_id=author_id,
        )
        await self.snippet_repo.create(snippet)
        await self.session.commit()

        logger.info("Snippet created", snippet_id=snippet.id, author_id=author_id)
        return await self._load(snippet.id)

    async def get(self, snippet_id: str, caller_id: Optional[str]) -> SnippetModel:
        """Read a snippet, counting the view when the caller is not the author.

        Args:
            snippet_id: Snippet ID.
            caller_id: Requesting user, None when anonymous.

        Returns:
            The snippet, with ``views`` already incremented for this read.

        Raises:
            NotFoundError: If the snippet does not exist.
            ForbiddenError: If the snippet is private and not the caller's.
        """
        snippet = await self._load(snippet_id)
        self.policy.ensure_can_read(snippet, caller_id)

        if self.policy.counts_as_view(snippet, caller_id):
            views = await self.snippet_repo.increment_views(snippet_id)
            await self.session.commit()
            set_committed_value(snippet, "views", views)

        return snippet

    async def update(
        self, snippet_id: str, data: SnippetUpdateInput, caller_id: str
    ) -> SnippetModel:
        """Apply a partial update.

        Raises:
            NotFoundError: If the snippet does not exist.
            ForbiddenError: If the caller is not the author.
        """
        snippet = await self._load(snippet_id)
        self.policy.ensure_can_write(snippet, caller_id)

        changes = data.changes()
        if changes:
            await self.snippet_repo.update(snippet, changes)
            await self.session.commit()
            logger.info(
                "Snippet updated",
                snippet_id=snippet_id,
                fields=sorted(changes),
            )
        return await self._load(snippet_id)

    async def delete(self, snippet_id: str, caller_id: str) -> None:
        """Delete a snippet.

        Raises:
            NotFoundError: If the snippet does not exist.
            ForbiddenError: If the caller is not the author.
        """
        snippet = await self._load(snippet_id)
        self.policy.ensure_can_write(snippet, caller_id)

        await self.snippet_repo.delete(snippet_id)
        await self.session.commit()
        logger.info("Snippet deleted", snippet_id=snippet_id, author_id=caller_id)

    async def list_public(self) -> list[SnippetModel]:
        """The public feed: every public snippet, newest first, whoever asks."""
        return await self.snippet_repo.list_public()

    async def search(self, query: SnippetQuery, caller_id: Optional[str]) -> SnippetPage:
        """List snippets visible to the caller.

        Anonymous callers see public snippets; signed-in callers also see
        their own private ones.
        """
        snippets, total = await self.snippet_repo.search(query, caller_id)
        return SnippetPage(
            snippets=snippets,
            pagination=Pagination.build(query.page, query.limit, total),
        )

    async def list_by_author(
        self, user_id: str, caller_id: Optional[str]
    ) -> list[SnippetModel]:
        """List a user's snippets; private ones only for that user.

        Raises:
            NotFoundError: If the user does not exist.
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        return await self.snippet_repo.list_by_author(
            user_id, include_private=caller_id == user_id
        )

    async def _load(self, snippet_id: str) -> SnippetModel:
        snippet = await self.snippet_repo.get_by_id(snippet_id)
        if snippet is None:
            raise NotFoundError("Snippet not found")
        return snippet
