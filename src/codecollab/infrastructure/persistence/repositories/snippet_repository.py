"""Snippet repository for database operations."""

from typing import Any

from sqlalchemy import String, cast, delete, false, func, or_, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from codecollab.domain.services.snippet_validator import SnippetQuery
from codecollab.infrastructure.persistence.models import SnippetModel, UserModel

SORT_COLUMNS = {
    "created": SnippetModel.created_at,
    "updated": SnippetModel.updated_at,
    "views": SnippetModel.views,
    "likes": SnippetModel.likes,
    "title": SnippetModel.title,
}


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SnippetRepository:
    """Repository for snippet database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, snippet: SnippetModel) -> SnippetModel:
        """Create a new snippet.

        Args:
            snippet: Snippet model to create.

        Returns:
            Created snippet model.
        """
        self.session.add(snippet)
        await self.session.flush()
        return snippet

    async def get_by_id(self, snippet_id: str) -> SnippetModel | None:
        """Get a snippet by ID with its author loaded.

        Args:
            snippet_id: Snippet ID.

        Returns:
            Snippet model if found, None otherwise.
        """
        result = await self.session.execute(
            select(SnippetModel)
            .where(SnippetModel.id == snippet_id)
            .options(selectinload(SnippetModel.author))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def update(self, snippet: SnippetModel, changes: dict[str, Any]) -> SnippetModel:
        """Apply field changes to a snippet.

        Args:
            snippet: Loaded snippet model.
            changes: Attribute name to new value.

        Returns:
            The updated snippet model.
        """
        for key, value in changes.items():
            setattr(snippet, key, value)
        await self.session.flush()
        return snippet

    async def delete(self, snippet_id: str) -> None:
        """Delete a snippet by ID."""
        await self.session.execute(delete(SnippetModel).where(SnippetModel.id == snippet_id))

    async def increment_views(self, snippet_id: str) -> int:
        """Add one view in a single UPDATE and return the new count.

        Args:
            snippet_id: Snippet ID.

        Returns:
            The view count after the increment.
        """
        await self.session.execute(
            update(SnippetModel)
            .where(SnippetModel.id == snippet_id)
            .values(views=SnippetModel.views + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            select(SnippetModel.views).where(SnippetModel.id == snippet_id)
        )
        return result.scalar_one()

    def _visibility_filter(self, is_public: bool | None, caller_id: str | None):
        if is_public is True:
            return SnippetModel.is_public == true()
        if is_public is False:
            # Private snippets are only ever listed for their author
            if caller_id is None:
                return false()
            return (SnippetModel.is_public == false()) & (SnippetModel.author_id == caller_id)
        if caller_id is None:
            return SnippetModel.is_public == true()
        return or_(SnippetModel.is_public == true(), SnippetModel.author_id == caller_id)

    async def search(
        self, query: SnippetQuery, caller_id: str | None
    ) -> tuple[list[SnippetModel], int]:
        """Get a page of snippets visible to the caller.

        Args:
            query: Validated filters, sorting and pagination.
            caller_id: ID of the requesting user, None for anonymous callers.

        Returns:
            Tuple of (list of snippets, total matching count).
        """
        conditions = [self._visibility_filter(query.is_public, caller_id)]

        if query.language:
            conditions.append(SnippetModel.language == query.language)

        if query.author:
            author = query.author.strip()
            conditions.append(
                SnippetModel.author_id.in_(
                    select(UserModel.id).where(
                        or_(UserModel.id == author, UserModel.username == author.lower())
                    )
                )
            )

        if query.tag:
            # Tags are a JSON array; match the quoted element in its text form
            pattern = f'%"{_escape_like(query.tag)}"%'
            conditions.append(cast(SnippetModel.tags, String).like(pattern, escape="\\"))

        if query.search:
            pattern = f"%{_escape_like(query.search)}%"
            conditions.append(
                or_(
                    SnippetModel.title.ilike(pattern, escape="\\"),
                    SnippetModel.description.ilike(pattern, escape="\\"),
                    SnippetModel.content.ilike(pattern, escape="\\"),
                )
            )

        count_result = await self.session.execute(
            select(func.count()).select_from(SnippetModel).where(*conditions)
        )
        total = count_result.scalar_one()

        sort_column = SORT_COLUMNS.get(query.sort_by, SnippetModel.created_at)
        order = sort_column.desc() if query.sort_order == "desc" else sort_column.asc()

        result = await self.session.execute(
            select(SnippetModel)
            .where(*conditions)
            .options(selectinload(SnippetModel.author))
            .order_by(order, SnippetModel.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        return list(result.scalars().all()), total

    async def list_public(self) -> list[SnippetModel]:
        """Get every public snippet, newest first."""
        result = await self.session.execute(
            select(SnippetModel)
            .where(SnippetModel.is_public == true())
            .options(selectinload(SnippetModel.author))
            .order_by(SnippetModel.created_at.desc(), SnippetModel.id)
        )
        return list(result.scalars().all())

    async def list_by_author(
        self, author_id: str, include_private: bool = False
    ) -> list[SnippetModel]:
        """Get an author's snippets, newest first.

        Args:
            author_id: ID of the author.
            include_private: Include private snippets (only for the author).

        Returns:
            List of snippet models.
        """
        stmt = (
            select(SnippetModel)
            .where(SnippetModel.author_id == author_id)
            .options(selectinload(SnippetModel.author))
            .order_by(SnippetModel.created_at.desc(), SnippetModel.id)
        )
        if not include_private:
            stmt = stmt.where(SnippetModel.is_public == true())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
