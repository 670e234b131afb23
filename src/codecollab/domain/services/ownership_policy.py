"""Ownership-based access rules for user-owned resources.

A resource is readable by anyone when it is public and by its author
otherwise. Only the author may modify or delete it, whatever its visibility.
"""

from typing import Optional, Protocol

from codecollab.domain.exceptions import ForbiddenError


class OwnedResource(Protocol):
    """Anything with an author and a visibility flag."""

    author_id: str
    is_public: bool


class OwnershipPolicy:
    """Read/write decisions for an owned resource and a (possibly anonymous) caller."""

    @staticmethod
    def can_read(resource: OwnedResource, caller_id: Optional[str]) -> bool:
        """Check read access.

        Args:
            resource: The loaded resource.
            caller_id: ID of the caller, None when anonymous.

        Returns:
            True if the resource is public or the caller is its author.
        """
        return bool(resource.is_public) or (
            caller_id is not None and resource.author_id == caller_id
        )

    @staticmethod
    def can_write(resource: OwnedResource, caller_id: Optional[str]) -> bool:
        """Check write access. Only the author may write."""
        return caller_id is not None and resource.author_id == caller_id

    @classmethod
    def ensure_can_read(
        cls,
        resource: OwnedResource,
        caller_id: Optional[str],
        message: str = "Access denied: This snippet is private",
    ) -> None:
        """Raise ForbiddenError unless the caller may read the resource."""
        if not cls.can_read(resource, caller_id):
            raise ForbiddenError(message)

    @classmethod
    def ensure_can_write(
        cls,
        resource: OwnedResource,
        caller_id: Optional[str],
        message: str = "Access denied: You can only modify your own snippets",
    ) -> None:
        """Raise ForbiddenError unless the caller may modify the resource."""
        if not cls.can_write(resource, caller_id):
            raise ForbiddenError(message)

    @staticmethod
    def counts_as_view(resource: OwnedResource, caller_id: Optional[str]) -> bool:
        """A read counts as a view unless the author is reading their own resource."""
        return caller_id is None or resource.author_id != caller_id


can_read = OwnershipPolicy.can_read
can_write = OwnershipPolicy.can_write
