"""Validation of snippet payloads and list queries."""

import re
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)

from codecollab.domain.services.input_validation import parse_input

SUPPORTED_LANGUAGES = (
    "javascript",
    "typescript",
    "python",
    "java",
    "csharp",
    "cpp",
    "c",
    "go",
    "rust",
    "php",
    "ruby",
    "swift",
    "kotlin",
    "dart",
    "html",
    "css",
    "scss",
    "sass",
    "sql",
    "json",
    "xml",
    "yaml",
    "markdown",
    "bash",
    "shell",
    "powershell",
    "dockerfile",
    "other",
)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 1000
CONTENT_MIN_LENGTH = 5
CONTENT_MAX_LENGTH = 50000
TAG_MAX_LENGTH = 30
MAX_TAGS = 10

TAG_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")

SortField = Literal["created", "updated", "views", "likes", "title"]


def _check_title(v: str) -> str:
    v = v.strip()
    if len(v) < TITLE_MIN_LENGTH:
        raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters long")
    if len(v) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must not exceed {TITLE_MAX_LENGTH} characters")
    return v


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _check_description(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if len(v) < DESCRIPTION_MIN_LENGTH:
        raise ValueError(
            f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long"
        )
    if len(v) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters")
    return v


def _check_content(v: str) -> str:
    v = v.strip()
    if len(v) < CONTENT_MIN_LENGTH:
        raise ValueError(f"Code content must be at least {CONTENT_MIN_LENGTH} characters long")
    if len(v) > CONTENT_MAX_LENGTH:
        raise ValueError(f"Code content must not exceed {CONTENT_MAX_LENGTH} characters")
    return v


def _check_language(v: str) -> str:
    v = v.strip().lower()
    if v not in SUPPORTED_LANGUAGES:
        raise ValueError("Please select a supported programming language")
    return v


def _check_tags(v: list[str]) -> list[str]:
    cleaned: list[str] = []
    for tag in v:
        tag = tag.strip()
        if not tag or len(tag) > TAG_MAX_LENGTH:
            raise ValueError(f"Each tag must be between 1 and {TAG_MAX_LENGTH} characters")
        if not TAG_PATTERN.match(tag):
            raise ValueError(
                "Tags can only contain letters, numbers, underscores, and hyphens"
            )
        cleaned.append(tag)
    if len(set(cleaned)) != len(cleaned):
        raise ValueError("Tags must be unique")
    return cleaned[:MAX_TAGS]


Title = Annotated[str, AfterValidator(_check_title)]
Description = Annotated[
    Optional[str], BeforeValidator(_blank_to_none), AfterValidator(_check_description)
]
Content = Annotated[str, AfterValidator(_check_content)]
Language = Annotated[str, AfterValidator(_check_language)]
Tags = Annotated[list[str], AfterValidator(_check_tags)]


class SnippetCreateInput(BaseModel):
    """Validated payload for creating a snippet."""

    model_config = ConfigDict(populate_by_name=True)

    title: Title
    description: Description = None
    content: Content
    language: Language
    tags: Tags = Field(default_factory=list)
    is_public: bool = Field(default=True, alias="isPublic")


class SnippetUpdateInput(BaseModel):
    """Validated payload for updating a snippet.

    Only fields present in the payload are applied; use ``changes()`` to get
    them. ``description`` may be cleared with null or an empty string, every
    other field rejects null.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[Title] = None
    description: Description = None
    content: Optional[Content] = None
    language: Optional[Language] = None
    tags: Optional[Tags] = None
    is_public: Optional[bool] = Field(default=None, alias="isPublic")

    @field_validator("title", "content", "language", "tags", "is_public", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were supplied, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class SnippetQuery(BaseModel):
    """Validated list/search query parameters."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    language: Optional[Language] = None
    search: Optional[str] = Field(default=None, min_length=1, max_length=100)
    tag: Optional[str] = Field(default=None, min_length=1, max_length=TAG_MAX_LENGTH)
    author: Optional[str] = None
    sort_by: SortField = Field(default="created", alias="sortBy")
    sort_order: Literal["asc", "desc"] = Field(default="desc", alias="sortOrder")
    is_public: Optional[bool] = Field(default=None, alias="isPublic")

    @field_validator("search", "tag", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def validate_snippet_create(data: Any) -> SnippetCreateInput:
    """Validate a create-snippet body.

    Raises:
        ValidationError: With one entry per failing field.
    """
    return parse_input(SnippetCreateInput, data)


def validate_snippet_update(data: Any) -> SnippetUpdateInput:
    """Validate an update-snippet body (partial).

    Raises:
        ValidationError: With one entry per failing field.
    """
    return parse_input(SnippetUpdateInput, data)


def validate_snippet_query(params: Any) -> SnippetQuery:
    """Validate list/search query parameters.

    Raises:
        ValidationError: With one entry per failing parameter.
    """
    return parse_input(SnippetQuery, params)
