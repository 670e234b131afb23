"""API request/response schemas."""

from codecollab.infrastructure.api.schemas.auth_schemas import (
    LogoutData,
    TokenData,
    UserData,
    UserResponse,
)
from codecollab.infrastructure.api.schemas.common import (
    CamelModel,
    EmptyData,
    ErrorDetail,
    ErrorResponse,
    SuccessResponse,
)
from codecollab.infrastructure.api.schemas.snippet_schemas import (
    PaginationResponse,
    ReviewCount,
    SnippetAuthor,
    SnippetCountData,
    SnippetData,
    SnippetListData,
    SnippetResponse,
)

__all__ = [
    "CamelModel",
    "EmptyData",
    "ErrorDetail",
    "ErrorResponse",
    "LogoutData",
    "PaginationResponse",
    "ReviewCount",
    "SnippetAuthor",
    "SnippetCountData",
    "SnippetData",
    "SnippetListData",
    "SnippetResponse",
    "SuccessResponse",
    "TokenData",
    "UserData",
    "UserResponse",
]
