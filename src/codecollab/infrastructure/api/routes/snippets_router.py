"""Snippet API routes.

The feed, search and reads accept anonymous callers; creating, updating and
deleting require a token. Ownership checks happen in the SnippetService.
"""

from dataclasses import asdict
from typing import Annotated, Any

from fastapi import APIRouter, Body, Request, status

from codecollab.domain.services.snippet_validator import (
    validate_snippet_create,
    validate_snippet_query,
    validate_snippet_update,
)
from codecollab.infrastructure.api.dependencies import (
    AuthenticatedUser,
    OptionalUser,
    SnippetServiceDep,
)
from codecollab.infrastructure.api.schemas import (
    EmptyData,
    ErrorResponse,
    PaginationResponse,
    SnippetCountData,
    SnippetData,
    SnippetListData,
    SnippetResponse,
    SuccessResponse,
)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessResponse[SnippetData],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_snippet(
    current_user: AuthenticatedUser,
    snippet_service: SnippetServiceDep,
    payload: Annotated[Any, Body()] = None,
) -> SuccessResponse[SnippetData]:
    """Create a snippet owned by the caller."""
    data = validate_snippet_create(payload)
    snippet = await snippet_service.create(data, current_user.id)
    return SuccessResponse[SnippetData](
        message="Snippet created successfully",
        data=SnippetData(snippet=SnippetResponse.model_validate(snippet)),
    )


@router.get("", response_model=SuccessResponse[SnippetCountData])
async def list_snippets(
    snippet_service: SnippetServiceDep,
) -> SuccessResponse[SnippetCountData]:
    """The public feed. Private snippets never appear here, even for their author."""
    snippets = await snippet_service.list_public()
    return SuccessResponse[SnippetCountData](
        message="Snippets retrieved successfully",
        data=SnippetCountData(
            snippets=[SnippetResponse.model_validate(s) for s in snippets],
            count=len(snippets),
        ),
    )


@router.get(
    "/search",
    response_model=SuccessResponse[SnippetListData],
    responses={400: {"model": ErrorResponse}},
)
async def search_snippets(
    request: Request,
    current_user: OptionalUser,
    snippet_service: SnippetServiceDep,
) -> SuccessResponse[SnippetListData]:
    """Search and page through the snippets visible to the caller.

    Query parameters: page, limit, language, search, tag, author, sortBy,
    sortOrder, isPublic.
    """
    query = validate_snippet_query(dict(request.query_params))
    page = await snippet_service.search(query, current_user.id if current_user else None)
    return SuccessResponse[SnippetListData](
        message="Snippets found successfully",
        data=SnippetListData(
            snippets=[SnippetResponse.model_validate(s) for s in page.snippets],
            pagination=PaginationResponse(**asdict(page.pagination)),
        ),
    )


@router.get(
    "/{snippet_id}",
    response_model=SuccessResponse[SnippetData],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_snippet(
    snippet_id: str,
    current_user: OptionalUser,
    snippet_service: SnippetServiceDep,
) -> SuccessResponse[SnippetData]:
    """Read one snippet. Reads by anyone but the author count as a view."""
    snippet = await snippet_service.get(
        snippet_id, current_user.id if current_user else None
    )
    return SuccessResponse[SnippetData](
        message="Snippet retrieved successfully",
        data=SnippetData(snippet=SnippetResponse.model_validate(snippet)),
    )


@router.api_route(
    "/{snippet_id}",
    methods=["PUT", "PATCH"],
    response_model=SuccessResponse[SnippetData],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def update_snippet(
    snippet_id: str,
    current_user: AuthenticatedUser,
    snippet_service: SnippetServiceDep,
    payload: Annotated[Any, Body()] = None,
) -> SuccessResponse[SnippetData]:
    """Update the fields present in the body. Author only."""
    data = validate_snippet_update(payload)
    snippet = await snippet_service.update(snippet_id, data, current_user.id)
    return SuccessResponse[SnippetData](
        message="Snippet updated successfully",
        data=SnippetData(snippet=SnippetResponse.model_validate(snippet)),
    )


@router.delete(
    "/{snippet_id}",
    response_model=SuccessResponse[EmptyData],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def delete_snippet(
    snippet_id: str,
    current_user: AuthenticatedUser,
    snippet_service: SnippetServiceDep,
) -> SuccessResponse[EmptyData]:
    """Delete a snippet. Author only."""
    await snippet_service.delete(snippet_id, current_user.id)
    return SuccessResponse[EmptyData](
        message="Snippet deleted successfully",
        data=EmptyData(),
    )
