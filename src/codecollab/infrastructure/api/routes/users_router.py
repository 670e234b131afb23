"""User-scoped API routes."""

from fastapi import APIRouter

from codecollab.infrastructure.api.dependencies import OptionalUser, SnippetServiceDep
from codecollab.infrastructure.api.schemas import (
    ErrorResponse,
    SnippetResponse,
    SuccessResponse,
    SnippetCountData,
)

router = APIRouter()


@router.get(
    "/{user_id}/snippets",
    response_model=SuccessResponse[SnippetCountData],
    responses={404: {"model": ErrorResponse}},
)
async def list_user_snippets(
    user_id: str,
    current_user: OptionalUser,
    snippet_service: SnippetServiceDep,
) -> SuccessResponse[SnippetCountData]:
    """List a user's snippets. Private ones are included only for that user."""
    snippets = await snippet_service.list_by_author(
        user_id, current_user.id if current_user else None
    )
    return SuccessResponse[SnippetCountData](
        message="User snippets retrieved successfully",
        data=SnippetCountData(
            snippets=[SnippetResponse.model_validate(s) for s in snippets],
            count=len(snippets),
        ),
    )
