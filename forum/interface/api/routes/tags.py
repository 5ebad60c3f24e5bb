"""Tag routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from forum.application.usecase.tag import (
    ListTagsRequest,
    ListTagsResponse,
    ListTagsUseCase,
)

router = APIRouter(
    prefix="/tags",
    tags=["tags"],
    route_class=DishkaRoute,
)


@router.get(
    "",
    response_model=ListTagsResponse,
    summary="List all tags",
    description="Get every tag with the number of questions using it, most used first.",
)
async def list_tags(use_case: FromDishka[ListTagsUseCase]) -> ListTagsResponse:
    """List all tags with usage counts.

    Args:
        use_case: List tags use case (injected)

    Returns:
        List of tags
    """
    with logfire.span("api.list_tags"):
        return await use_case.execute(ListTagsRequest())


@router.get(
    "/popular",
    response_model=ListTagsResponse,
    summary="List popular tags",
)
async def list_popular_tags(
    use_case: FromDishka[ListTagsUseCase],
    limit: int = Query(default=10, ge=1, le=100),
) -> ListTagsResponse:
    """List the most used tags.

    Args:
        use_case: List tags use case (injected)
        limit: Maximum number of tags to return (1-100)

    Returns:
        List of tags

    Example:
        GET /tags/popular?limit=5
    """
    with logfire.span("api.list_popular_tags", limit=limit):
        return await use_case.execute(ListTagsRequest(limit=limit))
