"""List tags use case."""

import logfire
from datetime import datetime

from pydantic import BaseModel, Field

from forum.domain.service import TagService


class TagItem(BaseModel):
    """Tag item in response."""

    name: str
    question_count: int
    created_at: datetime


class ListTagsRequest(BaseModel):
    """List tags request."""

    limit: int | None = Field(default=None, ge=1, le=100)  # None for all tags


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TagItem]


class ListTagsUseCase:
    """Use case for listing tags by popularity."""

    def __init__(self, tag_service: TagService) -> None:
        """Initialize list tags use case.

        Args:
            tag_service: Tag domain service
        """
        self.tag_service = tag_service

    async def execute(self, request: ListTagsRequest) -> ListTagsResponse:
        """Execute list tags flow.

        Args:
            request: List tags request

        Returns:
            Tags with question counts, most used first
        """
        with logfire.span("list_tags.execute", limit=request.limit):
            usage = await self.tag_service.list_usage(limit=request.limit)

            tag_items = [
                TagItem(
                    name=item.tag.name.root,
                    question_count=item.question_count,
                    created_at=item.tag.created_at,
                )
                for item in usage
            ]

            logfire.info("Tags listed", count=len(tag_items))

            return ListTagsResponse(tags=tag_items)
