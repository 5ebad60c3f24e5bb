"""List questions use case."""

import logfire
import math
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from forum.config import PaginationSettings
from forum.domain.repository.question import QuestionSortOrder
from forum.domain.service import AnswerService, QuestionService, VoteService
from forum.domain.service.question_service import normalize_tag_names
from forum.domain.value import UserId, VotableType, VoteValue
from forum.domain.value.types import Handle


class QuestionListItem(BaseModel):
    """Question list item in response."""

    question_id: str
    title: str
    description: str
    tag_names: list[str]
    author_id: str
    author_handle: Handle
    vote_count: int
    caller_vote: VoteValue | None
    answer_count: int
    accepted_answer_id: str | None
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    """Offset pagination metadata."""

    page: int
    limit: int
    total: int
    pages: int


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    search: str | None = None
    tags: str | None = None  # Comma-separated tag names, any match
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # None for the configured default
    caller_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionListItem]
    pagination: Pagination


class ListQuestionsUseCase:
    """Use case for listing questions with filtering and pagination."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
        pagination_settings: PaginationSettings,
    ) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            vote_service: Vote domain service
            pagination_settings: Page size defaults
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.vote_service = vote_service
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Vote counts and the caller's votes are projected for the whole page
        in batch; answer counts likewise.

        Args:
            request: List questions request with filters and pagination

        Returns:
            One page of questions plus pagination metadata

        Raises:
            ValidationError: If the tag filter is malformed
        """
        limit = min(
            request.limit or self.pagination_settings.default_limit,
            self.pagination_settings.max_limit,
        )
        offset = (request.page - 1) * limit
        search = request.search.strip() if request.search else None

        tags = None
        if request.tags:
            raw = [t for t in request.tags.split(",") if t.strip()]
            if raw:
                tags = normalize_tag_names(raw, max_count=None)

        with logfire.span(
            "list_questions.execute",
            sort=request.sort.value,
            search=search,
            page=request.page,
            limit=limit,
        ):
            questions, total = await self.question_service.list_questions(
                sort=request.sort,
                search=search or None,
                tags=tags,
                limit=limit,
                offset=offset,
            )

            caller_id = UserId(UUID(request.caller_id)) if request.caller_id else None
            question_ids = [q.id for q in questions]
            projections = await self.vote_service.project_many(
                VotableType.QUESTION, question_ids, caller_id
            )
            answer_counts = await self.answer_service.count_answers(question_ids)

            items = []
            for question in questions:
                projection = projections[UUID(str(question.id))]
                items.append(
                    QuestionListItem(
                        question_id=str(question.id),
                        title=question.title,
                        description=question.description,
                        tag_names=[tag.root for tag in question.tag_names],
                        author_id=str(question.author_id),
                        author_handle=question.author_handle,
                        vote_count=projection.vote_count,
                        caller_vote=projection.caller_vote,
                        answer_count=answer_counts.get(question.id, 0),
                        accepted_answer_id=str(question.accepted_answer_id)
                        if question.accepted_answer_id
                        else None,
                        created_at=question.created_at,
                        updated_at=question.updated_at,
                    )
                )

            logfire.info("Questions listed", count=len(items), total=total)

            return ListQuestionsResponse(
                questions=items,
                pagination=Pagination(
                    page=request.page,
                    limit=limit,
                    total=total,
                    pages=math.ceil(total / limit) if total else 0,
                ),
            )
