"""Create answer use case."""

import logfire
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import AnswerService, UserService, VoteService
from forum.domain.value import QuestionId, UserId, VotableType, VoteValue
from forum.domain.value.types import Handle


class CreateAnswerRequest(BaseModel):
    """Create answer request."""

    question_id: str
    content: str
    author_id: str  # User ID from authenticated user


class CreateAnswerResponse(BaseModel):
    """Create answer response."""

    answer_id: str
    question_id: str
    content: str
    author_id: str
    author_handle: Handle
    vote_count: int
    caller_vote: VoteValue | None
    is_accepted: bool
    created_at: datetime


class CreateAnswerUseCase:
    """Use case for answering a question."""

    def __init__(
        self,
        answer_service: AnswerService,
        user_service: UserService,
        vote_service: VoteService,
    ) -> None:
        """Initialize create answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
            vote_service: Vote domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service
        self.vote_service = vote_service

    async def execute(self, request: CreateAnswerRequest) -> CreateAnswerResponse:
        """Execute create answer flow.

        Steps:
        1. Load author to get handle (via UserService)
        2. Save the answer (question must exist)
        3. Project its votes

        Raises:
            NotFoundError: If the author or question does not exist
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        with logfire.span(
            "create_answer.execute",
            question_id=request.question_id,
            author=author.handle.root,
        ):
            answer = await self.answer_service.create_answer(
                QuestionId(UUID(request.question_id)), author, request.content
            )
            projection = await self.vote_service.project(
                VotableType.ANSWER, answer.id, author.id
            )

            logfire.info("Answer created successfully", answer_id=str(answer.id))

            return CreateAnswerResponse(
                answer_id=str(answer.id),
                question_id=str(answer.question_id),
                content=answer.content,
                author_id=str(answer.author_id),
                author_handle=answer.author_handle,
                vote_count=projection.vote_count,
                caller_vote=projection.caller_vote,
                is_accepted=False,
                created_at=answer.created_at,
            )
