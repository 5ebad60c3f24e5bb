"""Get question use case."""

import logfire
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import AnswerService, QuestionService, VoteService
from forum.domain.value import QuestionId, UserId, VotableType, VoteValue
from forum.domain.value.types import Handle


class AnswerItem(BaseModel):
    """Answer in a question detail response."""

    answer_id: str
    question_id: str
    content: str
    author_id: str
    author_handle: Handle
    vote_count: int
    caller_vote: VoteValue | None
    is_accepted: bool
    created_at: datetime
    updated_at: datetime


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    caller_id: str | None = None  # Current user ID (if authenticated)


class GetQuestionResponse(BaseModel):
    """Get question response."""

    question_id: str
    title: str
    description: str
    tag_names: list[str]
    author_id: str
    author_handle: Handle
    vote_count: int
    caller_vote: VoteValue | None
    accepted_answer_id: str | None
    created_at: datetime
    updated_at: datetime
    answers: list[AnswerItem]


class GetQuestionUseCase:
    """Use case for getting a question with its answers."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            vote_service: Vote domain service
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.vote_service = vote_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        The question and every answer get their own projection.

        Args:
            request: Get question request

        Returns:
            Question details with answers, newest first

        Raises:
            NotFoundError: If the question does not exist
        """
        question_id = QuestionId(UUID(request.question_id))
        caller_id = UserId(UUID(request.caller_id)) if request.caller_id else None

        with logfire.span("get_question.execute", question_id=request.question_id):
            question = await self.question_service.get_question(question_id)
            projection = await self.vote_service.project(
                VotableType.QUESTION, question.id, caller_id
            )

            answers = await self.answer_service.get_answers_for_question(question.id)
            answer_projections = await self.vote_service.project_many(
                VotableType.ANSWER, [a.id for a in answers], caller_id
            )

            answer_items = []
            for answer in answers:
                answer_projection = answer_projections[UUID(str(answer.id))]
                answer_items.append(
                    AnswerItem(
                        answer_id=str(answer.id),
                        question_id=str(answer.question_id),
                        content=answer.content,
                        author_id=str(answer.author_id),
                        author_handle=answer.author_handle,
                        vote_count=answer_projection.vote_count,
                        caller_vote=answer_projection.caller_vote,
                        is_accepted=answer.id == question.accepted_answer_id,
                        created_at=answer.created_at,
                        updated_at=answer.updated_at,
                    )
                )

            logfire.info(
                "Question retrieved",
                question_id=request.question_id,
                answer_count=len(answer_items),
            )

            return GetQuestionResponse(
                question_id=str(question.id),
                title=question.title,
                description=question.description,
                tag_names=[tag.root for tag in question.tag_names],
                author_id=str(question.author_id),
                author_handle=question.author_handle,
                vote_count=projection.vote_count,
                caller_vote=projection.caller_vote,
                accepted_answer_id=str(question.accepted_answer_id)
                if question.accepted_answer_id
                else None,
                created_at=question.created_at,
                updated_at=question.updated_at,
                answers=answer_items,
            )
