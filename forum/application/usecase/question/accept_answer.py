"""Accept answer use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.error import NotFoundError, UnauthenticatedError
from forum.domain.service import QuestionService, UserService
from forum.domain.value import AnswerId, QuestionId, UserId


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    question_id: str
    answer_id: str
    requester_id: str | None  # User ID from authenticated user


class AcceptAnswerResponse(BaseModel):
    """Accept answer response."""

    message: str = "Answer accepted successfully"
    question_id: str
    accepted_answer_id: str


class AcceptAnswerUseCase:
    """Use case for the question author choosing the accepted answer."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize accept answer use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: AcceptAnswerRequest) -> AcceptAnswerResponse:
        """Execute accept answer flow.

        Args:
            request: Accept answer request

        Returns:
            The question's accepted answer after the call

        Raises:
            UnauthenticatedError: If no requester is given, or it does not exist
            NotFoundError: If the question or answer does not exist
            ForbiddenError: If the requester is not the question author
        """
        if not request.requester_id:
            raise UnauthenticatedError("accept answers")
        try:
            requester = await self.user_service.get_by_id(
                UserId(UUID(request.requester_id))
            )
        except NotFoundError as e:
            raise UnauthenticatedError("accept answers") from e

        with logfire.span(
            "accept_answer.execute",
            question_id=request.question_id,
            answer_id=request.answer_id,
        ):
            question = await self.question_service.accept_answer(
                QuestionId(UUID(request.question_id)),
                AnswerId(UUID(request.answer_id)),
                requester.id,
            )
            return AcceptAnswerResponse(
                question_id=str(question.id),
                accepted_answer_id=str(question.accepted_answer_id),
            )
