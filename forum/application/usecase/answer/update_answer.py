"""Update answer use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import AnswerService, UserService
from forum.domain.value import AnswerId, UserId


class UpdateAnswerRequest(BaseModel):
    """Update answer request."""

    answer_id: str
    requester_id: str  # User ID from authenticated user
    content: str


class UpdateAnswerResponse(BaseModel):
    """Update answer response."""

    answer_id: str
    content: str
    updated_at: datetime


class UpdateAnswerUseCase:
    """Use case for editing an answer (author or administrator)."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        """Initialize update answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: UpdateAnswerRequest) -> UpdateAnswerResponse:
        """Execute update answer flow.

        Raises:
            NotFoundError: If the answer or requester does not exist
            ForbiddenError: If the requester may not edit the answer
        """
        requester = await self.user_service.get_by_id(UserId(UUID(request.requester_id)))
        answer = await self.answer_service.update_answer(
            AnswerId(UUID(request.answer_id)), requester, request.content
        )
        return UpdateAnswerResponse(
            answer_id=str(answer.id),
            content=answer.content,
            updated_at=answer.updated_at,
        )
