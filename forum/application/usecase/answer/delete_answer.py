"""Delete answer use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import AnswerService, UserService
from forum.domain.value import AnswerId, UserId


class DeleteAnswerRequest(BaseModel):
    """Delete answer request."""

    answer_id: str
    requester_id: str  # User ID from authenticated user


class DeleteAnswerResponse(BaseModel):
    """Delete answer response."""

    message: str = "Answer deleted successfully"


class DeleteAnswerUseCase:
    """Use case for deleting an answer (author or administrator)."""

    def __init__(self, answer_service: AnswerService, user_service: UserService) -> None:
        self.answer_service = answer_service
        self.user_service = user_service

    async def execute(self, request: DeleteAnswerRequest) -> DeleteAnswerResponse:
        """Execute delete answer flow.

        Raises:
            NotFoundError: If the answer or requester does not exist
            ForbiddenError: If the requester may not delete the answer
        """
        requester = await self.user_service.get_by_id(UserId(UUID(request.requester_id)))
        await self.answer_service.delete_answer(AnswerId(UUID(request.answer_id)), requester)
        return DeleteAnswerResponse()
