"""Delete question use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import QuestionService, UserService
from forum.domain.value import QuestionId, UserId


class DeleteQuestionRequest(BaseModel):
    """Delete question request."""

    question_id: str
    requester_id: str  # User ID from authenticated user


class DeleteQuestionResponse(BaseModel):
    """Delete question response."""

    message: str = "Question deleted successfully"


class DeleteQuestionUseCase:
    """Use case for deleting a question (author or administrator)."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: DeleteQuestionRequest) -> DeleteQuestionResponse:
        """Execute delete question flow.

        Raises:
            NotFoundError: If the question or requester does not exist
            ForbiddenError: If the requester may not delete the question
        """
        requester = await self.user_service.get_by_id(UserId(UUID(request.requester_id)))
        await self.question_service.delete_question(
            QuestionId(UUID(request.question_id)), requester
        )
        return DeleteQuestionResponse()
