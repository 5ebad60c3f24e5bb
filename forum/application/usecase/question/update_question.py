"""Update question use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import QuestionService, UserService
from forum.domain.value import QuestionId, UserId


class UpdateQuestionRequest(BaseModel):
    """Update question request; omitted fields are left unchanged."""

    question_id: str
    requester_id: str  # User ID from authenticated user
    title: str | None = None
    description: str | None = None
    tag_names: list[str] | None = None


class UpdateQuestionResponse(BaseModel):
    """Update question response."""

    question_id: str
    title: str
    description: str
    tag_names: list[str]
    updated_at: datetime


class UpdateQuestionUseCase:
    """Use case for editing a question (author or administrator)."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize update question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: UpdateQuestionRequest) -> UpdateQuestionResponse:
        """Execute update question flow.

        Raises:
            NotFoundError: If the question or requester does not exist
            ForbiddenError: If the requester may not edit the question
            ValidationError: If tags are invalid
        """
        requester = await self.user_service.get_by_id(UserId(UUID(request.requester_id)))

        question = await self.question_service.update_question(
            QuestionId(UUID(request.question_id)),
            requester,
            title=request.title,
            description=request.description,
            tag_names=request.tag_names,
        )

        return UpdateQuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tag_names=[tag.root for tag in question.tag_names],
            updated_at=question.updated_at,
        )
