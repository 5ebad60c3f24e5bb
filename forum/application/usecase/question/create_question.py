"""Create question use case."""

import logfire
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import QuestionService, UserService
from forum.domain.value import UserId
from forum.domain.value.types import Handle


class CreateQuestionRequest(BaseModel):
    """Create question request."""

    title: str
    description: str
    tag_names: list[str]  # Raw names, normalized by the question service
    author_id: str  # User ID from authenticated user


class CreateQuestionResponse(BaseModel):
    """Create question response."""

    question_id: str
    title: str
    description: str
    tag_names: list[str]
    author_id: str
    author_handle: Handle
    vote_count: int
    created_at: datetime


class CreateQuestionUseCase:
    """Use case for asking a new question."""

    def __init__(
        self, question_service: QuestionService, user_service: UserService
    ) -> None:
        """Initialize create question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: CreateQuestionRequest) -> CreateQuestionResponse:
        """Execute create question flow.

        Steps:
        1. Load author to get handle (via UserService)
        2. Normalize tags and create missing ones (via QuestionService)
        3. Save the question

        Raises:
            NotFoundError: If the author does not exist
            ValidationError: If tags are invalid
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        with logfire.span(
            "create_question.execute",
            title=request.title,
            tags=request.tag_names,
            author=author.handle.root,
        ):
            question = await self.question_service.create_question(
                author=author,
                title=request.title,
                description=request.description,
                tag_names=request.tag_names,
            )

            logfire.info("Question created successfully", question_id=str(question.id))

            return CreateQuestionResponse(
                question_id=str(question.id),
                title=question.title,
                description=question.description,
                tag_names=[tag.root for tag in question.tag_names],
                author_id=str(question.author_id),
                author_handle=question.author_handle,
                vote_count=0,
                created_at=question.created_at,
            )
