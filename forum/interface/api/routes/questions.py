"""Question routes."""

import logfire
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from forum.application.usecase.question import (
    AcceptAnswerRequest,
    AcceptAnswerResponse,
    AcceptAnswerUseCase,
    CreateQuestionRequest,
    CreateQuestionResponse,
    CreateQuestionUseCase,
    DeleteQuestionRequest,
    DeleteQuestionResponse,
    DeleteQuestionUseCase,
    GetQuestionRequest,
    GetQuestionResponse,
    GetQuestionUseCase,
    ListQuestionsRequest,
    ListQuestionsResponse,
    ListQuestionsUseCase,
    UpdateQuestionRequest,
    UpdateQuestionResponse,
    UpdateQuestionUseCase,
)
from forum.config import AuthSettings
from forum.domain.error import DomainError
from forum.domain.repository.question import QuestionSortOrder
from forum.domain.service import JWTService
from forum.interface.api.auth import extract_token, require_user_id
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/questions", tags=["questions"], route_class=DishkaRoute)


class CreateQuestionAPIRequest(BaseModel):
    """API request for asking a question."""

    title: str = Field(min_length=10, max_length=200)
    description: str = Field(min_length=20, max_length=30000)
    tags: list[str] = Field(min_length=1, max_length=5)


class UpdateQuestionAPIRequest(BaseModel):
    """API request for editing a question; omitted fields stay unchanged."""

    title: str | None = Field(default=None, min_length=10, max_length=200)
    description: str | None = Field(default=None, min_length=20, max_length=30000)
    tags: list[str] | None = Field(default=None, min_length=1, max_length=5)


@router.post(
    "", response_model=CreateQuestionResponse, status_code=status.HTTP_201_CREATED
)
async def create_question(
    body: CreateQuestionAPIRequest,
    request: Request,
    create_question_use_case: FromDishka[CreateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> CreateQuestionResponse:
    """Ask a new question.

    Requires authentication. Tags are trimmed, lower-cased and created
    on first use.

    Args:
        body: Question data
        request: Incoming request (token from cookie or Bearer header)
        create_question_use_case: Create question use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Authentication settings from DI

    Returns:
        Created question

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "ask questions")

    try:
        return await create_question_use_case.execute(
            CreateQuestionRequest(
                title=body.title,
                description=body.description,
                tag_names=body.tags,
                author_id=user_id,
            )
        )
    except DomainError as e:
        logfire.warn("Question creation domain error", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error creating question", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create question",
        )


@router.get("", response_model=ListQuestionsResponse)
async def list_questions(
    request: Request,
    list_questions_use_case: FromDishka[ListQuestionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=100),
    search: str | None = Query(default=None, max_length=200),
    tags: str | None = Query(default=None, description="Comma-separated tag names"),
    sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
) -> ListQuestionsResponse:
    """List questions.

    Authentication is optional; when present, each item's ``caller_vote``
    reflects the caller's vote.

    Example:
        GET /questions?page=2&limit=20&tags=python,asyncio&sort=oldest
    """
    caller_id = jwt_service.get_user_id_from_token(extract_token(request, auth_settings))

    try:
        return await list_questions_use_case.execute(
            ListQuestionsRequest(
                sort=sort,
                search=search,
                tags=tags,
                page=page,
                limit=limit,
                caller_id=caller_id,
            )
        )
    except DomainError as e:
        logfire.warn("Question listing domain error", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error listing questions", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch questions",
        )


@router.get("/{question_id}", response_model=GetQuestionResponse)
async def get_question(
    question_id: UUID,
    request: Request,
    get_question_use_case: FromDishka[GetQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> GetQuestionResponse:
    """Get a question with all its answers.

    The question and each answer carry their own vote count and the
    caller's vote (null when anonymous).

    Raises:
        HTTPException: 404 if the question does not exist
    """
    caller_id = jwt_service.get_user_id_from_token(extract_token(request, auth_settings))

    try:
        return await get_question_use_case.execute(
            GetQuestionRequest(question_id=str(question_id), caller_id=caller_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
    except Exception as e:
        logfire.error(
            "Unexpected error fetching question",
            question_id=str(question_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch question",
        )


@router.put("/{question_id}", response_model=UpdateQuestionResponse)
async def update_question(
    question_id: UUID,
    body: UpdateQuestionAPIRequest,
    request: Request,
    update_question_use_case: FromDishka[UpdateQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> UpdateQuestionResponse:
    """Edit a question (author or administrator).

    Raises:
        HTTPException: 401, 403 or 404 as appropriate
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "edit questions")

    try:
        return await update_question_use_case.execute(
            UpdateQuestionRequest(
                question_id=str(question_id),
                requester_id=user_id,
                title=body.title,
                description=body.description,
                tag_names=body.tags,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Question update domain error", question_id=str(question_id), error=str(e)
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error updating question", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update question",
        )


@router.delete("/{question_id}", response_model=DeleteQuestionResponse)
async def delete_question(
    question_id: UUID,
    request: Request,
    delete_question_use_case: FromDishka[DeleteQuestionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> DeleteQuestionResponse:
    """Delete a question and its answers (author or administrator).

    Raises:
        HTTPException: 401, 403 or 404 as appropriate
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "delete questions")

    try:
        return await delete_question_use_case.execute(
            DeleteQuestionRequest(question_id=str(question_id), requester_id=user_id)
        )
    except DomainError as e:
        logfire.warn(
            "Question deletion domain error", question_id=str(question_id), error=str(e)
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error deleting question", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete question",
        )


@router.post(
    "/{question_id}/accept-answer/{answer_id}", response_model=AcceptAnswerResponse
)
async def accept_answer(
    question_id: UUID,
    answer_id: UUID,
    request: Request,
    accept_answer_use_case: FromDishka[AcceptAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> AcceptAnswerResponse:
    """Accept an answer to a question.

    Only the question's author may accept. Accepting another answer
    replaces the current one; accepting the same answer again succeeds
    without change.

    Raises:
        HTTPException: 401 unauthenticated, 403 not the author,
            404 unknown question or answer not on this question
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "accept answers")

    try:
        return await accept_answer_use_case.execute(
            AcceptAnswerRequest(
                question_id=str(question_id),
                answer_id=str(answer_id),
                requester_id=user_id,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Answer acceptance rejected",
            question_id=str(question_id),
            answer_id=str(answer_id),
            error=str(e),
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error accepting answer", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to accept answer",
        )
