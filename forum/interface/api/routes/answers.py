"""Answer routes."""

import logfire
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel, Field

from forum.application.usecase.answer import (
    CreateAnswerRequest,
    CreateAnswerResponse,
    CreateAnswerUseCase,
    DeleteAnswerRequest,
    DeleteAnswerResponse,
    DeleteAnswerUseCase,
    UpdateAnswerRequest,
    UpdateAnswerResponse,
    UpdateAnswerUseCase,
)
from forum.config import AuthSettings
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.interface.api.auth import require_user_id
from forum.interface.error import to_http_exception

router = APIRouter(prefix="/answers", tags=["answers"], route_class=DishkaRoute)


class CreateAnswerAPIRequest(BaseModel):
    """API request for answering a question."""

    question_id: UUID
    content: str = Field(min_length=10, max_length=30000)


class UpdateAnswerAPIRequest(BaseModel):
    """API request for editing an answer."""

    content: str = Field(min_length=10, max_length=30000)


@router.post("", response_model=CreateAnswerResponse, status_code=status.HTTP_201_CREATED)
async def create_answer(
    body: CreateAnswerAPIRequest,
    request: Request,
    create_answer_use_case: FromDishka[CreateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> CreateAnswerResponse:
    """Answer a question.

    Requires authentication.

    Args:
        body: Answer data
        request: Incoming request (token from cookie or Bearer header)
        create_answer_use_case: Create answer use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Authentication settings from DI

    Returns:
        Created answer with its vote projection

    Raises:
        HTTPException: 401 unauthenticated, 404 unknown question
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "answer questions")

    try:
        return await create_answer_use_case.execute(
            CreateAnswerRequest(
                question_id=str(body.question_id),
                content=body.content,
                author_id=user_id,
            )
        )
    except DomainError as e:
        logfire.warn("Answer creation domain error", error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error creating answer", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create answer",
        )


@router.put("/{answer_id}", response_model=UpdateAnswerResponse)
async def update_answer(
    answer_id: UUID,
    body: UpdateAnswerAPIRequest,
    request: Request,
    update_answer_use_case: FromDishka[UpdateAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> UpdateAnswerResponse:
    """Edit an answer (author or administrator).

    Raises:
        HTTPException: 401, 403 or 404 as appropriate
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "edit answers")

    try:
        return await update_answer_use_case.execute(
            UpdateAnswerRequest(
                answer_id=str(answer_id), requester_id=user_id, content=body.content
            )
        )
    except DomainError as e:
        logfire.warn("Answer update domain error", answer_id=str(answer_id), error=str(e))
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error updating answer", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update answer",
        )


@router.delete("/{answer_id}", response_model=DeleteAnswerResponse)
async def delete_answer(
    answer_id: UUID,
    request: Request,
    delete_answer_use_case: FromDishka[DeleteAnswerUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> DeleteAnswerResponse:
    """Delete an answer (author or administrator).

    If it was the accepted answer, the question's acceptance is cleared.

    Raises:
        HTTPException: 401, 403 or 404 as appropriate
    """
    user_id = require_user_id(request, jwt_service, auth_settings, "delete answers")

    try:
        return await delete_answer_use_case.execute(
            DeleteAnswerRequest(answer_id=str(answer_id), requester_id=user_id)
        )
    except DomainError as e:
        logfire.warn(
            "Answer deletion domain error", answer_id=str(answer_id), error=str(e)
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error deleting answer", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete answer",
        )
