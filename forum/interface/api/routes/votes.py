"""Vote routes."""

from typing import Any
from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from forum.config import AuthSettings
from forum.domain.error import DomainError
from forum.domain.service import JWTService
from forum.domain.value import VotableType
from forum.interface.api.auth import extract_token
from forum.interface.error import to_http_exception

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    value: Any = None  # 1 (up) or -1 (down); anything else is rejected with 400


async def _cast_vote(
    votable_type: VotableType,
    votable_id: UUID,
    body: CastVoteAPIRequest,
    request: Request,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_settings: AuthSettings,
) -> CastVoteResponse:
    voter_id = jwt_service.get_user_id_from_token(extract_token(request, auth_settings))

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=votable_type,
                votable_id=str(votable_id),
                voter_id=voter_id,
                value=body.value,
            )
        )
    except DomainError as e:
        logfire.warn(
            "Vote rejected",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            error=str(e),
        )
        raise to_http_exception(e)
    except Exception as e:
        logfire.error("Unexpected error casting vote", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record vote",
        )


@router.post("/questions/{question_id}/vote", response_model=CastVoteResponse)
async def vote_on_question(
    question_id: UUID,
    body: CastVoteAPIRequest,
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> CastVoteResponse:
    """Vote on a question.

    Requires authentication. Casting the same value again retracts the vote;
    casting the opposite value switches it.

    Args:
        question_id: Question UUID
        body: Vote value
        request: Incoming request (token from cookie or Bearer header)
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_settings: Authentication settings from DI

    Returns:
        Confirmation with the applied transition

    Raises:
        HTTPException: 400 bad value, 401 unauthenticated, 404 unknown question
    """
    return await _cast_vote(
        VotableType.QUESTION,
        question_id,
        body,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_settings,
    )


@router.post("/answers/{answer_id}/vote", response_model=CastVoteResponse)
async def vote_on_answer(
    answer_id: UUID,
    body: CastVoteAPIRequest,
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_settings: FromDishka[AuthSettings],
) -> CastVoteResponse:
    """Vote on an answer.

    Same toggle semantics as question votes.

    Raises:
        HTTPException: 400 bad value, 401 unauthenticated, 404 unknown answer
    """
    return await _cast_vote(
        VotableType.ANSWER,
        answer_id,
        body,
        request,
        cast_vote_use_case,
        jwt_service,
        auth_settings,
    )
