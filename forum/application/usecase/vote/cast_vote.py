"""Cast vote use case."""

from typing import Any
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.error import NotFoundError, UnauthenticatedError
from forum.domain.service import UserService, VoteService
from forum.domain.service.vote_service import parse_vote_value
from forum.domain.value import UserId, VotableType, VoteOutcome


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    voter_id: str | None  # User ID from authenticated user, None if anonymous
    value: Any  # Checked by the vote service: only 1 or -1 is accepted


class CastVoteResponse(BaseModel):
    """Cast vote response.

    The new count is not returned; clients re-fetch the target.
    """

    message: str = "Vote recorded successfully"
    outcome: VoteOutcome


class CastVoteUseCase:
    """Use case for voting on a question or answer."""

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def _resolve_voter(self, voter_id: str | None) -> UserId | None:
        if not voter_id:
            return None
        try:
            voter = await self.user_service.get_by_id(UserId(UUID(voter_id)))
        except NotFoundError as e:
            raise UnauthenticatedError("vote") from e
        return voter.id

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Which toggle transition was applied

        Raises:
            InvalidValueError: If value is not 1 or -1
            UnauthenticatedError: If no voter is given, or the voter does not exist
            NotFoundError: If the target does not exist
            ConflictError: If the write kept losing races
        """
        # A bad value is reported before anything about the caller
        parse_vote_value(request.value)
        voter_id = await self._resolve_voter(request.voter_id)

        with logfire.span(
            "cast_vote.execute",
            votable_type=request.votable_type.value,
            votable_id=request.votable_id,
        ):
            outcome = await self.vote_service.cast_vote(
                voter_id=voter_id,
                votable_type=request.votable_type,
                votable_id=UUID(request.votable_id),
                value=request.value,
            )
            return CastVoteResponse(outcome=outcome)
