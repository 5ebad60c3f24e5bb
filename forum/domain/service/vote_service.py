"""Vote domain service.

Implements the per-user toggle protocol over the vote ledger and the
read-time projection of vote counts. Counts are never stored on the
target; every read sums the ledger.
"""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID, uuid4

import logfire

from forum.config import VotingSettings
from forum.domain.error import (
    ConflictError,
    InvalidValueError,
    NotFoundError,
    UnauthenticatedError,
)
from forum.domain.model.vote import Vote, VoteProjection
from forum.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    VoteRepository,
)
from forum.domain.value import (
    AnswerId,
    QuestionId,
    UserId,
    VotableType,
    VoteId,
    VoteOutcome,
    VoteValue,
)

from .base import Service


def parse_vote_value(value: object) -> VoteValue:
    """Coerce a raw vote value into a VoteValue.

    Raises:
        InvalidValueError: Unless value is exactly the integer 1 or -1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(value)
    try:
        return VoteValue(value)
    except ValueError:
        raise InvalidValueError(value)


class VoteService(Service):
    """Domain service for casting votes and projecting vote counts."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            question_repository: Question repository (target existence)
            answer_repository: Answer repository (target existence)
            voting_settings: Conflict retry configuration
        """
        self.vote_repository = vote_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.voting_settings = voting_settings

    async def cast_vote(
        self,
        voter_id: Optional[UserId],
        votable_type: VotableType,
        votable_id: UUID,
        value: object,
    ) -> VoteOutcome:
        """Cast a vote on a question or answer.

        Toggle protocol against the voter's existing vote:
        - none: create it
        - same value: delete it (casting twice nets to no vote)
        - opposite value: update it in place

        A write that loses a race against a concurrent cast by the same voter
        is retried from the lookup, up to ``conflict_retries`` times.

        Args:
            voter_id: Authenticated voter, None for anonymous callers
            votable_type: Question or answer
            votable_id: Target ID
            value: Requested value, must be 1 or -1

        Returns:
            Which transition was applied

        Raises:
            InvalidValueError: If value is not 1 or -1
            UnauthenticatedError: If there is no voter
            NotFoundError: If the target does not exist
            ConflictError: If every retry also lost the race
        """
        vote_value = parse_vote_value(value)

        if voter_id is None:
            logfire.warn("Anonymous vote attempt", votable_id=str(votable_id))
            raise UnauthenticatedError("vote")

        with logfire.span(
            "vote_service.cast_vote",
            voter_id=str(voter_id),
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            value=int(vote_value),
        ):
            await self._ensure_target_exists(votable_type, votable_id)

            attempt = 0
            while True:
                attempt += 1
                try:
                    outcome = await self._apply_toggle(
                        voter_id, votable_type, votable_id, vote_value
                    )
                except ConflictError:
                    logfire.warn(
                        "Vote write conflicted",
                        voter_id=str(voter_id),
                        votable_id=str(votable_id),
                        attempt=attempt,
                    )
                    if attempt > self.voting_settings.conflict_retries:
                        raise
                    continue

                logfire.info(
                    "Vote cast",
                    voter_id=str(voter_id),
                    votable_type=votable_type.value,
                    votable_id=str(votable_id),
                    outcome=outcome.value,
                )
                return outcome

    async def _apply_toggle(
        self,
        voter_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
        value: VoteValue,
    ) -> VoteOutcome:
        existing = await self.vote_repository.find_by_user_and_votable(
            voter_id, votable_type, votable_id
        )

        if existing is None:
            now = datetime.now()
            await self.vote_repository.save(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=voter_id,
                    votable_type=votable_type,
                    votable_id=votable_id,
                    value=value,
                    created_at=now,
                    updated_at=now,
                )
            )
            return VoteOutcome.CREATED

        if existing.value == value:
            if not await self.vote_repository.delete(existing.id):
                raise ConflictError("Vote removed concurrently")
            return VoteOutcome.RETRACTED

        if await self.vote_repository.update_value(existing.id, value) is None:
            raise ConflictError("Vote removed concurrently")
        return VoteOutcome.SWITCHED

    async def _ensure_target_exists(
        self, votable_type: VotableType, votable_id: UUID
    ) -> None:
        if votable_type == VotableType.QUESTION:
            found = await self.question_repository.exists(QuestionId(votable_id))
            resource = "Question"
        else:
            found = await self.answer_repository.exists(AnswerId(votable_id))
            resource = "Answer"

        if not found:
            logfire.warn(
                "Vote on non-existent target",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
            )
            raise NotFoundError(resource, str(votable_id))

    async def project(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        caller_id: Optional[UserId] = None,
    ) -> VoteProjection:
        """Project the vote count and the caller's vote for one target.

        Args:
            votable_type: Question or answer
            votable_id: Target ID
            caller_id: Caller, None for anonymous (caller_vote is then None)

        Returns:
            Fresh projection; a target with no votes projects to (0, None)
        """
        with logfire.span(
            "vote_service.project",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
        ):
            vote_count = await self.vote_repository.sum_by_votable(
                votable_type, votable_id
            )

            caller_vote: Optional[VoteValue] = None
            if caller_id is not None:
                vote = await self.vote_repository.find_by_user_and_votable(
                    caller_id, votable_type, votable_id
                )
                if vote:
                    caller_vote = vote.value

            return VoteProjection(vote_count=vote_count, caller_vote=caller_vote)

    async def project_many(
        self,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
        caller_id: Optional[UserId] = None,
    ) -> dict[UUID, VoteProjection]:
        """Project several targets of one type in two batch queries.

        Args:
            votable_type: Question or answer
            votable_ids: Target IDs
            caller_id: Caller, None for anonymous

        Returns:
            Mapping target ID -> projection, with an entry for every ID
        """
        if not votable_ids:
            return {}

        with logfire.span(
            "vote_service.project_many",
            votable_type=votable_type.value,
            count=len(votable_ids),
        ):
            ids = [UUID(str(vid)) for vid in votable_ids]
            sums = await self.vote_repository.sum_by_votables(votable_type, ids)

            caller_votes: dict[UUID, VoteValue] = {}
            if caller_id is not None:
                votes = await self.vote_repository.find_by_user_and_votables(
                    caller_id, votable_type, ids
                )
                caller_votes = {UUID(str(v.votable_id)): v.value for v in votes}

            return {
                vid: VoteProjection(
                    vote_count=sums.get(vid, 0), caller_vote=caller_votes.get(vid)
                )
                for vid in ids
            }
