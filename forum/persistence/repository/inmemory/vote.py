"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from forum.domain.error import ConflictError
from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import UserId, VotableType, VoteId, VoteValue

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a vote by user and votable item."""
        votable_uuid = UUID(str(votable_id))
        for vote in self._store.votes.values():
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_uuid
            ):
                return vote
        return None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        votable_uuids = {UUID(str(vid)) for vid in votable_ids}
        return [
            v
            for v in self._store.votes.values()
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in votable_uuids
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            ConflictError: If user already voted on this item (mimics unique constraint)
        """
        existing = await self.find_by_user_and_votable(
            vote.user_id, vote.votable_type, vote.votable_id
        )
        if existing:
            raise ConflictError("Vote already exists for this user and target")

        self._store.votes[vote.id] = vote
        return vote

    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Optional[Vote]:
        """Change a vote's value in place."""
        vote = self._store.votes.get(vote_id)
        if vote is None:
            return None
        updated = vote.model_copy(update={"value": value, "updated_at": datetime.now()})
        self._store.votes[vote_id] = updated
        return updated

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        return self._store.votes.pop(vote_id, None) is not None

    async def sum_by_votable(self, votable_type: VotableType, votable_id: UUID) -> int:
        """Sum vote values for a votable item."""
        votable_uuid = UUID(str(votable_id))
        return sum(
            int(v.value)
            for v in self._store.votes.values()
            if v.votable_type == votable_type and v.votable_id == votable_uuid
        )

    async def sum_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Sum vote values per item."""
        wanted = {UUID(str(vid)) for vid in votable_ids}
        sums: dict[UUID, int] = {}
        for v in self._store.votes.values():
            if v.votable_type == votable_type and v.votable_id in wanted:
                sums[v.votable_id] = sums.get(v.votable_id, 0) + int(v.value)
        return sums
