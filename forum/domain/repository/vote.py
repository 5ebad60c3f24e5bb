"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.value import UserId, VotableType, VoteId, VoteValue


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Every row is keyed by the unique triple (user_id, votable_type, votable_id).
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Point lookup of a user's vote on one target.

        Args:
            user_id: The voter's ID
            votable_type: Type of target (question or answer)
            votable_id: ID of the target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple targets (batch query).

        Args:
            user_id: The voter's ID
            votable_type: Type of the targets
            votable_ids: Target IDs to check

        Returns:
            The user's votes on the given targets
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to insert

        Returns:
            The saved vote

        Raises:
            ConflictError: If a vote already exists for this user/target
        """
        pass

    @abstractmethod
    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Optional[Vote]:
        """Change the value of an existing vote in place.

        Args:
            vote_id: The vote ID
            value: New value

        Returns:
            The updated vote, or None if the row no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote (toggle-off).

        Args:
            vote_id: The vote ID

        Returns:
            True if a row was deleted, False if it no longer existed
        """
        pass

    @abstractmethod
    async def sum_by_votable(self, votable_type: VotableType, votable_id: UUID) -> int:
        """Sum vote values for one target.

        Returns:
            The sum, 0 when the target has no votes
        """
        pass

    @abstractmethod
    async def sum_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Sum vote values per target for several targets (batch query).

        Returns:
            Mapping target ID -> sum; targets without votes may be absent
        """
        pass
