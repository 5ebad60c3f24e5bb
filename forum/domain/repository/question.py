"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from forum.domain.model.question import Question
from forum.domain.value import AnswerId, QuestionId, TagName


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # created_at DESC
    OLDEST = "oldest"  # created_at ASC
    UPDATED = "updated"  # updated_at DESC


class QuestionRepository(ABC):
    """Repository for Question aggregate."""

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, question_id: QuestionId) -> bool:
        """Check whether a question exists."""
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering and pagination.

        Args:
            sort: Sort order
            search: Case-insensitive substring of title or description
            tags: Keep questions carrying any of these tags
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> int:
        """Count questions matching the given filters."""
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Save a question (create or update, including its tag links).

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question and its answers.

        Args:
            question_id: The question ID to delete
        """
        pass

    @abstractmethod
    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> Optional[Question]:
        """Point update of the accepted-answer slot.

        Args:
            question_id: The question ID
            answer_id: Answer to accept, or None to clear

        Returns:
            The updated question, or None if it doesn't exist
        """
        pass
