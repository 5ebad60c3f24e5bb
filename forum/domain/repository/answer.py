"""Answer repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from forum.domain.model.answer import Answer
from forum.domain.value import AnswerId, QuestionId


class AnswerRepository(ABC):
    """Repository for Answer entity."""

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        pass

    @abstractmethod
    async def find_for_question(
        self, answer_id: AnswerId, question_id: QuestionId
    ) -> Optional[Answer]:
        """Find an answer only if it belongs to the given question.

        Args:
            answer_id: The answer ID
            question_id: The expected parent question

        Returns:
            The answer, or None if absent or attached to another question
        """
        pass

    @abstractmethod
    async def exists(self, answer_id: AnswerId) -> bool:
        """Check whether an answer exists."""
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find all answers to a question, newest first."""
        pass

    @abstractmethod
    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        """Count answers per question (batch query).

        Returns:
            Mapping question ID -> answer count; questions without answers may be absent
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        pass

    @abstractmethod
    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer."""
        pass
