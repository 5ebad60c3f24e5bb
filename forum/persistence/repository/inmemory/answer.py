"""In-memory answer repository for testing."""

from typing import Optional, Sequence

from forum.domain.model.answer import Answer
from forum.domain.repository.answer import AnswerRepository
from forum.domain.value import AnswerId, QuestionId

from .store import InMemoryStore


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        return self._store.answers.get(answer_id)

    async def find_for_question(
        self, answer_id: AnswerId, question_id: QuestionId
    ) -> Optional[Answer]:
        """Find an answer only if it belongs to the given question."""
        answer = self._store.answers.get(answer_id)
        if answer and answer.question_id == question_id:
            return answer
        return None

    async def exists(self, answer_id: AnswerId) -> bool:
        """Check whether an answer exists."""
        return answer_id in self._store.answers

    async def find_by_question(self, question_id: QuestionId) -> list[Answer]:
        """Find all answers to a question, newest first."""
        answers = [a for a in self._store.answers.values() if a.question_id == question_id]
        return sorted(answers, key=lambda a: a.created_at, reverse=True)

    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        """Count answers per question."""
        wanted = set(question_ids)
        counts: dict[QuestionId, int] = {}
        for answer in self._store.answers.values():
            if answer.question_id in wanted:
                counts[answer.question_id] = counts.get(answer.question_id, 0) + 1
        return counts

    async def save(self, answer: Answer) -> Answer:
        """Save an answer."""
        self._store.answers[answer.id] = answer
        return answer

    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer."""
        self._store.answers.pop(answer_id, None)
