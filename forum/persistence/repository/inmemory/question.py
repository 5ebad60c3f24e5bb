"""In-memory question repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.question import Question
from forum.domain.repository.question import QuestionRepository, QuestionSortOrder
from forum.domain.value import AnswerId, QuestionId, TagName

from .store import InMemoryStore


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _filtered(
        self, search: Optional[str], tags: Optional[list[TagName]]
    ) -> list[Question]:
        questions = list(self._store.questions.values())
        if search:
            needle = search.lower()
            questions = [
                q
                for q in questions
                if needle in q.title.lower() or needle in q.description.lower()
            ]
        if tags:
            wanted = {tag.root for tag in tags}
            questions = [
                q for q in questions if wanted & {t.root for t in q.tag_names}
            ]
        return questions

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        return self._store.questions.get(question_id)

    async def exists(self, question_id: QuestionId) -> bool:
        """Check whether a question exists."""
        return question_id in self._store.questions

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Question]:
        """Find questions with filtering and pagination."""
        questions = self._filtered(search, tags)

        if sort == QuestionSortOrder.OLDEST:
            questions.sort(key=lambda q: q.created_at)
        elif sort == QuestionSortOrder.UPDATED:
            questions.sort(key=lambda q: q.updated_at, reverse=True)
        else:
            questions.sort(key=lambda q: q.created_at, reverse=True)

        return questions[offset : offset + limit]

    async def count(
        self,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._filtered(search, tags))

    async def save(self, question: Question) -> Question:
        """Save a question."""
        self._store.questions[question.id] = question
        return question

    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question and its answers."""
        self._store.questions.pop(question_id, None)
        for answer_id in [
            a.id for a in self._store.answers.values() if a.question_id == question_id
        ]:
            del self._store.answers[answer_id]

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> Optional[Question]:
        """Point update of the accepted-answer slot."""
        question = self._store.questions.get(question_id)
        if question is None:
            return None
        updated = question.model_copy(
            update={"accepted_answer_id": answer_id, "updated_at": datetime.now()}
        )
        self._store.questions[question_id] = updated
        return updated
