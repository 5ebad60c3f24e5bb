"""Answer domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.model import Answer, User
from forum.domain.repository import AnswerRepository, QuestionRepository
from forum.domain.value import AnswerId, QuestionId

from .base import Service


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository

    async def create_answer(
        self, question_id: QuestionId, author: User, content: str
    ) -> Answer:
        """Answer a question.

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span(
            "answer_service.create_answer",
            question_id=str(question_id),
            author_id=str(author.id),
        ):
            if not await self.question_repository.exists(question_id):
                logfire.warn("Answer on non-existent question", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))

            now = datetime.now()
            answer = Answer(
                id=AnswerId(uuid4()),
                question_id=question_id,
                author_id=author.id,
                author_handle=author.handle,
                content=content,
                created_at=now,
                updated_at=now,
            )
            saved = await self.answer_repository.save(answer)
            logfire.info("Answer created", answer_id=str(saved.id))
            return saved

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If the answer does not exist
        """
        with logfire.span("answer_service.get_answer", answer_id=str(answer_id)):
            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer:
                logfire.warn("Answer not found", answer_id=str(answer_id))
                raise NotFoundError("Answer", str(answer_id))
            return answer

    async def get_answers_for_question(self, question_id: QuestionId) -> list[Answer]:
        """Get all answers to a question, newest first."""
        with logfire.span(
            "answer_service.get_answers_for_question", question_id=str(question_id)
        ):
            answers = await self.answer_repository.find_by_question(question_id)
            logfire.info("Answers retrieved", count=len(answers))
            return answers

    async def count_answers(
        self, question_ids: list[QuestionId]
    ) -> dict[QuestionId, int]:
        """Count answers for a batch of questions."""
        if not question_ids:
            return {}
        return await self.answer_repository.count_by_questions(question_ids)

    async def update_answer(
        self, answer_id: AnswerId, requester: User, content: str
    ) -> Answer:
        """Edit an answer's content (author or administrator).

        Raises:
            NotFoundError: If the answer does not exist
            ForbiddenError: If the requester may not edit it
        """
        with logfire.span(
            "answer_service.update_answer",
            answer_id=str(answer_id),
            requester_id=str(requester.id),
        ):
            answer = await self.get_answer(answer_id)
            self._check_can_modify(answer, requester, "edit")

            updated = Answer.model_validate(
                {**answer.model_dump(), "content": content, "updated_at": datetime.now()}
            )
            saved = await self.answer_repository.save(updated)
            logfire.info("Answer updated", answer_id=str(answer_id))
            return saved

    async def delete_answer(self, answer_id: AnswerId, requester: User) -> None:
        """Delete an answer (author or administrator).

        Clears the question's acceptance if this was the accepted answer.

        Raises:
            NotFoundError: If the answer does not exist
            ForbiddenError: If the requester may not delete it
        """
        with logfire.span(
            "answer_service.delete_answer",
            answer_id=str(answer_id),
            requester_id=str(requester.id),
        ):
            answer = await self.get_answer(answer_id)
            self._check_can_modify(answer, requester, "delete")

            question = await self.question_repository.find_by_id(answer.question_id)
            if question and question.accepted_answer_id == answer_id:
                await self.question_repository.set_accepted_answer(question.id, None)
                logfire.info(
                    "Acceptance cleared", question_id=str(question.id)
                )

            await self.answer_repository.delete(answer_id)
            logfire.info("Answer deleted", answer_id=str(answer_id))

    def _check_can_modify(self, answer: Answer, requester: User, action: str) -> None:
        if answer.author_id == requester.id or requester.is_admin:
            return
        logfire.warn(
            f"Unauthorized answer {action} attempt",
            answer_id=str(answer.id),
            requester_id=str(requester.id),
        )
        raise ForbiddenError("Answer", str(answer.id), str(requester.id), action)
