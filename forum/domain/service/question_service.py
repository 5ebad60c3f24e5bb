"""Question domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import ForbiddenError, NotFoundError, ValidationError
from forum.domain.model import Question, User
from forum.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    QuestionSortOrder,
)
from forum.domain.value import AnswerId, QuestionId, TagName, UserId

from .base import Service
from .tag_service import TagService

MAX_TAGS = 5


def normalize_tag_names(
    raw_names: list[str], max_count: int | None = MAX_TAGS
) -> list[TagName]:
    """Trim, lower-case and de-duplicate tag names, keeping first-seen order.

    Args:
        raw_names: Names as submitted
        max_count: Upper bound on distinct names (None for no bound)

    Raises:
        ValidationError: If a name is malformed or the count is out of range
    """
    names: list[TagName] = []
    seen: set[str] = set()
    for raw in raw_names:
        try:
            name = TagName.normalize(raw)
        except PydanticValidationError:
            raise ValidationError(f"Invalid tag name: {raw!r}", field="tags")
        if name.root not in seen:
            seen.add(name.root)
            names.append(name)

    if not names:
        raise ValidationError("At least one tag is required", field="tags")
    if max_count is not None and len(names) > max_count:
        raise ValidationError(f"At most {max_count} tags are allowed", field="tags")
    return names


class QuestionService(Service):
    """Domain service for question operations."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        tag_service: TagService,
    ) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            tag_service: Tag domain service
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.tag_service = tag_service

    async def create_question(
        self, author: User, title: str, description: str, tag_names: list[str]
    ) -> Question:
        """Create a question, creating any tags it introduces.

        Args:
            author: Authenticated author
            title: Question title
            description: Question body
            tag_names: Raw tag names as submitted

        Returns:
            Saved question

        Raises:
            ValidationError: If tags are invalid
        """
        with logfire.span(
            "question_service.create_question", author_id=str(author.id), title=title
        ):
            names = normalize_tag_names(tag_names)
            await self.tag_service.ensure_tags(names)

            now = datetime.now()
            question = Question(
                id=QuestionId(uuid4()),
                title=title,
                description=description,
                author_id=author.id,
                author_handle=author.handle,
                tag_names=names,
                accepted_answer_id=None,
                created_at=now,
                updated_at=now,
            )
            saved = await self.question_repository.save(question)
            logfire.info("Question created", question_id=str(saved.id))
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question by ID.

        Raises:
            NotFoundError: If the question does not exist
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))
            return question

    async def list_questions(
        self,
        sort: QuestionSortOrder,
        search: Optional[str],
        tags: Optional[list[TagName]],
        limit: int,
        offset: int,
    ) -> tuple[list[Question], int]:
        """List a page of questions and the total matching the filters.

        Returns:
            (questions on this page, total count)
        """
        with logfire.span(
            "question_service.list_questions",
            sort=sort.value,
            search=search,
            tags=[t.root for t in tags] if tags else None,
            limit=limit,
            offset=offset,
        ):
            questions = await self.question_repository.find_all(
                sort=sort, search=search, tags=tags, limit=limit, offset=offset
            )
            total = await self.question_repository.count(search=search, tags=tags)
            logfire.info("Questions listed", count=len(questions), total=total)
            return questions, total

    async def update_question(
        self,
        question_id: QuestionId,
        requester: User,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tag_names: Optional[list[str]] = None,
    ) -> Question:
        """Partially update a question.

        Only the author or an administrator may edit.

        Raises:
            NotFoundError: If the question does not exist
            ForbiddenError: If the requester may not edit it
            ValidationError: If tags are invalid
        """
        with logfire.span(
            "question_service.update_question",
            question_id=str(question_id),
            requester_id=str(requester.id),
        ):
            question = await self.get_question(question_id)
            self._check_can_modify(question, requester, "edit")

            update: dict = {"updated_at": datetime.now()}
            if title is not None:
                update["title"] = title
            if description is not None:
                update["description"] = description
            if tag_names is not None:
                names = normalize_tag_names(tag_names)
                await self.tag_service.ensure_tags(names)
                update["tag_names"] = names

            # model_copy skips validation
            updated = Question.model_validate(
                {**question.model_dump(), **update}
            )
            saved = await self.question_repository.save(updated)
            logfire.info("Question updated", question_id=str(question_id))
            return saved

    async def delete_question(self, question_id: QuestionId, requester: User) -> None:
        """Delete a question and its answers.

        Votes pointing at the question or its answers are left in place.

        Raises:
            NotFoundError: If the question does not exist
            ForbiddenError: If the requester may not delete it
        """
        with logfire.span(
            "question_service.delete_question",
            question_id=str(question_id),
            requester_id=str(requester.id),
        ):
            question = await self.get_question(question_id)
            self._check_can_modify(question, requester, "delete")
            await self.question_repository.delete(question_id)
            logfire.info("Question deleted", question_id=str(question_id))

    async def accept_answer(
        self, question_id: QuestionId, answer_id: AnswerId, requester_id: UserId
    ) -> Question:
        """Mark an answer as the accepted one.

        Only the question's author may accept; administrators get no
        override. The question holds a single slot: accepting another
        answer replaces the previous one, re-accepting is a no-op.

        Args:
            question_id: Question ID
            answer_id: Answer to accept
            requester_id: Authenticated requester

        Returns:
            The question with the accepted answer set

        Raises:
            NotFoundError: If the question is missing, or the answer is
                missing or belongs to another question
            ForbiddenError: If the requester is not the question author
        """
        with logfire.span(
            "question_service.accept_answer",
            question_id=str(question_id),
            answer_id=str(answer_id),
            requester_id=str(requester_id),
        ):
            question = await self.get_question(question_id)

            if question.author_id != requester_id:
                logfire.warn(
                    "Accept attempted by non-author",
                    question_id=str(question_id),
                    requester_id=str(requester_id),
                )
                raise ForbiddenError(
                    "Question", str(question_id), str(requester_id), "accept answers on"
                )

            answer = await self.answer_repository.find_for_question(
                answer_id, question_id
            )
            if not answer:
                logfire.warn(
                    "Answer not found for question",
                    question_id=str(question_id),
                    answer_id=str(answer_id),
                )
                raise NotFoundError("Answer", str(answer_id))

            if question.accepted_answer_id == answer_id:
                logfire.info("Answer already accepted", answer_id=str(answer_id))
                return question

            updated = await self.question_repository.set_accepted_answer(
                question_id, answer_id
            )
            if not updated:
                raise NotFoundError("Question", str(question_id))

            logfire.info(
                "Answer accepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
                replaced=str(question.accepted_answer_id)
                if question.accepted_answer_id
                else None,
            )
            return updated

    def _check_can_modify(self, question: Question, requester: User, action: str) -> None:
        if question.author_id == requester.id or requester.is_admin:
            return
        logfire.warn(
            f"Unauthorized question {action} attempt",
            question_id=str(question.id),
            requester_id=str(requester.id),
        )
        raise ForbiddenError("Question", str(question.id), str(requester.id), action)
