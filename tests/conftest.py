"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

from forum.domain.model import Answer, Question, User
from forum.domain.value import AnswerId, QuestionId, TagName, UserId, UserRole
from forum.domain.value.types import Handle


def make_user(handle: str = "alice", role: UserRole = UserRole.USER) -> User:
    """Helper to build a user with a fresh ID."""
    return User(id=UserId(uuid4()), handle=Handle(handle), role=role)


def make_question(
    author: User,
    title: str = "How do I reverse a list in Python?",
    tags: list[str] | None = None,
    age: timedelta = timedelta(0),
) -> Question:
    """Helper to build a question by ``author``.

    Args:
        author: Question author
        title: Question title (10-200 characters)
        tags: Tag names, defaults to ["python"]
        age: How long ago the question was asked
    """
    created = datetime.now() - age
    return Question(
        id=QuestionId(uuid4()),
        title=title,
        description="I have a list and need its items in reverse order.",
        author_id=author.id,
        author_handle=author.handle,
        tag_names=[TagName(t) for t in (tags or ["python"])],
        created_at=created,
        updated_at=created,
    )


def make_answer(
    question: Question,
    author: User,
    content: str = "Use reversed() or slice with [::-1].",
    age: timedelta = timedelta(0),
) -> Answer:
    """Helper to build an answer to ``question`` by ``author``."""
    created = datetime.now() - age
    return Answer(
        id=AnswerId(uuid4()),
        question_id=question.id,
        author_id=author.id,
        author_handle=author.handle,
        content=content,
        created_at=created,
        updated_at=created,
    )
