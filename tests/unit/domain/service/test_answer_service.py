"""Unit tests for AnswerService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from forum.domain.error import ForbiddenError, NotFoundError
from forum.domain.repository import AnswerRepository, QuestionRepository
from forum.domain.service import AnswerService, QuestionService
from forum.domain.value import UserRole
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestAnswerService:
    """Tests for AnswerService."""

    @pytest.mark.asyncio
    async def test_create_answer(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        question = make_question(make_user("alice"))
        await question_repo.save(question)
        bob = make_user("bob")

        answer = await answer_service.create_answer(
            question.id, bob, "Slicing with [::-1] returns a reversed copy."
        )

        assert answer.question_id == question.id
        assert answer.author_handle == bob.handle
        assert await answer_service.count_answers([question.id]) == {question.id: 1}

    @pytest.mark.asyncio
    async def test_create_answer_on_missing_question(self, unit_env):
        answer_service = await unit_env.get(AnswerService)

        with pytest.raises(NotFoundError):
            await answer_service.create_answer(
                uuid4(), make_user("bob"), "An answer to nothing at all."
            )

    @pytest.mark.asyncio
    async def test_answers_listed_newest_first(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        question = make_question(make_user("alice"))
        await question_repo.save(question)
        older = make_answer(question, make_user("bob"), age=timedelta(hours=1))
        newer = make_answer(question, make_user("carol"))
        await answer_repo.save(older)
        await answer_repo.save(newer)

        answers = await answer_service.get_answers_for_question(question.id)

        assert [a.id for a in answers] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_admin_can_edit_any_answer(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        answer = make_answer(make_question(make_user("alice")), make_user("bob"))
        await answer_repo.save(answer)
        admin = make_user("moderator", role=UserRole.ADMIN)

        updated = await answer_service.update_answer(
            answer.id, admin, "Edited by a moderator for clarity."
        )

        assert updated.content == "Edited by a moderator for clarity."
        assert updated.author_id == answer.author_id

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        answer_repo = await unit_env.get(AnswerRepository)
        answer = make_answer(make_question(make_user("alice")), make_user("bob"))
        await answer_repo.save(answer)

        with pytest.raises(ForbiddenError):
            await answer_service.delete_answer(answer.id, make_user("mallory"))

        assert await answer_repo.exists(answer.id)

    @pytest.mark.asyncio
    async def test_deleting_accepted_answer_clears_acceptance(self, unit_env):
        answer_service = await unit_env.get(AnswerService)
        question_service = await unit_env.get(QuestionService)
        question_repo = await unit_env.get(QuestionRepository)
        answer_repo = await unit_env.get(AnswerRepository)
        alice, bob = make_user("alice"), make_user("bob")
        question = make_question(alice)
        await question_repo.save(question)
        answer = make_answer(question, bob)
        await answer_repo.save(answer)
        await question_service.accept_answer(question.id, answer.id, alice.id)

        await answer_service.delete_answer(answer.id, bob)

        stored = await question_repo.find_by_id(question.id)
        assert stored.accepted_answer_id is None
        assert not await answer_repo.exists(answer.id)
