"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from forum.domain.error import InvalidValueError, UnauthenticatedError
from forum.domain.repository import QuestionRepository, UserRepository, VoteRepository
from forum.domain.service import VoteService
from forum.domain.value import VotableType, VoteOutcome
from tests.conftest import make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_reports_each_transition(self, unit_env):
        """Up, down, down reports created, switched, retracted."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        question_repo = await unit_env.get(QuestionRepository)
        question = make_question(make_user("alice"))
        await question_repo.save(question)
        voter = make_user("voter")
        await (await unit_env.get(UserRepository)).save(voter)
        voter_id = str(voter.id)

        def request(value):
            return CastVoteRequest(
                votable_type=VotableType.QUESTION,
                votable_id=str(question.id),
                voter_id=voter_id,
                value=value,
            )

        # Act
        outcomes = [
            (await use_case.execute(request(value))).outcome for value in (1, -1, -1)
        ]

        # Assert
        assert outcomes == [
            VoteOutcome.CREATED,
            VoteOutcome.SWITCHED,
            VoteOutcome.RETRACTED,
        ]
        vote_service = await unit_env.get(VoteService)
        projection = await vote_service.project(VotableType.QUESTION, question.id)
        assert projection.vote_count == 0

    @pytest.mark.asyncio
    async def test_anonymous_request_rejected(self, unit_env):
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.ANSWER,
                    votable_id=str(uuid4()),
                    voter_id=None,
                    value=1,
                )
            )

    @pytest.mark.asyncio
    async def test_value_passed_through_unparsed(self, unit_env):
        """String values are not coerced to integers."""
        use_case = await unit_env.get(CastVoteUseCase)

        with pytest.raises(InvalidValueError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.QUESTION,
                    votable_id=str(uuid4()),
                    voter_id=str(uuid4()),
                    value="1",
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_voter_rejected(self, unit_env):
        """A voter that is not a stored user cannot vote."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        question = make_question(make_user("alice"))
        await (await unit_env.get(QuestionRepository)).save(question)

        # Act / Assert
        with pytest.raises(UnauthenticatedError):
            await use_case.execute(
                CastVoteRequest(
                    votable_type=VotableType.QUESTION,
                    votable_id=str(question.id),
                    voter_id=str(uuid4()),
                    value=1,
                )
            )
        vote_repo = await unit_env.get(VoteRepository)
        assert await vote_repo.sum_by_votable(VotableType.QUESTION, question.id) == 0
