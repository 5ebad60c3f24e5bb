"""Unit tests for VoteService."""

from uuid import UUID, uuid4

import pydantic
import pytest

from forum.config import VotingSettings
from forum.domain.error import (
    ConflictError,
    InvalidValueError,
    NotFoundError,
    UnauthenticatedError,
)
from forum.domain.model.vote import Vote, VoteProjection
from forum.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import VoteService
from forum.domain.service.vote_service import parse_vote_value
from forum.domain.value import UserId, VotableType, VoteId, VoteOutcome, VoteValue
from forum.persistence.repository.inmemory import (
    InMemoryAnswerRepository,
    InMemoryQuestionRepository,
    InMemoryStore,
    InMemoryVoteRepository,
)
from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def _seed_question(env):
    """Save an author and a question; return the question."""
    author = make_user("author")
    await (await env.get(UserRepository)).save(author)
    question = make_question(author)
    await (await env.get(QuestionRepository)).save(question)
    return question


class TestParseVoteValue:
    """Tests for parse_vote_value."""

    def test_accepts_up_and_down(self):
        assert parse_vote_value(1) == VoteValue.UP
        assert parse_vote_value(-1) == VoteValue.DOWN

    @pytest.mark.parametrize("value", [0, 2, -2, True, False, "1", 1.0, None])
    def test_rejects_everything_else(self, value):
        with pytest.raises(InvalidValueError) as exc_info:
            parse_vote_value(value)
        assert exc_info.value.field == "value"


class TestCastVoteToggle:
    """Tests for the create / retract / switch transitions."""

    @pytest.mark.asyncio
    async def test_first_vote_is_created(self, unit_env):
        """A vote with no prior vote should be created."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _seed_question(unit_env)
        voter_id = UserId(uuid4())

        # Act
        outcome = await vote_service.cast_vote(
            voter_id, VotableType.QUESTION, question.id, 1
        )

        # Assert
        assert outcome == VoteOutcome.CREATED
        vote = await vote_repo.find_by_user_and_votable(
            voter_id, VotableType.QUESTION, question.id
        )
        assert vote is not None
        assert vote.value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_same_value_twice_retracts(self, unit_env):
        """Casting the same value again removes the vote entirely."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _seed_question(unit_env)
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(voter_id, VotableType.QUESTION, question.id, 1)

        # Act
        outcome = await vote_service.cast_vote(
            voter_id, VotableType.QUESTION, question.id, 1
        )

        # Assert
        assert outcome == VoteOutcome.RETRACTED
        assert (
            await vote_repo.find_by_user_and_votable(
                voter_id, VotableType.QUESTION, question.id
            )
            is None
        )
        projection = await vote_service.project(
            VotableType.QUESTION, question.id, voter_id
        )
        assert projection == VoteProjection(vote_count=0, caller_vote=None)

    @pytest.mark.asyncio
    async def test_opposite_value_switches_with_swing_of_two(self, unit_env):
        """Switching from +1 to -1 keeps one vote and moves the count by -2."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _seed_question(unit_env)
        voter_id = UserId(uuid4())
        await vote_service.cast_vote(voter_id, VotableType.QUESTION, question.id, 1)
        before = await vote_service.project(VotableType.QUESTION, question.id)

        # Act
        outcome = await vote_service.cast_vote(
            voter_id, VotableType.QUESTION, question.id, -1
        )

        # Assert
        assert outcome == VoteOutcome.SWITCHED
        after = await vote_service.project(VotableType.QUESTION, question.id, voter_id)
        assert after.vote_count - before.vote_count == -2
        assert after.caller_vote == VoteValue.DOWN

        votes = await vote_repo.find_by_user_and_votables(
            voter_id, VotableType.QUESTION, [question.id]
        )
        assert len(votes) == 1
        assert votes[0].value == VoteValue.DOWN

    @pytest.mark.asyncio
    async def test_two_voters_on_question(self, unit_env):
        """u1 up, u2 down, u1 up again leaves u2's vote only."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question = await _seed_question(unit_env)
        u1, u2 = UserId(uuid4()), UserId(uuid4())

        # Act & Assert
        await vote_service.cast_vote(u1, VotableType.QUESTION, question.id, 1)
        await vote_service.cast_vote(u2, VotableType.QUESTION, question.id, -1)
        assert (
            await vote_service.project(VotableType.QUESTION, question.id)
        ).vote_count == 0

        await vote_service.cast_vote(u1, VotableType.QUESTION, question.id, 1)
        assert await vote_service.project(
            VotableType.QUESTION, question.id, u1
        ) == VoteProjection(vote_count=-1, caller_vote=None)
        assert await vote_service.project(
            VotableType.QUESTION, question.id, u2
        ) == VoteProjection(vote_count=-1, caller_vote=VoteValue.DOWN)

    @pytest.mark.asyncio
    async def test_answer_votes_use_the_same_toggle(self, unit_env):
        """Up then down on an answer nets to a single -1 vote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        answer_repo = await unit_env.get(AnswerRepository)
        question = await _seed_question(unit_env)
        answer = make_answer(question, make_user("helper"))
        await answer_repo.save(answer)
        voter_id = UserId(uuid4())

        # Act
        await vote_service.cast_vote(voter_id, VotableType.ANSWER, answer.id, 1)
        await vote_service.cast_vote(voter_id, VotableType.ANSWER, answer.id, -1)

        # Assert
        projection = await vote_service.project(VotableType.ANSWER, answer.id, voter_id)
        assert projection.vote_count == -1
        assert projection.caller_vote == VoteValue.DOWN
        # The question is a separate target
        assert (
            await vote_service.project(VotableType.QUESTION, question.id)
        ).vote_count == 0


class TestCastVoteRejections:
    """Tests for the checks run before any ledger write."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, 2, True, "1"])
    async def test_invalid_value_rejected(self, unit_env, value):
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        question = await _seed_question(unit_env)

        with pytest.raises(InvalidValueError):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.QUESTION, question.id, value
            )

        assert await vote_repo.sum_by_votable(VotableType.QUESTION, question.id) == 0

    @pytest.mark.asyncio
    async def test_invalid_value_reported_before_missing_voter(self, unit_env):
        """Value is validated first, even for anonymous callers."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidValueError):
            await vote_service.cast_vote(None, VotableType.QUESTION, uuid4(), 5)

    @pytest.mark.asyncio
    async def test_anonymous_voter_rejected(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _seed_question(unit_env)

        with pytest.raises(UnauthenticatedError):
            await vote_service.cast_vote(None, VotableType.QUESTION, question.id, 1)

    @pytest.mark.asyncio
    async def test_anonymous_voter_rejected_before_target_lookup(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(UnauthenticatedError):
            await vote_service.cast_vote(None, VotableType.ANSWER, uuid4(), -1)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("votable_type", [VotableType.QUESTION, VotableType.ANSWER])
    async def test_missing_target_rejected(self, unit_env, votable_type):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.cast_vote(UserId(uuid4()), votable_type, uuid4(), 1)

        assert exc_info.value.resource == votable_type.value.capitalize()

    @pytest.mark.asyncio
    async def test_question_id_is_not_an_answer(self, unit_env):
        """A question ID cast as an answer target is not found."""
        vote_service = await unit_env.get(VoteService)
        question = await _seed_question(unit_env)

        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                UserId(uuid4()), VotableType.ANSWER, question.id, 1
            )


class RacingVoteRepository(InMemoryVoteRepository):
    """Vote repository whose first ``races`` inserts lose to a competing cast.

    The competing cast by the same voter lands just before the insert, the
    way a concurrent request would trip the unique constraint.
    """

    def __init__(self, store: InMemoryStore, competing_value: VoteValue, races: int = 1):
        super().__init__(store)
        self.competing_value = competing_value
        self.races = races
        self.conflicts = 0

    async def save(self, vote: Vote) -> Vote:
        if self.races:
            self.races -= 1
            self.conflicts += 1
            competing = vote.model_copy(
                update={"id": VoteId(uuid4()), "value": self.competing_value}
            )
            self._store.votes[competing.id] = competing
            raise ConflictError("duplicate key value violates unique constraint")
        return await super().save(vote)


class BlindRacingVoteRepository(RacingVoteRepository):
    """Racing repository whose lookups never see the competing vote."""

    async def find_by_user_and_votable(self, user_id, votable_type, votable_id):
        return None


class TestCastVoteConflicts:
    """Tests for retrying a cast that lost a race."""

    @staticmethod
    def _service(store: InMemoryStore, votes: VoteRepository, retries: int) -> VoteService:
        return VoteService(
            vote_repository=votes,
            question_repository=InMemoryQuestionRepository(store),
            answer_repository=InMemoryAnswerRepository(store),
            voting_settings=VotingSettings(conflict_retries=retries),
        )

    def test_negative_retry_count_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            VotingSettings(conflict_retries=-1)

    @pytest.mark.asyncio
    async def test_conflict_retried_against_fresh_lookup(self):
        """The retry sees the competing vote and applies the toggle to it."""
        # Arrange
        store = InMemoryStore()
        question = make_question(make_user("author"))
        store.questions[question.id] = question
        votes = RacingVoteRepository(store, competing_value=VoteValue.DOWN)
        service = self._service(store, votes, retries=1)
        voter_id = UserId(uuid4())

        # Act
        outcome = await service.cast_vote(voter_id, VotableType.QUESTION, question.id, 1)

        # Assert
        assert votes.conflicts == 1
        assert outcome == VoteOutcome.SWITCHED
        assert len(store.votes) == 1
        assert next(iter(store.votes.values())).value == VoteValue.UP

    @pytest.mark.asyncio
    async def test_conflict_surfaces_without_retries(self):
        store = InMemoryStore()
        question = make_question(make_user("author"))
        store.questions[question.id] = question
        votes = RacingVoteRepository(store, competing_value=VoteValue.UP)
        service = self._service(store, votes, retries=0)

        with pytest.raises(ConflictError):
            await service.cast_vote(UserId(uuid4()), VotableType.QUESTION, question.id, 1)

        assert votes.conflicts == 1

    @pytest.mark.asyncio
    async def test_conflict_surfaces_when_retry_also_loses(self):
        store = InMemoryStore()
        question = make_question(make_user("author"))
        store.questions[question.id] = question
        votes = BlindRacingVoteRepository(store, competing_value=VoteValue.UP, races=5)
        service = self._service(store, votes, retries=1)

        with pytest.raises(ConflictError):
            await service.cast_vote(UserId(uuid4()), VotableType.QUESTION, question.id, 1)

        assert votes.conflicts == 2


class TestProjection:
    """Tests for project and project_many."""

    @pytest.mark.asyncio
    async def test_unvoted_target_projects_empty(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _seed_question(unit_env)

        projection = await vote_service.project(
            VotableType.QUESTION, question.id, UserId(uuid4())
        )

        assert projection == VoteProjection.empty()

    @pytest.mark.asyncio
    async def test_anonymous_caller_sees_count_only(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question = await _seed_question(unit_env)
        await vote_service.cast_vote(UserId(uuid4()), VotableType.QUESTION, question.id, 1)
        await vote_service.cast_vote(UserId(uuid4()), VotableType.QUESTION, question.id, 1)

        projection = await vote_service.project(VotableType.QUESTION, question.id)

        assert projection.vote_count == 2
        assert projection.caller_vote is None

    @pytest.mark.asyncio
    async def test_project_many_covers_every_id(self, unit_env):
        """Every requested ID gets an entry, voted on or not."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        author = make_user("author")
        voted, untouched = make_question(author), make_question(author)
        await question_repo.save(voted)
        await question_repo.save(untouched)
        caller = UserId(uuid4())
        await vote_service.cast_vote(caller, VotableType.QUESTION, voted.id, -1)
        await vote_service.cast_vote(UserId(uuid4()), VotableType.QUESTION, voted.id, -1)

        # Act
        projections = await vote_service.project_many(
            VotableType.QUESTION, [voted.id, untouched.id], caller
        )

        # Assert
        assert projections[UUID(str(voted.id))] == VoteProjection(
            vote_count=-2, caller_vote=VoteValue.DOWN
        )
        assert projections[UUID(str(untouched.id))] == VoteProjection.empty()

    @pytest.mark.asyncio
    async def test_project_many_with_no_ids(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.project_many(VotableType.ANSWER, []) == {}
