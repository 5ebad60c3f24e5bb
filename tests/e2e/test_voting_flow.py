"""End-to-end tests for voting endpoints."""

from uuid import uuid4

from tests.conftest import make_answer, make_question, make_user
from tests.harness import create_client_fixture, get_store, login_as

client = create_client_fixture()


def _seed_question(client, author=None):
    """Store a question (and its author) and return it."""
    author = author or make_user("author")
    store = get_store(client)
    store.users[author.id] = author
    question = make_question(author)
    store.questions[question.id] = question
    return question


class TestVoteOnQuestion:
    """End-to-end tests for POST /questions/{id}/vote."""

    def test_toggle_sequence(self, client):
        """Up, down, down: created, switched, retracted."""
        # Arrange
        question = _seed_question(client)
        headers = login_as(client, make_user("voter"))
        url = f"/questions/{question.id}/vote"

        # Act
        outcomes = [
            client.post(url, json={"value": value}, headers=headers).json()["outcome"]
            for value in (1, -1, -1)
        ]

        # Assert
        assert outcomes == ["created", "switched", "retracted"]
        detail = client.get(f"/questions/{question.id}", headers=headers).json()
        assert detail["vote_count"] == 0
        assert detail["caller_vote"] is None

    def test_vote_reflected_for_caller_only(self, client):
        question = _seed_question(client)
        voter_headers = login_as(client, make_user("voter"))
        other_headers = login_as(client, make_user("other"))

        response = client.post(
            f"/questions/{question.id}/vote", json={"value": -1}, headers=voter_headers
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Vote recorded successfully"
        mine = client.get(f"/questions/{question.id}", headers=voter_headers).json()
        theirs = client.get(f"/questions/{question.id}", headers=other_headers).json()
        anonymous = client.get(f"/questions/{question.id}").json()
        assert mine["vote_count"] == theirs["vote_count"] == anonymous["vote_count"] == -1
        assert mine["caller_vote"] == -1
        assert theirs["caller_vote"] is None
        assert anonymous["caller_vote"] is None

    def test_vote_with_auth_cookie(self, client):
        question = _seed_question(client)
        headers = login_as(client, make_user("voter"))
        token = headers["Authorization"].removeprefix("Bearer ")
        client.cookies.set("auth_token", token)

        response = client.post(f"/questions/{question.id}/vote", json={"value": 1})

        assert response.status_code == 200
        assert response.json()["outcome"] == "created"

    def test_invalid_value_returns_400_with_field(self, client):
        question = _seed_question(client)
        headers = login_as(client, make_user("voter"))

        for value in (0, 2, "1", True, None):
            response = client.post(
                f"/questions/{question.id}/vote", json={"value": value}, headers=headers
            )
            assert response.status_code == 400
            errors = response.json()["detail"]["errors"]
            assert errors[0]["field"] == "value"

    def test_invalid_value_checked_before_auth(self, client):
        response = client.post(f"/questions/{uuid4()}/vote", json={"value": 3})

        assert response.status_code == 400

    def test_unauthenticated_returns_401(self, client):
        question = _seed_question(client)

        response = client.post(f"/questions/{question.id}/vote", json={"value": 1})

        assert response.status_code == 401

    def test_invalid_token_returns_401(self, client):
        question = _seed_question(client)

        response = client.post(
            f"/questions/{question.id}/vote",
            json={"value": 1},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401

    def test_token_for_unknown_user_rejected(self, client):
        question = _seed_question(client)
        ghost = make_user("ghost")
        headers = login_as(client, ghost)
        store = get_store(client)
        del store.users[ghost.id]

        response = client.post(
            f"/questions/{question.id}/vote", json={"value": 1}, headers=headers
        )

        assert response.status_code == 401
        assert store.votes == {}

    def test_unknown_question_returns_404(self, client):
        headers = login_as(client, make_user("voter"))

        response = client.post(
            f"/questions/{uuid4()}/vote", json={"value": 1}, headers=headers
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Question not found"

    def test_malformed_id_returns_422(self, client):
        headers = login_as(client, make_user("voter"))

        response = client.post(
            "/questions/not-a-uuid/vote", json={"value": 1}, headers=headers
        )

        assert response.status_code == 422


class TestVoteOnAnswer:
    """End-to-end tests for POST /answers/{id}/vote."""

    def test_answer_votes_shown_on_question_detail(self, client):
        # Arrange
        question = _seed_question(client)
        answer = make_answer(question, make_user("helper"))
        get_store(client).answers[answer.id] = answer
        headers = login_as(client, make_user("voter"))

        # Act
        first = client.post(f"/answers/{answer.id}/vote", json={"value": 1}, headers=headers)
        second = client.post(
            f"/answers/{answer.id}/vote", json={"value": -1}, headers=headers
        )

        # Assert
        assert first.json()["outcome"] == "created"
        assert second.json()["outcome"] == "switched"
        detail = client.get(f"/questions/{question.id}", headers=headers).json()
        assert detail["vote_count"] == 0
        assert detail["answers"][0]["vote_count"] == -1
        assert detail["answers"][0]["caller_vote"] == -1

    def test_unknown_answer_returns_404(self, client):
        headers = login_as(client, make_user("voter"))

        response = client.post(f"/answers/{uuid4()}/vote", json={"value": 1}, headers=headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Answer not found"

    def test_token_for_unknown_user_rejected(self, client):
        question = _seed_question(client)
        answer = make_answer(question, make_user("helper"))
        store = get_store(client)
        store.answers[answer.id] = answer
        ghost = make_user("ghost")
        headers = login_as(client, ghost)
        del store.users[ghost.id]

        response = client.post(f"/answers/{answer.id}/vote", json={"value": -1}, headers=headers)

        assert response.status_code == 401
        assert store.votes == {}
