"""End-to-end tests for question, answer and acceptance endpoints."""

from uuid import uuid4

from forum.domain.value import UserRole
from tests.conftest import make_user
from tests.harness import create_client_fixture, get_store, login_as

client = create_client_fixture()

QUESTION = {
    "title": "How do I merge two dicts in Python?",
    "description": "I want a new dict with the keys of both, right side winning.",
    "tags": ["Python", "dict", "python"],
}


def _ask(client, headers, **overrides) -> dict:
    response = client.post("/questions", json={**QUESTION, **overrides}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _answer(client, headers, question_id: str, content: str) -> dict:
    response = client.post(
        "/answers", json={"question_id": question_id, "content": content}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestQuestions:
    """End-to-end tests for /questions."""

    def test_create_question(self, client):
        headers = login_as(client, make_user("alice"))

        data = _ask(client, headers)

        assert data["tag_names"] == ["python", "dict"]
        assert data["author_handle"] == "alice"
        assert data["vote_count"] == 0

    def test_create_question_requires_auth(self, client):
        response = client.post("/questions", json=QUESTION)

        assert response.status_code == 401

    def test_token_for_unknown_user_rejected(self, client):
        headers = login_as(client, make_user("ghost"))
        get_store(client).users.clear()

        response = client.post("/questions", json=QUESTION, headers=headers)

        assert response.status_code == 401

    def test_create_question_validates_title(self, client):
        headers = login_as(client, make_user("alice"))

        response = client.post(
            "/questions", json={**QUESTION, "title": "Short"}, headers=headers
        )

        assert response.status_code == 422

    def test_bad_tag_returns_400(self, client):
        headers = login_as(client, make_user("alice"))

        response = client.post(
            "/questions", json={**QUESTION, "tags": ["no spaces allowed"]}, headers=headers
        )

        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0]["field"] == "tags"

    def test_list_questions_with_pagination_and_tags(self, client):
        headers = login_as(client, make_user("alice"))
        for i in range(3):
            _ask(client, headers, title=f"Python question number {i}")
        _ask(client, headers, title="A question about Rust lifetimes", tags=["rust"])

        page = client.get("/questions", params={"limit": 2, "page": 2}).json()
        python_only = client.get("/questions", params={"tags": "python"}).json()

        assert page["pagination"] == {"page": 2, "limit": 2, "total": 4, "pages": 2}
        assert len(page["questions"]) == 2
        assert python_only["pagination"]["total"] == 3

    def test_list_limit_out_of_range(self, client):
        response = client.get("/questions", params={"limit": 101})

        assert response.status_code == 422

    def test_get_unknown_question(self, client):
        response = client.get(f"/questions/{uuid4()}")

        assert response.status_code == 404

    def test_edit_by_author_and_admin_only(self, client):
        author_headers = login_as(client, make_user("alice"))
        other_headers = login_as(client, make_user("mallory"))
        admin_headers = login_as(client, make_user("mod", role=UserRole.ADMIN))
        question = _ask(client, author_headers)
        url = f"/questions/{question['question_id']}"

        forbidden = client.put(
            url, json={"title": "Mallory was here, title"}, headers=other_headers
        )
        by_admin = client.put(url, json={"tags": ["python", "dicts"]}, headers=admin_headers)

        assert forbidden.status_code == 403
        assert by_admin.status_code == 200
        assert client.get(url).json()["tag_names"] == ["python", "dicts"]

    def test_delete_question(self, client):
        headers = login_as(client, make_user("alice"))
        question = _ask(client, headers)
        url = f"/questions/{question['question_id']}"

        response = client.delete(url, headers=headers)

        assert response.status_code == 200
        assert client.get(url).status_code == 404


class TestAnswersAndAcceptance:
    """End-to-end tests for answers and acceptance."""

    def test_accept_answer_flow(self, client):
        # Arrange
        alice = login_as(client, make_user("alice"))
        bob = login_as(client, make_user("bob"))
        carol = login_as(client, make_user("carol"))
        question = _ask(client, alice)
        qid = question["question_id"]
        first = _answer(client, bob, qid, "Use the | operator on Python 3.9+.")
        second = _answer(client, carol, qid, "Use {**a, **b} on older versions.")

        # Act & Assert - non-author cannot accept
        response = client.post(
            f"/questions/{qid}/accept-answer/{first['answer_id']}", headers=bob
        )
        assert response.status_code == 403

        # Author accepts, then switches to the other answer
        response = client.post(
            f"/questions/{qid}/accept-answer/{first['answer_id']}", headers=alice
        )
        assert response.status_code == 200
        assert response.json()["accepted_answer_id"] == first["answer_id"]

        response = client.post(
            f"/questions/{qid}/accept-answer/{second['answer_id']}", headers=alice
        )
        assert response.status_code == 200

        # Re-accepting is a no-op
        response = client.post(
            f"/questions/{qid}/accept-answer/{second['answer_id']}", headers=alice
        )
        assert response.status_code == 200

        detail = client.get(f"/questions/{qid}").json()
        assert detail["accepted_answer_id"] == second["answer_id"]
        accepted = [a["answer_id"] for a in detail["answers"] if a["is_accepted"]]
        assert accepted == [second["answer_id"]]

    def test_accept_requires_auth(self, client):
        response = client.post(f"/questions/{uuid4()}/accept-answer/{uuid4()}")

        assert response.status_code == 401

    def test_accept_with_token_for_removed_author_rejected(self, client):
        author = make_user("alice")
        alice = login_as(client, author)
        bob = login_as(client, make_user("bob"))
        qid = _ask(client, alice)["question_id"]
        answer = _answer(client, bob, qid, "Use the | operator on both dicts.")
        del get_store(client).users[author.id]

        response = client.post(
            f"/questions/{qid}/accept-answer/{answer['answer_id']}", headers=alice
        )

        assert response.status_code == 401
        assert client.get(f"/questions/{qid}").json()["accepted_answer_id"] is None

    def test_accept_answer_of_other_question_is_404(self, client):
        alice = login_as(client, make_user("alice"))
        bob = login_as(client, make_user("bob"))
        mine = _ask(client, alice)
        other = _ask(client, bob, title="Another question entirely here")
        stray = _answer(client, bob, other["question_id"], "This answers the other one.")

        response = client.post(
            f"/questions/{mine['question_id']}/accept-answer/{stray['answer_id']}",
            headers=alice,
        )

        assert response.status_code == 404

    def test_answer_unknown_question(self, client):
        headers = login_as(client, make_user("bob"))

        response = client.post(
            "/answers",
            json={"question_id": str(uuid4()), "content": "Answering the void here."},
            headers=headers,
        )

        assert response.status_code == 404

    def test_delete_accepted_answer_clears_acceptance(self, client):
        alice = login_as(client, make_user("alice"))
        bob = login_as(client, make_user("bob"))
        question = _ask(client, alice)
        qid = question["question_id"]
        answer = _answer(client, bob, qid, "The accepted answer, for now.")
        client.post(f"/questions/{qid}/accept-answer/{answer['answer_id']}", headers=alice)

        response = client.delete(f"/answers/{answer['answer_id']}", headers=bob)

        assert response.status_code == 200
        detail = client.get(f"/questions/{qid}").json()
        assert detail["accepted_answer_id"] is None
        assert detail["answers"] == []
