"""End-to-end tests for /auth/me, /tags and /health."""

from tests.conftest import make_user
from tests.harness import create_client_fixture, get_store, login_as

client = create_client_fixture()


class TestAuthMe:
    """End-to-end tests for GET /auth/me."""

    def test_anonymous(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_authenticated(self, client):
        user = make_user("alice")
        headers = login_as(client, user)

        data = client.get("/auth/me", headers=headers).json()

        assert data["authenticated"] is True
        assert data["user"]["user_id"] == str(user.id)
        assert data["user"]["handle"] == "alice"
        assert data["user"]["role"] == "user"

    def test_invalid_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})

        assert response.json()["authenticated"] is False

    def test_orphaned_token(self, client):
        headers = login_as(client, make_user("ghost"))
        get_store(client).users.clear()

        response = client.get("/auth/me", headers=headers)

        assert response.json()["authenticated"] is False


class TestTags:
    """End-to-end tests for tag listings."""

    def test_popular_tags_ordered_by_usage(self, client):
        headers = login_as(client, make_user("alice"))
        for title, tags in [
            ("Question one about python", ["python", "asyncio"]),
            ("Question two about python", ["python"]),
            ("Question three about rust", ["rust"]),
        ]:
            response = client.post(
                "/questions",
                json={"title": title, "description": "Some long enough description.", "tags": tags},
                headers=headers,
            )
            assert response.status_code == 201

        all_tags = client.get("/tags").json()["tags"]
        popular = client.get("/tags/popular", params={"limit": 1}).json()["tags"]

        assert [(t["name"], t["question_count"]) for t in all_tags] == [
            ("python", 2),
            ("asyncio", 1),
            ("rust", 1),
        ]
        assert [t["name"] for t in popular] == ["python"]

    def test_popular_limit_out_of_range(self, client):
        assert client.get("/tags/popular", params={"limit": 0}).status_code == 422


class TestHealth:
    """End-to-end tests for GET /health."""

    def test_health(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
