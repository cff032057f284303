"""End-to-end tests for the response envelope, auth guards and health."""

from bazaar.domain.value import Role


class TestHealth:
    """Tests for the health endpoint."""

    def test_health_reports_ok(self, api):
        """Should report status inside the success envelope."""
        response = api.anonymous.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["version"] == "0.1.0"


class TestAuthentication:
    """Tests for cookie authentication."""

    def test_me_returns_principal(self, api):
        """Should resolve the user behind the cookie."""
        user, token = api.add_user("Alice")

        response = api.client_for(token).get("/auth/me")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user_id"] == str(user.id)
        assert data["name"] == "Alice"
        assert data["role"] == "user"

    def test_missing_cookie_is_unauthenticated(self, api):
        """Should reject protected routes without a token."""
        response = api.anonymous.get("/auth/me")

        assert response.status_code == 401
        assert response.json() == {
            "ok": False,
            "kind": "Unauthenticated",
            "message": "Access denied. No token provided.",
        }

    def test_garbage_token_is_unauthenticated(self, api):
        """Should reject a token that does not verify."""
        response = api.client_for("not-a-jwt").post(
            "/community/questions", json={"title": "Hello", "content": "World"}
        )

        assert response.status_code == 401
        assert response.json()["kind"] == "Unauthenticated"

    def test_admin_routes_reject_regular_users(self, api):
        """Should answer 403 when a non-admin calls an admin route."""
        _, token = api.add_user("Alice")
        client = api.client_for(token)

        for path in ("/community/stats", "/queries/admin/all", "/queries/admin/stats"):
            response = client.get(path)
            assert response.status_code == 403, path
            assert response.json()["kind"] == "Forbidden"

    def test_admin_can_read_community_stats(self, api):
        """Should serve stats to admins."""
        _, token = api.add_user("Root", role=Role.ADMIN)

        response = api.client_for(token).get("/community/stats")

        assert response.status_code == 200
        assert response.json()["data"]["total_questions"] == 0


class TestValidationEnvelope:
    """Tests for request validation failures."""

    def test_malformed_body_is_validation_error(self, api):
        """Should wrap request validation failures in the error envelope."""
        _, token = api.add_user("Alice")

        response = api.client_for(token).post(
            "/community/questions", json={"content": "No title"}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["ok"] is False
        assert body["kind"] == "ValidationError"
        assert "title" in body["message"]

    def test_out_of_range_page_size_is_rejected(self, api):
        """Should refuse page sizes above the maximum."""
        response = api.anonymous.get("/community/questions?limit=101")

        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"

    def test_bad_path_id_is_rejected(self, api):
        """Should refuse identifiers that are not UUIDs."""
        response = api.anonymous.get("/community/questions/not-a-uuid")

        assert response.status_code == 422

    def test_domain_validation_is_unprocessable(self, api):
        """Should map domain validation errors to 422."""
        _, token = api.add_user("Alice")

        response = api.client_for(token).post(
            "/community/questions", json={"title": "   ", "content": "Body"}
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "ValidationError"

    def test_unknown_question_is_not_found(self, api):
        """Should answer 404 for a missing question."""
        response = api.anonymous.get(
            "/community/questions/00000000-0000-0000-0000-000000000000"
        )

        assert response.status_code == 404
        assert response.json()["kind"] == "NotFound"
