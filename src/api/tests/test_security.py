"""Tests for the bearer-token guard on protected routes."""

from datetime import timedelta

from adapter.jwt.token_signer import JoseTokenSigner
from route_fixtures import RouteTestCase


class TestAuthGuard(RouteTestCase):

    def test_missing_header_is_access_denied(self):
        response = self.client.get("/api/cases")

        assert response.status_code == 401
        assert response.json() == {"error": "Access denied"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_non_bearer_scheme_is_access_denied(self):
        response = self.client.get("/api/cases", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json() == {"error": "Access denied"}

    def test_garbage_token_is_invalid(self):
        response = self.client.get("/api/cases", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_token_from_other_secret_is_invalid(self):
        foreign = JoseTokenSigner("someone-elses-secret").issue("user-1")

        response = self.client.get("/api/cases", headers={"Authorization": f"Bearer {foreign}"})

        assert response.json() == {"error": "Invalid token"}

    def test_token_accepted_within_the_hour(self):
        headers = self.auth_headers("user-1")
        self.now += timedelta(minutes=59)

        response = self.client.get("/api/cases", headers=headers)

        assert response.status_code == 200

    def test_token_rejected_after_the_hour(self):
        headers = self.auth_headers("user-1")
        self.now += timedelta(hours=1, seconds=1)

        response = self.client.get("/api/cases", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_guard_runs_before_body_validation(self):
        response = self.client.put("/api/cases/case-1", json=["not", "an", "object"])

        assert response.status_code == 401

    def test_guard_runs_before_json_decoding(self):
        for method, path in (("POST", "/api/cases"), ("PUT", "/api/cases/case-1")):
            response = self.client.request(
                method, path, content=b"{not json", headers={"Content-Type": "application/json"},
            )

            assert response.status_code == 401, path
            assert response.json() == {"error": "Access denied"}

    def test_invalid_token_with_malformed_body_is_invalid_token(self):
        response = self.client.post(
            "/api/cases",
            content=b"{not json",
            headers={"Content-Type": "application/json", "Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_malformed_body_with_valid_token_is_400(self):
        response = self.client.post(
            "/api/cases",
            content=b"{not json",
            headers={"Content-Type": "application/json", **self.auth_headers("user-1")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "JSON decode error"}
