"""Tests for the role gate and role-protected endpoints."""

from fastapi.testclient import TestClient

from app.models.user import User
from app.services.authorization import PROTECTED_OPERATIONS, ProtectedOperation, authorize
from app.services.result import ErrorKind

ADMIN_ONLY = ProtectedOperation("admin_only", frozenset({"admin"}))


def _user(*roles: str) -> User:
    return User(id="0ea31cf0-8283-4661-bb6e-774f6f095e55", name="Gate Tester", roles=list(roles))


class TestAuthorize:
    """Tests for the authorize function."""

    def test_user_role_forbidden(self):
        result = authorize(_user("user"), ADMIN_ONLY)
        assert result.error == ErrorKind.FORBIDDEN
        assert "Gate Tester" in result.detail
        assert "admin" in result.detail

    def test_any_matching_role_allowed(self):
        assert authorize(_user("user", "admin"), ADMIN_ONLY).success

    def test_any_of_several_required_roles(self):
        operation = ProtectedOperation("either", frozenset({"admin", "auditor"}))
        assert authorize(_user("auditor"), operation).success

    def test_no_required_roles_allows_everyone(self):
        assert authorize(_user(), ProtectedOperation("open")).success
        assert authorize(_user("user"), None).success

    def test_missing_principal(self):
        assert authorize(None, ADMIN_ONLY).error == ErrorKind.MISSING_PRINCIPAL

    def test_registry_declares_admin_mutations(self):
        assert PROTECTED_OPERATIONS["update_user"].required_roles == frozenset({"admin"})
        assert PROTECTED_OPERATIONS["deactivate_user"].required_roles == frozenset({"admin"})


class TestProtectedEndpoints:
    """Tests for role-gated user mutations."""

    def test_update_requires_token(self, client: TestClient, test_user: dict):
        response = client.patch(f"/api/v1/users/{test_user['id']}", json={"name": "x"})
        assert response.status_code == 401

    def test_update_forbidden_for_user_role(self, client: TestClient, test_user: dict):
        response = client.patch(
            f"/api/v1/users/{test_user['id']}",
            json={"name": "x"},
            headers=test_user["headers"],
        )
        assert response.status_code == 403
        assert "admin" in response.json()["detail"]

    def test_deactivate_forbidden_for_user_role(self, client: TestClient, test_user: dict, admin_user: dict):
        response = client.delete(f"/api/v1/users/{admin_user['id']}", headers=test_user["headers"])
        assert response.status_code == 403

    def test_deactivated_admin_cannot_act(self, client: TestClient, db_session, test_user: dict, admin_user: dict):
        admin = db_session.get(User, admin_user["id"])
        admin.is_active = False
        db_session.commit()

        response = client.delete(f"/api/v1/users/{test_user['id']}", headers=admin_user["headers"])
        assert response.status_code == 401

    def test_invalid_id_checked_after_auth(self, client: TestClient, admin_user: dict):
        response = client.delete("/api/v1/users/not-a-uuid", headers=admin_user["headers"])
        assert response.status_code == 400
