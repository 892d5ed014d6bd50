"""API tests for sign-up, login, token refresh and admin role management."""

from app.models.role import RoleName
from app.seed import ensure_admin

from conftest import PASSWORD


def login(client, email, password=PASSWORD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": password})


class TestRegisterAndLogin:

    def test_new_account_is_not_admin(self, client):
        res = client.post("/api/v1/auth/register",
                          json={"email": "new@oufaris.ma", "password": "abcdef"})
        assert res.status_code == 201
        assert res.json()["data"]["role"] == "USER"
        assert res.json()["data"]["isAdmin"] is False

        token = login(client, "new@oufaris.ma", "abcdef").json()["data"]["accessToken"]
        res = client.get("/api/v1/dashboard", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 403

    def test_short_password_rejected(self, client):
        res = client.post("/api/v1/auth/register", json={"email": "x@oufaris.ma", "password": "12345"})
        assert res.status_code == 422
        assert res.json()["error"]["details"][0]["field"] == "password"

    def test_duplicate_email(self, client, plain_user):
        res = client.post("/api/v1/auth/register", json={"email": plain_user.email, "password": "abcdef"})
        assert res.status_code == 409
        assert res.json()["error"]["field"] == "email"

    def test_login_and_me(self, client, admin_user):
        body = login(client, admin_user.email).json()
        assert body["data"]["user"]["isAdmin"] is True
        assert body["data"]["tokenType"] == "Bearer"

        me = client.get("/api/v1/auth/me",
                        headers={"Authorization": f"Bearer {body['data']['accessToken']}"}).json()
        assert me["data"]["email"] == admin_user.email
        assert me["data"]["role"] == "ADMIN"

    def test_wrong_password(self, client, admin_user):
        res = login(client, admin_user.email, "wrong-password")
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid email or password"

    def test_inactive_account(self, client, db, plain_user):
        plain_user.isActive = False
        db.commit()
        res = login(client, plain_user.email)
        assert res.status_code == 403
        assert res.json()["error"]["code"] == "ACCOUNT_INACTIVE"


class TestTokens:

    def test_refresh_then_logout_revokes(self, client, admin_user):
        tokens = login(client, admin_user.email).json()["data"]

        res = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
        assert res.status_code == 200
        assert res.json()["data"]["accessToken"]

        res = client.post("/api/v1/auth/logout", json={"refreshToken": tokens["refreshToken"]},
                          headers={"Authorization": f"Bearer {tokens['accessToken']}"})
        assert res.status_code == 200

        res = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["refreshToken"]})
        assert res.status_code == 401
        assert res.json()["error"]["code"] == "REFRESH_TOKEN_INVALID"

    def test_access_token_is_not_a_refresh_token(self, client, admin_user):
        tokens = login(client, admin_user.email).json()["data"]
        res = client.post("/api/v1/auth/refresh", json={"refreshToken": tokens["accessToken"]})
        assert res.status_code == 401


class TestUserAdmin:

    def test_admin_grants_admin_rights(self, client, admin_headers, plain_user):
        res = client.patch(f"/api/v1/users/{plain_user.id}/role", json={"role": "ADMIN"},
                           headers=admin_headers)
        assert res.status_code == 200
        assert res.json()["data"]["isAdmin"] is True

        token = login(client, plain_user.email).json()["data"]["accessToken"]
        res = client.get("/api/v1/dashboard", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 200

    def test_admin_cannot_demote_self(self, client, admin_headers, admin_user):
        res = client.patch(f"/api/v1/users/{admin_user.id}/role", json={"role": "USER"},
                           headers=admin_headers)
        assert res.status_code == 403

    def test_toggle_active(self, client, admin_headers, plain_user):
        res = client.patch(f"/api/v1/users/{plain_user.id}/toggle-active", headers=admin_headers)
        assert res.json()["data"]["isActive"] is False
        assert res.json()["message"] == "User deactivated successfully"

    def test_list_users_by_role(self, client, admin_headers, plain_user):
        body = client.get("/api/v1/users", params={"role": "USER"}, headers=admin_headers).json()
        assert [u["email"] for u in body["data"]] == [plain_user.email]

    def test_plain_user_cannot_list_users(self, client, user_headers):
        assert client.get("/api/v1/users", headers=user_headers).status_code == 403


class TestBootstrapAdmin:

    def test_creates_then_promotes(self, db, plain_user):
        created = ensure_admin(db, "boss@oufaris.ma", "bootstrap-pw")
        assert created.role.name == RoleName.ADMIN

        promoted = ensure_admin(db, plain_user.email, "ignored")
        assert promoted.id == plain_user.id
        db.refresh(promoted)
        assert promoted.isAdmin

    def test_noop_without_credentials(self, db):
        assert ensure_admin(db, None, None) is None
