"""
Tests for the admin path gate
"""

from app.middleware.admin_auth import is_admin_path


class TestAdminPaths:

    def test_admin_prefixes(self):
        assert is_admin_path("/api/admin/users")
        assert is_admin_path("/api/admin")
        assert is_admin_path("/api/EventImages/admin/cleanup-expired")

    def test_matching_ignores_case(self):
        assert is_admin_path("/API/Admin/roles")
        assert is_admin_path("/api/eventimages/ADMIN/cleanup-expired")

    def test_other_paths_pass(self):
        assert not is_admin_path("/api/events")
        assert not is_admin_path("/api/EventImages/question/q1")
        assert not is_admin_path("/api/health")


class TestAdminMiddleware:
    """Requests to admin paths need a session whose user holds the Admin role"""

    def test_anonymous_request_is_rejected(self, client):
        response = client.get("/api/admin/users")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_expired_session_is_rejected(self, client, admin, login, session_clock):
        login("admin")
        session_clock.advance(hours=25)
        response = client.get("/api/admin/users")
        assert response.status_code == 401

    def test_non_admin_is_forbidden(self, client, host, login):
        login("host")
        response = client.get("/api/admin/users")
        assert response.status_code == 403
        assert response.json() == {"error": "Admin access required"}

    def test_user_without_role_is_forbidden(self, client, db_session, host, login):
        login("host")
        host.role_id = None
        db_session.commit()
        assert client.get("/api/admin/roles").status_code == 403

    def test_admin_is_forwarded(self, client, admin, login):
        login("admin")
        response = client.get("/api/admin/users")
        assert response.status_code == 200
        assert [u["Username"] for u in response.json()] == ["admin"]

    def test_image_cleanup_is_guarded(self, client, host, login):
        assert client.post("/api/EventImages/admin/cleanup-expired").status_code == 401
        login("host")
        assert client.post("/api/EventImages/admin/cleanup-expired").status_code == 403

    def test_non_admin_paths_are_untouched(self, client):
        assert client.get("/api/health").status_code == 200
