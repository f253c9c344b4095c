"""Application tests."""

import pytest
from roma_core.app import Application
from roma_core.errors import MiddlewareError
from roma_core.http.request import Request
from roma_core.utils.config import RouterConfig, load_config


class UsersController:
    def show(self, user_id):
        return {"id": user_id}

    def fail(self):
        raise ValueError("broken")


def routes(router):
    router.get("/", lambda: "home")
    router.group({"prefix": "/api", "middleware": ["auth"]}, lambda group: (
        router.get("/users/{id}", "users:show"),
        router.post("/users", lambda: "created"),
    ))
    router.get("/users/{id}", lambda user_id: f"plain {user_id}")
    router.get("/broken", "users:fail")
    router.get("/mystery", lambda: "x").middleware(["missing"])


def require_token(request):
    if request.get_header("Authorization") != "Bearer ok":
        raise MiddlewareError("bad token", status=401)


@pytest.fixture
def app():
    application = Application(routes, RouterConfig(csrf_secret="test-secret"))
    application.controller("users", UsersController())
    application.use("auth", require_token)
    return application


class TestApplication:
    """Test request handling end to end."""

    def test_root(self, app):
        """Test root route."""
        assert app.handle(Request(method="GET", path="/")).body == b"home"

    def test_grouped_route(self, app):
        """Test group prefix, middleware and controller handler."""
        response = app.handle(Request(
            method="GET",
            path="/api/users/42",
            headers={"Authorization": "Bearer ok"},
        ))
        assert response.status == 200
        assert response.json_body() == {"id": "42"}

    def test_group_middleware_rejects(self, app):
        """Test failed middleware answers its status."""
        response = app.handle(Request(method="GET", path="/api/users/42"))
        assert response.status == 401
        assert response.json_body() == {"response": {"message": "Unauthorized"}}

    def test_group_does_not_leak(self, app):
        """Test routes after the group are unprefixed and unguarded."""
        response = app.handle(Request(method="GET", path="/users/7"))
        assert response.body == b"plain 7"

    def test_not_found(self, app):
        """Test undeclared path."""
        response = app.handle(Request(method="GET", path="/unknown/path"))
        assert response.status == 404
        assert response.json_body() == {"response": {"message": "Not Found"}}

    def test_status_path(self, app):
        """Test numeric status path."""
        response = app.handle(Request(method="GET", path="/404"))
        assert response.status == 404
        assert response.json_body() == {"response": {"message": "Not Found"}}

    def test_csrf_failure(self, app):
        """Test unsafe request without token is refused."""
        response = app.handle(Request(method="POST", path="/api/users"))
        assert response.status == 403
        assert response.json_body() == {"response": {"message": "Forbidden"}}

    def test_csrf_success(self, app):
        """Test unsafe request with token passes."""
        response = app.handle(Request(
            method="POST",
            path="/api/users",
            headers={
                "Authorization": "Bearer ok",
                "X-CSRF-Token": app.csrf.generate_token(),
            },
        ))
        assert response.body == b"created"

    def test_csrf_numeric_secret_from_env(self, monkeypatch):
        """Test a numeric CSRF secret from the environment still verifies."""
        monkeypatch.setenv("ROMA_CSRF_SECRET", "123456")
        application = Application(
            lambda router: router.post("/items", lambda: "ok"),
            load_config(),
        )

        assert application.csrf.config.secret_key == "123456"
        response = application.handle(Request(
            method="POST",
            path="/items",
            headers={"X-CSRF-Token": application.csrf.generate_token()},
        ))
        assert response.status == 200
        assert response.body == b"ok"

    def test_csrf_disabled(self):
        """Test CSRF can be turned off."""
        application = Application(
            lambda router: router.post("/items", lambda: "ok"),
            RouterConfig(csrf_enabled=False),
        )
        assert application.csrf is None
        assert application.handle(Request(method="POST", path="/items")).body == b"ok"

    def test_handler_error(self, app):
        """Test handler exceptions become 500."""
        response = app.handle(Request(method="GET", path="/broken"))
        assert response.status == 500
        assert response.json_body() == {"response": {"message": "Internal Server Error"}}

    def test_unknown_middleware(self, app):
        """Test unknown middleware names become 500."""
        assert app.handle(Request(method="GET", path="/mystery")).status == 500

    def test_requests_are_isolated(self, app):
        """Test each request gets a fresh router."""
        first = app.handle(Request(method="GET", path="/"))
        second = app.handle(Request(method="GET", path="/nothing"))
        assert first.body == b"home"
        assert second.status == 404

    def test_handle_raw(self, app):
        """Test raw bytes in, raw bytes out."""
        raw = app.handle_raw(b"GET /users/3?x=1 HTTP/1.1\r\nHost: test\r\n\r\n")
        assert raw.startswith(b"HTTP/1.1 200 OK\r\n")
        assert raw.endswith(b"plain 3")
