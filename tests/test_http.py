"""HTTP object tests."""

import pytest
from roma_core.http.request import Request, Response
from roma_core.http.status import error_payload, status_message


class TestStatus:
    """Test status table lookups."""

    def test_known_code(self):
        """Test reason phrase lookup."""
        assert status_message(404) == "Not Found"
        assert status_message("500") == "Internal Server Error"

    def test_unknown_code(self):
        """Test unknown codes have no message."""
        assert status_message(999) is None
        assert status_message("abc") is None

    def test_error_payload(self):
        """Test error body shape."""
        assert error_payload(403) == {"response": {"message": "Forbidden"}}


class TestRequest:
    """Test Request class."""

    def test_method_normalized(self):
        """Test method is upper-cased."""
        assert Request(method="get", path="/").method == "GET"

    def test_from_raw(self):
        """Test raw request parsing."""
        request = Request.from_raw(
            b"POST /users?page=2 HTTP/1.1\r\n"
            b"Host: localhost\r\n"
            b"Content-Type: application/x-www-form-urlencoded\r\n"
            b"\r\n"
            b"name=ada&_csrf_token=abc"
        )
        assert request.method == "POST"
        assert request.path == "/users"
        assert request.query == {"page": "2"}
        assert request.get_header("host") == "localhost"
        assert request.form() == {"name": "ada", "_csrf_token": "abc"}

    def test_form_requires_content_type(self):
        """Test non-form bodies are not parsed as forms."""
        request = Request(method="POST", path="/", body=b"a=1")
        assert request.form() == {}


class TestResponse:
    """Test Response class."""

    def test_error(self):
        """Test JSON error response."""
        response = Response.error(404)
        assert response.status == 404
        assert response.headers["Content-Type"] == "application/json"
        assert response.json_body() == {"response": {"message": "Not Found"}}

    def test_error_unknown_code_is_not_found(self):
        """Test unknown codes are not given a made-up message."""
        response = Response.error(799)
        assert response.status == 404
        assert response.json_body() == {"response": {"message": "Not Found"}}

    @pytest.mark.parametrize("result,body", [
        ("hello", b"hello"),
        (b"raw", b"raw"),
        (None, b""),
        ({"id": 1}, b'{"id": 1}'),
    ])
    def test_from_result(self, result, body):
        """Test handler results become the body."""
        response = Response.from_result(result)
        assert response.status == 200
        assert response.body == body

    def test_from_result_passes_response_through(self):
        """Test handlers may return a Response."""
        original = Response(status=201, body=b"created")
        assert Response.from_result(original) is original

    def test_to_bytes(self):
        """Test raw serialization."""
        raw = Response.text("hi").to_bytes()
        assert raw.startswith(b"HTTP/1.1 200 OK\r\n")
        assert b"Content-Length: 2\r\n" in raw
        assert raw.endswith(b"\r\n\r\nhi")
