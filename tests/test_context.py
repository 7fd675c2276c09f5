import pytest
from urllib.parse import urlsplit

from server_request.context import RequestContextException, current_request, request_context
from server_request.headers import HeaderBag
from server_request.request import ServerRequest


def make_request(method: str = "GET") -> ServerRequest:
    return ServerRequest(method, urlsplit("http://testserver/"), "1.1", HeaderBag())


class TestRequestContext:
    def test_outside_request_raises_exception(self):
        with pytest.raises(RequestContextException, match="No server request available"):
            current_request()

    def test_exception_message(self):
        with pytest.raises(RequestContextException) as exc_info:
            current_request()

        error_message = str(exc_info.value)
        assert "ServerRequestMiddleware" in error_message
        assert "add_middleware" in error_message

    def test_request_context_binds_request(self):
        request = make_request()

        with request_context(request) as bound:
            assert bound is request
            assert current_request() is request

        with pytest.raises(RequestContextException):
            current_request()

    def test_nested_contexts_restore_outer_request(self):
        outer = make_request()
        inner = outer.with_method("POST")

        with request_context(outer):
            with request_context(inner):
                assert current_request().get_method() == "POST"
            assert current_request() is outer

    def test_cleanup_on_error(self):
        with pytest.raises(ValueError):
            with request_context(make_request()):
                raise ValueError("test error")

        with pytest.raises(RequestContextException):
            current_request()
