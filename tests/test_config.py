import pytest

from server_request.request import DEFAULT_ALLOWED_METHODS, RequestConfig


class TestRequestConfig:
    def test_defaults(self):
        config = RequestConfig()

        assert config.allowed_methods == DEFAULT_ALLOWED_METHODS == frozenset({"GET", "POST"})
        assert config.validate_on_init is False
        assert config.logger is None

    def test_methods_are_normalized(self):
        config = RequestConfig(allowed_methods=frozenset({"get", " Post "}))
        assert config.allowed_methods == frozenset({"GET", "POST"})

    @pytest.mark.parametrize(
        "method,expected",
        [
            ("GET", True),
            ("POST", True),
            ("PATCH", False),
            ("get", False),
        ],
    )
    def test_is_allowed_expects_normalized_input(self, method: str, expected: bool):
        assert RequestConfig().is_allowed(method) is expected

    @pytest.mark.parametrize("methods", [frozenset(), frozenset({""})])
    def test_rejects_empty_allow_list(self, methods: frozenset[str]):
        with pytest.raises(ValueError):
            RequestConfig(allowed_methods=methods)

    def test_rejects_string_allow_list(self):
        with pytest.raises(TypeError):
            RequestConfig(allowed_methods="GET")  # type: ignore[arg-type]
