import pytest

from server_request.headers import HeaderBag
from server_request.request import HeaderCollection


class TestHeaderBag:
    def test_lookups_ignore_case(self):
        bag = HeaderBag({"Content-Type": "application/json"})

        assert bag.has_header("content-type")
        assert bag.has_header("CONTENT-TYPE")
        assert "content-TYPE" in bag
        assert bag.get_header("content-type") == ["application/json"]

    def test_keeps_first_spelling(self):
        bag = HeaderBag({"X-Trace": "a"}).with_added_header("x-trace", "b")
        assert bag.get_headers() == {"X-Trace": ["a", "b"]}

    def test_missing_header(self):
        bag = HeaderBag()

        assert not bag.has_header("accept")
        assert bag.get_header("accept") == []
        assert bag.get_header_line("accept") == ""
        assert len(bag) == 0

    def test_header_line_joins_values(self):
        bag = HeaderBag({"Accept": ["text/html", "application/json"]})
        assert bag.get_header_line("accept") == "text/html, application/json"

    def test_with_header_replaces(self):
        bag = HeaderBag({"Accept": ["text/html", "application/json"]})
        replaced = bag.with_header("ACCEPT", "text/plain")

        assert replaced.get_headers() == {"ACCEPT": ["text/plain"]}
        assert bag.get_header("accept") == ["text/html", "application/json"]

    def test_with_added_header_on_missing_header(self):
        bag = HeaderBag().with_added_header("X-New", ["1", "2"])
        assert bag.get_header("x-new") == ["1", "2"]

    def test_without_header(self):
        bag = HeaderBag({"Host": "example.com", "Accept": "*/*"})
        removed = bag.without_header("host")

        assert list(removed) == ["Accept"]
        assert list(bag) == ["Host", "Accept"]

    def test_mutations_return_new_bags(self):
        bag = HeaderBag({"Host": "example.com"})

        assert bag.with_header("Host", "other") is not bag
        assert bag.with_added_header("Host", "other") is not bag
        assert bag.without_header("Host") is not bag

    def test_duplicate_names_in_constructor_are_merged(self):
        bag = HeaderBag({"Accept": "text/html", "accept": "application/json"})
        assert bag.get_headers() == {"Accept": ["text/html", "application/json"]}

    def test_from_raw(self):
        bag = HeaderBag.from_raw(
            [
                (b"host", b"example.com"),
                (b"cookie", b"a=1"),
                (b"cookie", b"b=2"),
            ]
        )

        assert bag.get_header_line("Host") == "example.com"
        assert bag.get_header("cookie") == ["a=1", "b=2"]

    def test_equality_ignores_name_case(self):
        assert HeaderBag({"Host": "a"}) == HeaderBag({"host": "a"})
        assert HeaderBag({"Host": "a"}) != HeaderBag({"Host": "b"})
        assert hash(HeaderBag({"Host": "a"})) == hash(HeaderBag({"HOST": "a"}))

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_empty_names(self, name: str):
        with pytest.raises(ValueError, match="non-empty"):
            HeaderBag().with_header(name, "value")

    def test_rejects_bytes_values(self):
        with pytest.raises(TypeError):
            HeaderBag({"Host": b"example.com"})  # type: ignore[dict-item]

    def test_satisfies_header_collection(self):
        assert isinstance(HeaderBag(), HeaderCollection)
