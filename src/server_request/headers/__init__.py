from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TypeAlias

HeaderValue: TypeAlias = str | Sequence[str]

RawHeaders: TypeAlias = Iterable[tuple[bytes, bytes]]


def _normalize_values(value: HeaderValue) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, bytes):
        raise TypeError("Header values must be str, decode bytes before passing them")
    return tuple(str(item) for item in value)


def _normalize_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Header name must be a non-empty string")
    return name.strip()


class HeaderBag:
    """Immutable, case-insensitive collection of HTTP headers.

    The spelling a header was first stored with is kept for ``get_headers``,
    lookups ignore case. Every ``with*`` operation returns a new bag.
    """

    __slots__ = ("_headers",)

    def __init__(self, headers: Mapping[str, HeaderValue] | None = None) -> None:
        self._headers: dict[str, tuple[str, tuple[str, ...]]] = {}

        for name, value in (headers or {}).items():
            name = _normalize_name(name)
            key = name.lower()
            if key in self._headers:
                original, values = self._headers[key]
                self._headers[key] = (original, values + _normalize_values(value))
            else:
                self._headers[key] = (name, _normalize_values(value))

    @classmethod
    def from_raw(cls, raw_headers: RawHeaders) -> "HeaderBag":
        """Build a bag from ASGI raw headers, repeated names keep every value."""
        bag = cls()
        for name, value in raw_headers:
            bag = bag.with_added_header(name.decode("latin-1"), value.decode("latin-1"))
        return bag

    def _copy_with(self, headers: dict[str, tuple[str, tuple[str, ...]]]) -> "HeaderBag":
        new = HeaderBag.__new__(HeaderBag)
        new._headers = headers
        return new

    def get_headers(self) -> dict[str, list[str]]:
        return {name: list(values) for name, values in self._headers.values()}

    def has_header(self, name: str) -> bool:
        return name.lower() in self._headers

    def get_header(self, name: str) -> list[str]:
        entry = self._headers.get(name.lower())
        if entry is None:
            return []
        return list(entry[1])

    def get_header_line(self, name: str) -> str:
        return ", ".join(self.get_header(name))

    def with_header(self, name: str, value: HeaderValue) -> "HeaderBag":
        name = _normalize_name(name)
        headers = dict(self._headers)
        headers[name.lower()] = (name, _normalize_values(value))
        return self._copy_with(headers)

    def with_added_header(self, name: str, value: HeaderValue) -> "HeaderBag":
        name = _normalize_name(name)
        key = name.lower()
        if key not in self._headers:
            return self.with_header(name, value)

        headers = dict(self._headers)
        original, values = headers[key]
        headers[key] = (original, values + _normalize_values(value))
        return self._copy_with(headers)

    def without_header(self, name: str) -> "HeaderBag":
        key = name.lower()
        if key not in self._headers:
            return self
        headers = dict(self._headers)
        del headers[key]
        return self._copy_with(headers)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_header(name)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._headers.values())

    def __len__(self) -> int:
        return len(self._headers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderBag):
            return NotImplemented
        return {key: values for key, (_, values) in self._headers.items()} == {
            key: values for key, (_, values) in other._headers.items()
        }

    def __hash__(self) -> int:
        return hash(frozenset((key, values) for key, (_, values) in self._headers.items()))

    def __repr__(self) -> str:
        return f"HeaderBag({self.get_headers()!r})"


__all__: tuple[str, ...] = ("HeaderBag", "HeaderValue", "RawHeaders")
