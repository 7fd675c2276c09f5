from collections.abc import Iterator, Mapping, Set
from types import MappingProxyType
from typing import Any


def freeze(value: Any) -> Any:
    """Replace nested lists, sets and mappings by read-only equivalents."""
    match value:
        case str() | bytes() | ParameterBag():
            return value
        case Mapping():
            return MappingProxyType({key: freeze(item) for key, item in value.items()})
        case list():
            return tuple(freeze(item) for item in value)
        case tuple() if type(value) is tuple:
            return tuple(freeze(item) for item in value)
        case Set():
            return frozenset(freeze(item) for item in value)
        case _:
            return value


class ParameterBag(Mapping[str, Any]):
    """Read-only, insertion-ordered key/value parameters.

    Used for server params, cookies, query params, uploaded files and the parsed body.
    Nested lists become tuples and nested mappings read-only proxies, so values
    handed out by ``all()`` cannot change the bag.
    """

    __slots__ = ("_parameters",)

    def __init__(self, parameters: Mapping[str, Any] | None = None) -> None:
        self._parameters: dict[str, Any] = {key: freeze(value) for key, value in (parameters or {}).items()}

    def all(self) -> dict[str, Any]:
        return dict(self._parameters)

    def get(self, key: str, default: Any = None) -> Any:
        return self._parameters.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._parameters

    def __getitem__(self, key: str) -> Any:
        return self._parameters[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterBag({self._parameters!r})"


__all__: tuple[str, ...] = ("ParameterBag", "freeze")
