"""Configuration for server request messages."""

from dataclasses import dataclass, field
from logging import Logger

METHOD_GET = "GET"
METHOD_POST = "POST"

DEFAULT_ALLOWED_METHODS: frozenset[str] = frozenset({METHOD_GET, METHOD_POST})


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Configuration shared by a request message and every copy derived from it.

    Args:
        allowed_methods: HTTP methods accepted by ``with_method``. Stored upper case.
        validate_on_init: Validate and normalize the method at construction time too.
        logger: Optional logger used for diagnostics.
    """

    allowed_methods: frozenset[str] = DEFAULT_ALLOWED_METHODS
    validate_on_init: bool = False
    logger: Logger | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.allowed_methods, str):
            raise TypeError("allowed_methods must be a collection of method names, not a string")

        methods = frozenset(method.strip().upper() for method in self.allowed_methods)
        if not methods:
            raise ValueError("allowed_methods must not be empty")
        if "" in methods:
            raise ValueError("allowed_methods must not contain empty method names")

        object.__setattr__(self, "allowed_methods", methods)

    def is_allowed(self, method: str) -> bool:
        """Check whether an already normalized method is on the allow-list."""
        return method in self.allowed_methods


DEFAULT_CONFIG = RequestConfig()
