from __future__ import annotations


class HateoasError(Exception):
    """Base class for every error raised by the hypermedia client."""


class ConflictError(HateoasError):
    """A derived name would overwrite a property of the original payload."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Response properties object contains conflicting item '{key}'")


class LinkNotFoundError(HateoasError, LookupError):
    def __init__(self, rel: str) -> None:
        self.rel = rel
        super().__init__(f"Link '{rel}' is not present in object.")


class MissingParameterError(HateoasError, ValueError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Parameter '{field}' does not exist in input object")


class DepthLimitError(HateoasError):
    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Payload nesting exceeds the maximum depth of {max_depth}")


class ConfigurationError(HateoasError):
    """Raised when an operation needs a collaborator that was never configured."""
