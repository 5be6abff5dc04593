from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

# Named verbs handed to a resource factory, e.g. {"update": {"method": "PUT"}}
MethodConfig = Mapping[str, Mapping[str, Any]]


# -----------------------------------------------------------------------------
# Collaborator interfaces
# -----------------------------------------------------------------------------
class ResourceHandle(Protocol):
    """HTTP resource bound to one href. Performs the actual network call."""

    def request(
        self,
        method: str,
        data: Optional[Mapping[str, Any]] = None,
        *,
        content_type: Optional[str] = None,
    ) -> Any: ...

    def get(self, params: Optional[Mapping[str, Any]] = None) -> Any: ...

    def post(self, data: Optional[Mapping[str, Any]] = None) -> Any: ...

    def put(self, data: Optional[Mapping[str, Any]] = None) -> Any: ...

    def patch(self, data: Optional[Mapping[str, Any]] = None) -> Any: ...

    def delete(self, params: Optional[Mapping[str, Any]] = None) -> Any: ...


class ResourceFactory(Protocol):
    def __call__(
        self,
        href: str,
        bindings: Optional[Mapping[str, Any]],
        method_config: Optional[MethodConfig],
    ) -> ResourceHandle: ...


def merge_method_config(
    override: Optional[MethodConfig],
    default: Optional[MethodConfig],
) -> Optional[Dict[str, Dict[str, Any]]]:
    """Per-call config replaces the process default. Returns a copy."""
    chosen = override if override is not None else default
    if chosen is None:
        return None
    return {name: dict(config) for name, config in chosen.items()}
