from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from hateoas_client.errors import LinkNotFoundError
from hateoas_client.models.action import ActionEntry
from hateoas_client.models.link import LinkIndex

if TYPE_CHECKING:
    from hateoas_client.services.actions import BoundAction
    from hateoas_client.services.resource import MethodConfig, ResourceHandle
    from hateoas_client.services.transformer import HateoasTransformer


# -----------------------------------------------------------------------------
# Kind tag
# -----------------------------------------------------------------------------
class TransformedKind(str, Enum):
    """What transform() handed back for a given payload segment."""
    NODE = "node"            # mapping that carried links and/or actions
    SEQUENCE = "sequence"    # transformed list
    MAPPING = "mapping"      # plain mapping, nothing hypermedia inside it
    SCALAR = "scalar"


def kind_of(value: Any) -> TransformedKind:
    if isinstance(value, Node):
        return TransformedKind.NODE
    if isinstance(value, (list, tuple)):
        return TransformedKind.SEQUENCE
    if isinstance(value, Mapping):
        return TransformedKind.MAPPING
    return TransformedKind.SCALAR


# -----------------------------------------------------------------------------
# Transformed containers
# -----------------------------------------------------------------------------
class NodeList(list):
    """Sequence whose elements already went through transform()."""
    __slots__ = ()


class Node(Mapping):
    """
    Read-only view over a hypermedia payload.

    Keys are the original payload keys minus the actions collection; the
    links key maps to the link index. Attribute access resolves action
    accessors first, then payload keys, then keys of the Siren properties
    mapping, so ``node.create_product_test(...)`` and ``node.Name`` both work.
    An action accessor also wins over a Mapping method of the same name
    (``node.items`` may be an action); item access is never shadowed.
    """
    __slots__ = ("_data", "_links", "_actions", "_properties_key", "_transformer")

    # Attribute names synthesized on every node
    RESERVED = frozenset({"resource", "query_links", "query_actions"})

    def __init__(
        self,
        data: Dict[str, Any],
        links: LinkIndex,
        actions: Dict[str, "BoundAction"],
        *,
        properties_key: str,
        transformer: "HateoasTransformer",
    ) -> None:
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_links", links)
        object.__setattr__(self, "_actions", actions)
        object.__setattr__(self, "_properties_key", properties_key)
        object.__setattr__(self, "_transformer", transformer)

    # Mapping protocol
    def __getitem__(self, key: str) -> Any:
        return _slot(self, "_data")[key]

    def __iter__(self) -> Iterator[str]:
        return iter(_slot(self, "_data"))

    def __len__(self) -> int:
        return len(_slot(self, "_data"))

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Node):
            return _slot(self, "_data") == _slot(other, "_data")
        if isinstance(other, Mapping):
            return _slot(self, "_data") == {key: other[key] for key in iter(other)}
        return NotImplemented

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("__"):
            actions = _slot(self, "_actions")
            if name in actions:
                return actions[name]
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        data = _slot(self, "_data")
        if name in data:
            return data[name]
        properties = data.get(_slot(self, "_properties_key"))
        if isinstance(properties, Mapping) and name in properties:
            return properties[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' object is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"'{type(self).__name__}' object is read-only")

    def __dir__(self) -> list[str]:
        names = set(object.__dir__(self))
        names.update(_slot(self, "_actions"))
        names.update(
            key for key in _slot(self, "_data") if isinstance(key, str) and key.isidentifier()
        )
        return sorted(names)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({_slot(self, '_data')!r}, "
            f"actions={list(_slot(self, '_actions'))!r})"
        )

    # -------------------------------------------------------------------------
    # Hypermedia accessors
    # -------------------------------------------------------------------------
    def resource(
        self,
        rel: str,
        bindings: Optional[Mapping[str, Any]] = None,
        http_methods: Optional["MethodConfig"] = None,
    ) -> "ResourceHandle":
        """Return a resource handle for the link registered under ``rel``."""
        target = _slot(self, "_links").get(rel)
        if target is None:
            raise LinkNotFoundError(rel)
        return _slot(self, "_transformer").open_resource(target.href, bindings, http_methods)

    def query_links(self) -> LinkIndex:
        return MappingProxyType(dict(_slot(self, "_links")))

    def query_actions(self) -> Dict[str, ActionEntry]:
        """Action metadata keyed by the literal action name."""
        return {action.entry.name: action.entry for action in _slot(self, "_actions").values()}


# Internal state is read past __getattribute__ so an action accessor never hides it
_slot = object.__getattribute__
