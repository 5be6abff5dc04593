from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Set, Type, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from hateoas_client.config.settings import HateoasSettings
from hateoas_client.config.settings import settings as default_settings
from hateoas_client.errors import ConfigurationError, ConflictError, DepthLimitError
from hateoas_client.models.action import ActionEntry
from hateoas_client.models.link import LinkEntry, LinkIndex, LinkTarget
from hateoas_client.models.node import Node, NodeList
from hateoas_client.services.actions import BoundAction
from hateoas_client.services.resource import (
    MethodConfig,
    ResourceFactory,
    ResourceHandle,
    merge_method_config,
)

logger = structlog.get_logger(__name__)

EntryT = TypeVar("EntryT", bound=BaseModel)


# -----------------------------------------------------------------------------
# Transformer
# -----------------------------------------------------------------------------
class HateoasTransformer:
    """
    Turns raw JSON payloads into Node graphs.

    Pure and synchronous: no I/O happens during transform(). The resource
    factory is only called later, from Node.resource() and action invoke().
    """

    def __init__(
        self,
        settings: Optional[HateoasSettings] = None,
        resource_factory: Optional[ResourceFactory] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.resource_factory = resource_factory

    def transform(self, value: Any) -> Any:
        """
        Return ``value`` with every mapping that carries links or actions
        replaced by a Node and every list replaced by a NodeList.

        Raises ConflictError when a derived name would shadow payload data
        and DepthLimitError when nesting exceeds ``MAX_DEPTH``. Nothing is
        returned on failure.
        """
        return self._transform(value, 0)

    def _transform(self, value: Any, depth: int) -> Any:
        if isinstance(value, (Node, NodeList)):
            return value
        if isinstance(value, Mapping):
            self._check_depth(depth)
            return self._transform_mapping(value, depth)
        if isinstance(value, (list, tuple)):
            self._check_depth(depth)
            return NodeList(self._transform(item, depth + 1) for item in value)
        return value

    def _check_depth(self, depth: int) -> None:
        if depth > self.settings.MAX_DEPTH:
            raise DepthLimitError(self.settings.MAX_DEPTH)

    def _transform_mapping(self, raw: Mapping[str, Any], depth: int) -> Any:
        links_key = self.settings.LINKS_KEY
        actions_key = self.settings.ACTIONS_KEY

        has_links = isinstance(raw.get(links_key), (list, tuple))
        has_actions = isinstance(raw.get(actions_key), (list, tuple))

        if not (has_links or has_actions):
            return {key: self._transform(value, depth + 1) for key, value in raw.items()}

        own_keys: Set[str] = {key for key in raw if not (has_actions and key == actions_key)}
        property_keys = self._property_keys(raw)
        taken = own_keys | property_keys

        for name in Node.RESERVED:
            if name in taken:
                raise self._conflict(name)

        index: LinkIndex = MappingProxyType({})
        if has_links:
            if links_key in property_keys:
                raise self._conflict(links_key)
            index = MappingProxyType(self.build_link_index(raw[links_key]))

        actions: Dict[str, BoundAction] = {}
        if has_actions:
            for entry in self.parse_actions(raw[actions_key]):
                name = entry.accessor
                if name in taken or name in actions or name in Node.RESERVED:
                    raise self._conflict(name)
                actions[name] = BoundAction(entry, self)

        data: Dict[str, Any] = {}
        for key, value in raw.items():
            if has_actions and key == actions_key:
                continue
            if has_links and key == links_key:
                data[key] = index
                continue
            data[key] = self._transform(value, depth + 1)

        return Node(
            data,
            index,
            actions,
            properties_key=self.settings.PROPERTIES_KEY,
            transformer=self,
        )

    def _property_keys(self, raw: Mapping[str, Any]) -> Set[str]:
        properties = raw.get(self.settings.PROPERTIES_KEY)
        if isinstance(properties, Mapping):
            return set(properties)
        return set()

    def _conflict(self, key: str) -> ConflictError:
        logger.warning("hateoas.transform.conflict", key=key)
        return ConflictError(key)

    # -------------------------------------------------------------------------
    # Links
    # -------------------------------------------------------------------------
    def build_link_index(self, entries: Iterable[Any]) -> Dict[str, LinkTarget]:
        """
        Flatten a links collection into rel -> LinkTarget.

        Every alias of a multi-rel entry points at the same target. When two
        entries name the same rel the later one wins.
        """
        query_classes = set(self.settings.QUERY_CLASSES)
        rel_markers = set(self.settings.QUERY_REL_MARKERS)

        index: Dict[str, LinkTarget] = {}
        for entry in _parse_entries(LinkEntry, entries, "hateoas.link.skipped"):
            aliases = entry.aliases
            is_query = bool(query_classes.intersection(entry.classes)) or bool(
                rel_markers.intersection(aliases)
            )
            target = LinkTarget(href=entry.href, is_query=is_query)
            for alias in aliases:
                if alias in rel_markers:
                    continue
                if alias in index and index[alias] != target:
                    logger.debug("hateoas.link.overwritten", rel=alias, href=entry.href)
                index[alias] = target
        return index

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------
    def parse_actions(self, entries: Iterable[Any]) -> List[ActionEntry]:
        return _parse_entries(ActionEntry, entries, "hateoas.action.skipped")

    # -------------------------------------------------------------------------
    # Resource factory
    # -------------------------------------------------------------------------
    def open_resource(
        self,
        href: str,
        bindings: Optional[Mapping[str, Any]] = None,
        http_methods: Optional[MethodConfig] = None,
    ) -> ResourceHandle:
        if self.resource_factory is None:
            raise ConfigurationError(
                "No resource factory configured; pass one to HateoasTransformer or configure()"
            )
        method_config = merge_method_config(http_methods, self.settings.DEFAULT_HTTP_METHODS)
        return self.resource_factory(href, bindings, method_config)


def _parse_entries(model: Type[EntryT], entries: Iterable[Any], event: str) -> List[EntryT]:
    parsed: List[EntryT] = []
    for position, raw_entry in enumerate(entries):
        if not isinstance(raw_entry, Mapping):
            logger.debug(event, position=position, reason="not an object")
            continue
        try:
            parsed.append(model.model_validate(dict(raw_entry)))
        except ValidationError as exc:
            logger.debug(event, position=position, errors=exc.error_count())
    return parsed


# -----------------------------------------------------------------------------
# Process default
# -----------------------------------------------------------------------------
_transformer: Optional[HateoasTransformer] = None


def configure(
    settings: Optional[HateoasSettings] = None,
    resource_factory: Optional[ResourceFactory] = None,
) -> HateoasTransformer:
    """
    Build the process-wide transformer. Call once at startup, before any
    response is transformed.
    """
    global _transformer
    _transformer = HateoasTransformer(settings, resource_factory)
    return _transformer


def get_transformer() -> HateoasTransformer:
    global _transformer
    if _transformer is None:
        _transformer = HateoasTransformer()
    return _transformer


def transform(value: Any) -> Any:
    return get_transformer().transform(value)
