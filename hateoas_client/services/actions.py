from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import structlog

from hateoas_client.errors import MissingParameterError
from hateoas_client.models.action import ActionEntry, RequestDescription

if TYPE_CHECKING:
    from hateoas_client.services.transformer import HateoasTransformer

logger = structlog.get_logger(__name__)


class BoundAction:
    """
    Callable synthesized from one Siren action.

    Calling it validates the params against the declared fields and returns
    the resolved RequestDescription. invoke() does the same and then hands
    the request to the configured resource factory.
    """

    def __init__(self, entry: ActionEntry, transformer: "HateoasTransformer") -> None:
        self.entry = entry
        self._transformer = transformer
        self.__name__ = entry.accessor
        self.__doc__ = entry.title

    def __call__(
        self,
        params: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> RequestDescription:
        supplied: Dict[str, Any] = dict(params or {})
        supplied.update(kwargs)

        # every declared field must be named, even when a literal is pre-bound
        body: Dict[str, Any] = {}
        for field in self.entry.fields:
            if field.name not in supplied:
                raise MissingParameterError(field.name)
            body[field.name] = field.value if field.is_bound else supplied[field.name]

        return RequestDescription(
            method=self.entry.method,
            href=self.entry.href,
            type=self.entry.type,
            body=body,
            bindings=supplied,
        )

    def metadata(self) -> ActionEntry:
        return self.entry

    def invoke(
        self,
        params: Optional[Mapping[str, Any]] = None,
        http_methods: Optional[Mapping[str, Mapping[str, Any]]] = None,
        **kwargs: Any,
    ) -> Any:
        request = self(params, **kwargs)
        logger.debug(
            "hateoas.action.invoke",
            action=self.entry.name,
            method=request.method,
            href=request.href,
        )
        handle = self._transformer.open_resource(request.href, request.bindings, http_methods)
        return handle.request(request.method, request.body, content_type=request.type)

    def __repr__(self) -> str:
        return f"<BoundAction {self.entry.name} {self.entry.method} {self.entry.href}>"
