from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional, Protocol

import structlog

from hateoas_client.services.transformer import HateoasTransformer, get_transformer

logger = structlog.get_logger(__name__)


# -----------------------------------------------------------------------------
# Envelope & chain
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ResponseEnvelope:
    """Decoded HTTP response as seen by response interceptors."""
    data: Any
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    url: Optional[str] = None


class ResponseInterceptor(Protocol):
    def response(self, envelope: Any) -> Any: ...


class InterceptorChain:
    """Ordered response interceptors, applied first to last."""

    def __init__(self, interceptors: Optional[List[ResponseInterceptor]] = None) -> None:
        self._interceptors: List[ResponseInterceptor] = list(interceptors or [])

    def register(self, interceptor: ResponseInterceptor) -> None:
        self._interceptors.append(interceptor)

    def apply(self, envelope: Any) -> Any:
        for interceptor in self._interceptors:
            envelope = interceptor.response(envelope)
        return envelope

    def __iter__(self) -> Iterator[ResponseInterceptor]:
        return iter(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)


# -----------------------------------------------------------------------------
# Hypermedia interceptor
# -----------------------------------------------------------------------------
class HateoasInterceptor:
    """
    Replaces a mapping response body with its transformed Node graph.

    Accepts either a ResponseEnvelope or a plain mapping with a "data" key.
    Anything else, and any non-mapping body, is returned untouched.
    ConflictError from the transformer propagates.
    """

    def __init__(self, transformer: Optional[HateoasTransformer] = None) -> None:
        self._transformer = transformer

    @property
    def transformer(self) -> HateoasTransformer:
        return self._transformer or get_transformer()

    def response(self, envelope: Any) -> Any:
        if isinstance(envelope, ResponseEnvelope):
            if not isinstance(envelope.data, Mapping):
                return envelope
            return replace(envelope, data=self.transformer.transform(envelope.data))

        if isinstance(envelope, Mapping) and isinstance(envelope.get("data"), Mapping):
            updated = dict(envelope)
            updated["data"] = self.transformer.transform(envelope["data"])
            return updated

        return envelope

    def register_globally(self, chain: InterceptorChain) -> "HateoasInterceptor":
        """Append this interceptor so every response on ``chain`` gets transformed."""
        chain.register(self)
        logger.debug("hateoas.interceptor.registered", chain_length=len(chain))
        return self
