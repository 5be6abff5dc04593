from __future__ import annotations

import re
from functools import partial
from typing import Any, Dict, Mapping, Optional, Set, Tuple
from urllib.parse import parse_qs, quote, urlsplit

import httpx
import structlog

from hateoas_client.models.action import DEFAULT_ACTION_TYPE
from hateoas_client.services.interceptor import InterceptorChain, ResponseEnvelope
from hateoas_client.services.resource import MethodConfig

logger = structlog.get_logger(__name__)

# ":name" placeholders; a digit right after the colon is a port, not a placeholder
_PLACEHOLDER = re.compile(r":([A-Za-z_]\w*)")

_BODYLESS_METHODS = frozenset({"GET", "DELETE", "HEAD", "OPTIONS"})


def expand_href(href: str, bindings: Optional[Mapping[str, Any]]) -> Tuple[str, Set[str]]:
    """
    Fill ":name" placeholders from ``bindings``.

    Unresolved placeholders are removed. Returns the expanded href and the
    names of every placeholder found in the template.
    """
    bindings = bindings or {}
    names: Set[str] = set()

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        names.add(name)
        value = bindings.get(name)
        if value is None:
            return ""
        return quote(str(value), safe="")

    return _PLACEHOLDER.sub(_substitute, href), names


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    if "json" in response.headers.get("content-type", ""):
        return response.json()
    return response.text


# -----------------------------------------------------------------------------
# Resource handle
# -----------------------------------------------------------------------------
class HttpxResource:
    """Resource handle bound to one href, backed by an httpx.Client."""

    def __init__(
        self,
        client: httpx.Client,
        href: str,
        bindings: Optional[Mapping[str, Any]] = None,
        method_config: Optional[MethodConfig] = None,
        interceptors: Optional[InterceptorChain] = None,
    ) -> None:
        self.href = href
        self._client = client
        self._bindings: Dict[str, Any] = dict(bindings or {})
        self._method_config: Dict[str, Mapping[str, Any]] = dict(method_config or {})
        self._interceptors = interceptors

    def request(
        self,
        method: str,
        data: Optional[Mapping[str, Any]] = None,
        *,
        content_type: Optional[str] = None,
    ) -> ResponseEnvelope:
        method = method.upper()
        payload = dict(data or {})
        url, template_names = expand_href(self.href, {**self._bindings, **payload})

        kwargs: Dict[str, Any] = {}
        if method in _BODYLESS_METHODS:
            existing = set(parse_qs(urlsplit(url).query, keep_blank_values=True))
            params = {
                key: value
                for key, value in payload.items()
                if key not in template_names and key not in existing
            }
            if params:
                kwargs["params"] = params
        elif data is not None:
            if (content_type or DEFAULT_ACTION_TYPE) == DEFAULT_ACTION_TYPE:
                kwargs["data"] = payload
            else:
                kwargs["json"] = payload

        logger.debug("hateoas.http.request", method=method, url=url)
        response = self._client.request(method, url, **kwargs)
        response.raise_for_status()

        envelope = ResponseEnvelope(
            data=_decode(response),
            status_code=response.status_code,
            headers=dict(response.headers),
            url=str(response.url),
        )
        if self._interceptors is not None:
            envelope = self._interceptors.apply(envelope)
        return envelope

    def get(self, params: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        return self.request("GET", params)

    def post(self, data: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        return self.request("POST", data, content_type="application/json")

    def put(self, data: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        return self.request("PUT", data, content_type="application/json")

    def patch(self, data: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        return self.request("PATCH", data, content_type="application/json")

    def delete(self, params: Optional[Mapping[str, Any]] = None) -> ResponseEnvelope:
        return self.request("DELETE", params)

    def __getattr__(self, name: str) -> Any:
        # custom verbs from the method config, e.g. {"update": {"method": "PUT"}}
        config = self.__dict__.get("_method_config", {}).get(name)
        if config is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return partial(
            self.request,
            str(config.get("method", "GET")),
            content_type=config.get("content_type", "application/json"),
        )

    def __repr__(self) -> str:
        return f"<HttpxResource {self.href}>"


# -----------------------------------------------------------------------------
# Factory
# -----------------------------------------------------------------------------
class HttpxResourceFactory:
    """
    Default resource factory. Every response it produces runs through
    ``interceptors``, so registering a HateoasInterceptor there makes the
    whole client hypermedia-aware.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        base_url: str = "",
        interceptors: Optional[InterceptorChain] = None,
    ) -> None:
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url)
        self.interceptors = interceptors if interceptors is not None else InterceptorChain()

    def __call__(
        self,
        href: str,
        bindings: Optional[Mapping[str, Any]] = None,
        method_config: Optional[MethodConfig] = None,
    ) -> HttpxResource:
        return HttpxResource(
            self.client,
            href,
            bindings=bindings,
            method_config=method_config,
            interceptors=self.interceptors,
        )

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HttpxResourceFactory":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
