from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import pytest

from hateoas_client.config.settings import HateoasSettings
from hateoas_client.services.transformer import HateoasTransformer

PRODUCT_PAYLOAD: Dict[str, Any] = {
    "properties": {
        "Id": 1,
        "Name": "Item1",
        "Price": 2.99,
    },
    "links": [
        {"rel": ["self"], "href": "api/Product/1"},
        {"rel": ["parent", "__query"], "href": "api/Product"},
        {"rel": ["get_product_by_name", "by_name"], "href": "api/Product/Item1"},
        # plain string rel, not Siren but seen in the wild
        {"rel": "get_productdetails_by_id", "href": "api/Product/1/Details"},
    ],
    "actions": [
        {
            "name": "query_product_by_query_skip_limit",
            "class": ["__query"],
            "title": "Search for products by query and do pagination using skip and limit parameters",
            "method": "GET",
            "href": "api/Product?query=Item1&skip=:skip&limit=:limit",
            "fields": [
                {"name": "query", "value": "Item1"},
                {"name": "skip"},
                {"name": "limit"},
            ],
        },
        {
            "name": "create-product-test",
            "title": "Create new product and return created object back with database generated ID",
            "method": "POST",
            "href": "api/Product",
            "type": "application/x-www-form-urlencoded",
            "fields": [
                {"name": "Id", "value": "1"},
                {"name": "Name", "value": "Item1"},
                {"name": "Price", "value": "2.99"},
            ],
        },
        {
            "name": "put_by_id_product",
            "title": "Modify existing product objects",
            "method": "PUT",
            "href": "api/Product/1",
            "fields": [
                {"name": "Id", "value": "1"},
                {"name": "Name", "value": "Item1"},
                {"name": "Price", "value": "2.99"},
            ],
        },
        {
            "name": "delete_by_id",
            "title": "Delete product by ID",
            "method": "DELETE",
            "href": "api/Product/1",
        },
    ],
}


class FakeResource:
    def __init__(self, href: str, bindings: Any, method_config: Any) -> None:
        self.href = href
        self.bindings = bindings
        self.method_config = method_config
        self.requests: List[Dict[str, Any]] = []

    def request(self, method: str, data: Any = None, *, content_type: Optional[str] = None) -> Dict[str, Any]:
        call = {"method": method, "data": data, "content_type": content_type}
        self.requests.append(call)
        return call

    def get(self, params: Any = None) -> Dict[str, Any]:
        return self.request("GET", params)

    def post(self, data: Any = None) -> Dict[str, Any]:
        return self.request("POST", data)

    def put(self, data: Any = None) -> Dict[str, Any]:
        return self.request("PUT", data)

    def patch(self, data: Any = None) -> Dict[str, Any]:
        return self.request("PATCH", data)

    def delete(self, params: Any = None) -> Dict[str, Any]:
        return self.request("DELETE", params)


class RecordingFactory:
    """Resource factory double that remembers every handle it hands out."""

    def __init__(self) -> None:
        self.resources: List[FakeResource] = []

    def __call__(self, href: str, bindings: Any, method_config: Any) -> FakeResource:
        resource = FakeResource(href, bindings, method_config)
        self.resources.append(resource)
        return resource


@pytest.fixture
def product_payload() -> Dict[str, Any]:
    return copy.deepcopy(PRODUCT_PAYLOAD)


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def hateoas_settings() -> HateoasSettings:
    return HateoasSettings(_env_file=None)


@pytest.fixture
def transformer(hateoas_settings: HateoasSettings, factory: RecordingFactory) -> HateoasTransformer:
    return HateoasTransformer(settings=hateoas_settings, resource_factory=factory)
