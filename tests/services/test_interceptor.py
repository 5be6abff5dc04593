from __future__ import annotations

import pytest

from hateoas_client.errors import ConflictError
from hateoas_client.models.node import Node
from hateoas_client.services.interceptor import (
    HateoasInterceptor,
    InterceptorChain,
    ResponseEnvelope,
)
from hateoas_client.services.transformer import HateoasTransformer


@pytest.fixture
def interceptor(transformer: HateoasTransformer) -> HateoasInterceptor:
    return HateoasInterceptor(transformer)


class TestResponse:
    def test_transforms_hateoas_envelope(self, interceptor: HateoasInterceptor, product_payload: dict) -> None:
        envelope = ResponseEnvelope(data=product_payload, status_code=200, headers={"x": "1"})
        result = interceptor.response(envelope)

        assert isinstance(result.data, Node)
        assert result.status_code == 200
        assert result.headers == {"x": "1"}
        assert envelope.data is product_payload

    def test_transforms_mapping_envelope(self, interceptor: HateoasInterceptor, product_payload: dict) -> None:
        result = interceptor.response({"data": product_payload, "status": 200})
        assert isinstance(result["data"], Node)
        assert result["status"] == 200

    def test_non_hateoas_response_unchanged(self, interceptor: HateoasInterceptor) -> None:
        plain = {"value1": "value1", "value2": 2}
        assert interceptor.response(plain) == {"value1": "value1", "value2": 2}

        envelope = ResponseEnvelope(data={"value1": "value1"})
        assert interceptor.response(envelope) == envelope

    @pytest.mark.parametrize("body", [None, "text body", [1, 2]])
    def test_non_mapping_body_untouched(self, interceptor: HateoasInterceptor, body: object) -> None:
        envelope = ResponseEnvelope(data=body)
        assert interceptor.response(envelope) is envelope

    def test_none_envelope(self, interceptor: HateoasInterceptor) -> None:
        assert interceptor.response(None) is None

    def test_conflict_propagates(self, interceptor: HateoasInterceptor, product_payload: dict) -> None:
        product_payload["properties"]["resource"] = "x"
        with pytest.raises(ConflictError):
            interceptor.response(ResponseEnvelope(data=product_payload))


class TestRegistration:
    def test_register_globally_appends(self, interceptor: HateoasInterceptor) -> None:
        chain = InterceptorChain()
        before = len(chain)
        interceptor.register_globally(chain)
        assert len(chain) == before + 1
        assert list(chain)[-1] is interceptor

    def test_chain_applies_in_order(self, interceptor: HateoasInterceptor, product_payload: dict) -> None:
        seen = []

        class Recorder:
            def response(self, envelope):
                seen.append(type(envelope.data).__name__)
                return envelope

        chain = InterceptorChain([Recorder()])
        interceptor.register_globally(chain)
        chain.register(Recorder())

        result = chain.apply(ResponseEnvelope(data=product_payload))
        assert seen == ["dict", "Node"]
        assert isinstance(result.data, Node)

    def test_default_transformer(self, product_payload: dict) -> None:
        result = HateoasInterceptor().response(ResponseEnvelope(data=product_payload))
        assert isinstance(result.data, Node)
