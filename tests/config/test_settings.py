from __future__ import annotations

import pytest
from pydantic import ValidationError

from hateoas_client.config.settings import HateoasSettings


class TestHateoasSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("LINKS_KEY", "ACTIONS_KEY", "DEFAULT_HTTP_METHODS", "MAX_DEPTH"):
            monkeypatch.delenv(f"HATEOAS_{name}", raising=False)
        settings = HateoasSettings(_env_file=None)
        assert settings.LINKS_KEY == "links"
        assert settings.ACTIONS_KEY == "actions"
        assert settings.PROPERTIES_KEY == "properties"
        assert settings.DEFAULT_HTTP_METHODS is None
        assert "query" in settings.QUERY_CLASSES

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HATEOAS_LINKS_KEY", "_links")
        monkeypatch.setenv("HATEOAS_MAX_DEPTH", "8")
        monkeypatch.setenv("HATEOAS_DEFAULT_HTTP_METHODS", '{"update": {"method": "PUT"}}')

        settings = HateoasSettings(_env_file=None)

        assert settings.LINKS_KEY == "_links"
        assert settings.MAX_DEPTH == 8
        assert settings.DEFAULT_HTTP_METHODS == {"update": {"method": "PUT"}}

    def test_rejects_empty_key(self) -> None:
        with pytest.raises(ValidationError):
            HateoasSettings(_env_file=None, ACTIONS_KEY="")

    def test_rejects_non_positive_depth(self) -> None:
        with pytest.raises(ValidationError):
            HateoasSettings(_env_file=None, MAX_DEPTH=0)
