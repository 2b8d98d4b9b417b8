"""Tests for OpenApiSettings."""

from __future__ import annotations

import pytest

from functions_openapi.settings import OpenApiSettings


class TestDefaults:
    def test_defaults(self) -> None:
        settings = OpenApiSettings()
        assert settings.title == "OpenAPI Document on Azure Functions"
        assert settings.version == "1.0.0"
        assert settings.description is None
        assert settings.openapi_version == "3.1.0"
        assert settings.route_prefix == "api"
        assert settings.skip_invalid is False

    def test_info(self) -> None:
        info = OpenApiSettings(title="Pets", version="2.0.0", description="Pet store").info()
        assert info.title == "Pets"
        assert info.version == "2.0.0"
        assert info.description == "Pet store"


class TestFromDict:
    def test_known_keys(self) -> None:
        settings = OpenApiSettings.from_dict({"title": "Pets", "route_prefix": ""})
        assert settings.title == "Pets"
        assert settings.route_prefix == ""

    def test_ignores_unknown_and_private_keys(self) -> None:
        settings = OpenApiSettings.from_dict({"_title": "x", "colour": "blue"})
        assert settings == OpenApiSettings()


class TestFromEnv:
    def test_reads_host_setting_keys(self) -> None:
        settings = OpenApiSettings.from_env(
            {
                "OpenApi__Info__Title": "Pets",
                "OpenApi__Info__Version": "3.1.4",
                "OpenApi__Info__Description": "Pet store",
                "OpenApi__Version": "3.0.3",
                "OpenApi__RoutePrefix": "v1",
                "UNRELATED": "value",
            }
        )
        assert settings == OpenApiSettings(
            title="Pets",
            version="3.1.4",
            description="Pet store",
            openapi_version="3.0.3",
            route_prefix="v1",
        )

    def test_missing_keys_keep_defaults(self) -> None:
        assert OpenApiSettings.from_env({}) == OpenApiSettings()

    def test_defaults_to_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OpenApi__Info__Title", "From Env")
        assert OpenApiSettings.from_env().title == "From Env"
