"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from catalog_service.settings import Settings


class TestEffectivePort:
    def test_defaults_to_api_server_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PORT", raising=False)
        assert Settings(api_server_port=9000).effective_port == 9000

    def test_port_env_var_takes_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        assert Settings(api_server_port=9000).effective_port == 8080
