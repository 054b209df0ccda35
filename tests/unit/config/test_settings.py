"""Tests for localstack_mcp.config (settings + conf directory)."""

from __future__ import annotations

import pytest

from localstack_mcp.config.directory import get_conf_dir, set_conf_dir
from localstack_mcp.config.settings import Settings, get_setting


class TestConfDir:
    def test_explicit_dir_wins(self, tmp_path):
        set_conf_dir(str(tmp_path))
        assert get_conf_dir() == tmp_path

    def test_env_var_used_when_unset(self, tmp_path, monkeypatch):
        set_conf_dir(None)
        monkeypatch.setenv("LOCALSTACK_MCP_CONF", str(tmp_path / "from-env"))
        assert get_conf_dir() == tmp_path / "from-env"

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        set_conf_dir(None)
        monkeypatch.delenv("LOCALSTACK_MCP_CONF", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_conf_dir() == tmp_path / "localstack-mcp"


class TestSettings:
    def test_singleton(self):
        assert Settings() is Settings()

    def test_defaults(self):
        assert get_setting("localstack.endpoint") == "http://localhost:4566"
        assert get_setting("localstack.connect_timeout") == 5.0
        assert get_setting("state.large_export_threshold") == 100
        assert get_setting("state.default_services") == ["s3", "dynamodb", "sqs", "sns", "lambda"]

    def test_missing_key_returns_default(self):
        assert get_setting("localstack.nope", "fallback") == "fallback"
        assert get_setting("nope.deeper.still") is None

    def test_yaml_overrides_are_deep_merged(self, isolated_settings):
        (isolated_settings / "settings.yaml").write_text(
            "localstack:\n  request_timeout: 12\nstate:\n  default_services: [s3]\n"
        )
        Settings().reload()

        assert get_setting("localstack.request_timeout") == 12
        # Untouched siblings keep their defaults
        assert get_setting("localstack.endpoint") == "http://localhost:4566"
        assert get_setting("state.default_services") == ["s3"]

    @pytest.mark.parametrize("content", ["- just\n- a list\n", "key: [unclosed\n"])
    def test_unusable_yaml_is_ignored(self, isolated_settings, content):
        (isolated_settings / "settings.yaml").write_text(content)
        Settings().reload()
        assert get_setting("localstack.endpoint") == "http://localhost:4566"

    def test_endpoint_env_override(self, monkeypatch):
        monkeypatch.setenv("LOCALSTACK_ENDPOINT", "http://localstack:4566")
        Settings().reload()
        assert get_setting("localstack.endpoint") == "http://localstack:4566"

    def test_get_section(self):
        section = Settings().get_section("logging")
        assert section == {"level": "INFO"}
