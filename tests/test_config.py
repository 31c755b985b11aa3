"""Tests for gitdata.config — models and YAML loader."""

import os
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from gitdata.config.loader import DEFAULT_CONFIG_TEMPLATE, _expand_env_vars, load_config
from gitdata.config.models import ApiConfig, GitDataConfig
from gitdata.remote import GitHubGitData, create_store, resolve_token


# ── Defaults ────────────────────────────────────────────────────────


class TestGitDataConfigDefaults:
    def test_default_log_level(self, sample_config):
        assert sample_config.log_level == "info"

    def test_default_log_format(self, sample_config):
        assert sample_config.log_format == "text"

    def test_default_api(self, sample_config):
        assert sample_config.api.base_url == "https://api.github.com"
        assert sample_config.api.token_env == "GITHUB_TOKEN"
        assert sample_config.api.blob_write_encoding == "utf-8"
        assert sample_config.api.strict is False


class TestApiConfig:
    def test_trailing_slash_stripped(self):
        assert ApiConfig(base_url="https://ghe.example.com/api/v3/").base_url == (
            "https://ghe.example.com/api/v3"
        )

    def test_rejects_non_http_scheme(self):
        with pytest.raises(ValidationError):
            ApiConfig(base_url="ftp://example.com")

    def test_rejects_missing_host(self):
        with pytest.raises(ValidationError):
            ApiConfig(base_url="https://")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ApiConfig(timeout=0)

    def test_rejects_unknown_blob_encoding(self):
        with pytest.raises(ValidationError):
            ApiConfig(blob_write_encoding="latin-1")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            GitDataConfig(log_level="verbose")


# ── Loader ──────────────────────────────────────────────────────────


class TestLoadConfig:
    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("api:\n  strict: true\nlog_level: debug\n")
        cfg = load_config(str(path))
        assert cfg.api.strict is True
        assert cfg.log_level == "debug"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_config(str(tmp_path / "nope.yaml"))

    def test_project_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "gitdata.yaml").write_text("api:\n  timeout: 5\n")
        assert load_config().api.timeout == 5.0

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert load_config() == GitDataConfig()

    def test_empty_file_falls_through(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "gitdata.yaml").write_text("")
        assert load_config() == GitDataConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(path))

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("api:\n  base_url: gopher://x\n")
        with pytest.raises(ValueError, match="Invalid config"):
            load_config(str(path))

    def test_env_expansion(self, tmp_path):
        path = tmp_path / "env.yaml"
        path.write_text('api:\n  base_url: "${GHE_URL}"\n')
        with patch.dict(os.environ, {"GHE_URL": "https://ghe.example.com/api/v3"}):
            cfg = load_config(str(path))
        assert cfg.api.base_url == "https://ghe.example.com/api/v3"

    def test_template_parses_to_defaults(self):
        raw = yaml.safe_load(DEFAULT_CONFIG_TEMPLATE)
        assert GitDataConfig(**raw) == GitDataConfig()


class TestExpandEnvVars:
    def test_nested(self):
        with patch.dict(os.environ, {"A": "1"}, clear=False):
            assert _expand_env_vars({"x": ["${A}", {"y": "${A}-z"}], "n": 3}) == {
                "x": ["1", {"y": "1-z"}],
                "n": 3,
            }

    def test_unset_var_becomes_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _expand_env_vars("${MISSING}") == ""


# ── Store construction ──────────────────────────────────────────────


class TestCreateStore:
    async def test_from_config(self):
        store = create_store(ApiConfig(strict=True, blob_write_encoding="base64"))
        assert isinstance(store, GitHubGitData)
        assert store.strict is True
        assert store.blob_write_encoding == "base64"
        await store.aclose()

    def test_resolve_token_explicit_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        assert resolve_token(ApiConfig(), "cli-token") == "cli-token"

    def test_resolve_token_from_env(self, monkeypatch):
        monkeypatch.setenv("MY_TOKEN", "env-token")
        assert resolve_token(ApiConfig(token_env="MY_TOKEN")) == "env-token"

    def test_resolve_token_missing(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        with pytest.raises(ValueError, match="GITHUB_TOKEN"):
            resolve_token(ApiConfig())
