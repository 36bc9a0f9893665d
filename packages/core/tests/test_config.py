"""Tests for configuration loading."""

import pytest

from snipreview_core.config import credential_key, env_credential_names, load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "gemini"
    assert config["language"] == "javascript"
    assert config["store"] == "file"
    assert config["store_path"] == ".snipreview.json"
    assert config["format_reviews"] is True


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("model: openai\nlanguage: python\nformat_reviews: false\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "openai"
    assert config["language"] == "python"
    assert config["format_reviews"] is False


def test_sqlite_store_gets_db_default_path(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("store: sqlite\n")
    config = load_config(config_path=str(cfg))
    assert config["store_path"] == ".snipreview.db"


def test_explicit_store_path_kept(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("store: sqlite\nstore_path: /tmp/reviews.db\n")
    config = load_config(config_path=str(cfg))
    assert config["store_path"] == "/tmp/reviews.db"


def test_memory_store_has_no_path(tmp_path):
    config = load_config(config_path=str(tmp_path / "none.yml"), cli_overrides={"store": "memory"})
    assert config["store_path"] is None


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("model: openai\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "openai"


def test_unknown_model_raises(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("model: llama\n")
    with pytest.raises(ValueError, match="llama"):
        load_config(config_path=str(cfg))


def test_unknown_store_raises(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("store: redis\n")
    with pytest.raises(ValueError, match="redis"):
        load_config(config_path=str(cfg))


def test_empty_config_file_uses_defaults(tmp_path):
    cfg = tmp_path / ".snip.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "gemini"


class TestCredentialNames:
    def test_credential_key_is_per_provider(self):
        assert credential_key("gemini") == "gemini-api-key"
        assert credential_key("openai") == "openai-api-key"

    def test_gemini_env_names_include_legacy_api_key(self):
        assert env_credential_names({"model": "gemini"}) == ["GEMINI_API_KEY", "API_KEY"]

    def test_anthropic_env_name(self):
        assert env_credential_names({"model": "anthropic"}) == ["ANTHROPIC_API_KEY"]

    def test_override_with_single_name(self):
        assert env_credential_names({"model": "gemini", "env_credential": "MY_KEY"}) == ["MY_KEY"]

    def test_override_with_list(self):
        config = {"model": "gemini", "env_credential": ["A", "B"]}
        assert env_credential_names(config) == ["A", "B"]
