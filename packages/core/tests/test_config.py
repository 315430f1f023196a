"""Tests for configuration loading."""

import pytest

from prsync_core.config import load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["output_dir"] == "/tmp/github.com"
    assert config["repo"] is None
    assert config["quiet"] is False


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("output_dir: /data/prs\nrepo: octo/widgets\n")
    config = load_config(config_path=str(cfg))
    assert config["output_dir"] == "/data/prs"
    assert config["repo"] == "octo/widgets"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("output_dir: /data/prs\n")
    config = load_config(config_path=str(cfg), cli_overrides={"output_dir": "/elsewhere"})
    assert config["output_dir"] == "/elsewhere"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("output_dir: /data/prs\n")
    config = load_config(config_path=str(cfg), cli_overrides={"output_dir": None})
    assert config["output_dir"] == "/data/prs"


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["output_dir"] == "/tmp/github.com"


def test_non_mapping_config_rejected(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(config_path=str(cfg))


def test_invalid_yaml_rejected(tmp_path):
    cfg = tmp_path / ".prsync.yml"
    cfg.write_text("output_dir: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(config_path=str(cfg))


def test_token_loaded_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"


def test_defaults_not_shared_between_loads(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["output_dir"] = "/changed"
    assert config_b["output_dir"] == "/tmp/github.com"
