"""Tests for the layered config loader."""

from pathlib import Path
from unittest.mock import patch

import pytest

from tubepick.config.loader import (
    ConfigSource,
    TubepickConfig,
    _find_project_config,
    _get_root_dir,
    _load_yaml_config,
    _resolve_config,
    clear_config_cache,
    get_config,
)
from tubepick.exceptions import ConfigError


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    """No real user/project config or env overrides leak into these tests."""
    monkeypatch.setenv("TUBEPICK_ROOT", str(tmp_path / "root"))
    monkeypatch.delenv("TUBEPICK_CLIENT", raising=False)
    monkeypatch.delenv("TUBEPICK_ALTERNATE_CLIENT", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestTubepickConfig:
    def test_is_frozen(self, config):
        with pytest.raises(AttributeError):
            config.primary_client = "tv"  # type: ignore

    def test_alternate_for_primary(self, config):
        assert config.alternate_for("mobile") == "web"

    def test_alternate_for_alternate_flips_back(self, config):
        assert config.alternate_for("web") == "mobile"

    def test_alternate_for_other_client(self, config):
        assert config.alternate_for("android") == "web"


class TestLoadYamlConfig:
    """Tests for _load_yaml_config."""

    def test_nonexistent(self, tmp_path):
        assert _load_yaml_config(tmp_path / "missing.yaml") is None

    def test_valid(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "primary_client: tv\n")
        assert _load_yaml_config(path) == {"primary_client": "tv"}

    def test_empty(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "")
        assert _load_yaml_config(path) == {}

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "primary_client: [unclosed\n")
        assert _load_yaml_config(path) is None

    def test_non_dict(self, tmp_path):
        path = _write(tmp_path / "config.yaml", "- a\n- b\n")
        assert _load_yaml_config(path) is None


class TestFindProjectConfig:
    def test_not_found(self):
        assert _find_project_config() is None

    def test_found_in_parent(self, tmp_path, monkeypatch):
        path = _write(tmp_path / ".tubepick" / "config.yaml", "primary_client: tv\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert _find_project_config() == path


class TestGetRootDir:
    def test_env_override(self, tmp_path):
        assert _get_root_dir() == (tmp_path / "root").resolve()

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TUBEPICK_ROOT")
        with patch("tubepick.config.loader.sys.platform", "linux"):
            assert _get_root_dir() == Path.home() / ".tubepick"


class TestResolveConfig:
    """Priority: env > project > user > defaults."""

    def test_defaults(self):
        config = _resolve_config()
        assert config.source == ConfigSource.DEFAULT
        assert config.primary_client == "mobile"
        assert config.alternate_client == "web"
        assert config.muxed_clients == ("web", "android")
        assert config.session_refresh_minutes == 15

    def test_user_config(self, tmp_path):
        _write(tmp_path / "root" / "config.yaml", "primary_client: tv\nmetadata_timeout: 60\n")
        config = _resolve_config()
        assert config.source == ConfigSource.USER
        assert config.primary_client == "tv"
        assert config.metadata_timeout == 60

    def test_project_overrides_user(self, tmp_path):
        _write(tmp_path / "root" / "config.yaml", "primary_client: tv\n")
        _write(tmp_path / ".tubepick" / "config.yaml", "primary_client: android\n")
        config = _resolve_config()
        assert config.source == ConfigSource.PROJECT
        assert config.primary_client == "android"

    def test_env_overrides_project(self, tmp_path, monkeypatch):
        _write(tmp_path / ".tubepick" / "config.yaml", "primary_client: android\n")
        monkeypatch.setenv("TUBEPICK_CLIENT", "tv")
        monkeypatch.setenv("TUBEPICK_ALTERNATE_CLIENT", "mweb")
        config = _resolve_config()
        assert config.source == ConfigSource.ENV
        assert config.primary_client == "tv"
        assert config.alternate_client == "mweb"

    def test_muxed_clients_from_string(self, tmp_path):
        _write(tmp_path / "root" / "config.yaml", "muxed_clients: 'web, tv'\n")
        assert _resolve_config().muxed_clients == ("web", "tv")

    def test_same_primary_and_alternate_rejected(self, monkeypatch):
        monkeypatch.setenv("TUBEPICK_CLIENT", "web")
        with pytest.raises(ConfigError, match="must differ"):
            _resolve_config()

    @pytest.mark.parametrize(
        "text",
        [
            "session_refresh_minutes: soon\n",
            "metadata_timeout: 0\n",
            "probe_timeout: -1\n",
            "muxed_clients: 5\n",
        ],
    )
    def test_bad_values_rejected(self, tmp_path, text):
        _write(tmp_path / "root" / "config.yaml", text)
        with pytest.raises(ConfigError):
            _resolve_config()

    def test_unreadable_user_config_falls_back(self):
        with patch("tubepick.config.loader._load_yaml_config", return_value=None):
            config = _resolve_config()
        assert config.source == ConfigSource.DEFAULT


class TestGetConfig:
    def test_cached(self):
        assert get_config() is get_config()

    def test_clear_cache(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("TUBEPICK_CLIENT", "tv")
        assert get_config() is first
        clear_config_cache()
        assert get_config().primary_client == "tv"

    def test_returns_config_type(self):
        assert isinstance(get_config(), TubepickConfig)
