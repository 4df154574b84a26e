"""Unit tests for config_manager module."""

import pytest

from aspell_pipe.config_manager import AspellPipeConfig, ConfigError, ConfigManager


class TestAspellPipeConfig:
    """Tests for AspellPipeConfig dataclass."""

    def test_default_values(self):
        config = AspellPipeConfig()
        assert config.executable == "aspell"
        assert config.default_dictionary is None
        assert config.read_timeout is None

    def test_to_dict_drops_none(self):
        config = AspellPipeConfig(default_dictionary="en_GB")
        assert config.to_dict() == {"executable": "aspell", "default_dictionary": "en_GB"}

    def test_from_dict_partial(self):
        config = AspellPipeConfig.from_dict({"read_timeout": 5})
        assert config.executable == "aspell"
        assert config.read_timeout == 5.0


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_load_missing_file_gives_defaults(self):
        assert ConfigManager.load_config() == AspellPipeConfig()

    def test_custom_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager.load_config(str(tmp_path / "missing.toml"))

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('executable = "/usr/local/bin/aspell"\ndefault_dictionary = "de"\n')

        config = ConfigManager.load_config(str(path))

        assert config.executable == "/usr/local/bin/aspell"
        assert config.default_dictionary == "de"

    def test_invalid_toml_raises(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("executable = \n")

        with pytest.raises(ConfigError, match="Failed to load"):
            ConfigManager.load_config(str(path))

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ASPELL_PIPE_EXECUTABLE", "/snap/bin/aspell")
        monkeypatch.setenv("ASPELL_PIPE_READ_TIMEOUT", "2.5")

        config = ConfigManager.load_config()

        assert config.executable == "/snap/bin/aspell"
        assert config.read_timeout == 2.5

    def test_invalid_timeout_env_ignored(self, monkeypatch):
        monkeypatch.setenv("ASPELL_PIPE_READ_TIMEOUT", "soon")

        assert ConfigManager.load_config().read_timeout is None

    def test_save_and_load_default_location(self, isolated_config):
        ConfigManager.save_config(AspellPipeConfig(default_dictionary="fr", read_timeout=3.0))

        config_file = isolated_config / "config.toml"
        assert config_file.exists()
        assert config_file.stat().st_mode & 0o777 == 0o600
        assert ConfigManager.load_config().default_dictionary == "fr"

    def test_save_preserves_comments(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('# my aspell settings\nexecutable = "aspell"\n')

        ConfigManager.save_config(AspellPipeConfig(default_dictionary="nl"), str(path))

        content = path.read_text()
        assert "# my aspell settings" in content
        assert 'default_dictionary = "nl"' in content

    def test_update_config(self, isolated_config):
        ConfigManager.update_config(default_dictionary="en_CA")
        config = ConfigManager.update_config(read_timeout=10.0)

        assert config.default_dictionary == "en_CA"
        assert config.read_timeout == 10.0

    def test_update_does_not_persist_env_overrides(self, isolated_config, monkeypatch):
        monkeypatch.setenv("ASPELL_PIPE_EXECUTABLE", "/tmp/other-aspell")

        ConfigManager.update_config(default_dictionary="en")

        assert "other-aspell" not in (isolated_config / "config.toml").read_text()

