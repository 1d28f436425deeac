"""Tests for MultiSourceSettings and the YAML config source."""

import logging

import pytest
import yaml
from pydantic import ValidationError

from multisource import Composite, PolicyFlags
from multisource.config.settings import (
    MultiSourceSettings,
    YamlConfigSource,
    setup_logging,
)


class TestDefaults:

    def test_builtin_defaults(self, clean_env):
        settings = MultiSourceSettings(_env_file=None)

        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.defaults == PolicyFlags()

    def test_env_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("MULTISOURCE_DEFAULTS__ALLOW_DELETION", "true")
        monkeypatch.setenv("MULTISOURCE_LOG_LEVEL", "DEBUG")

        settings = MultiSourceSettings(_env_file=None)

        assert settings.defaults.allow_deletion is True
        assert settings.defaults.allow_duplicates is True
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            MultiSourceSettings(log_level="LOUD", _env_file=None)


class TestYamlConfig:

    def _write(self, path, data):
        with open(path, "w") as f:
            yaml.dump(data, f)
        return path

    def test_flat_flags(self, clean_env):
        config_path = self._write(
            clean_env / "custom.yaml",
            {"allow_duplicates": False, "error_if_missing": True, "log_level": "WARNING"},
        )

        settings = MultiSourceSettings(_config_path=str(config_path), _env_file=None)

        assert settings.defaults.allow_duplicates is False
        assert settings.defaults.error_if_missing is True
        assert settings.log_level == "WARNING"

    def test_nested_defaults_section(self, clean_env):
        config_path = self._write(
            clean_env / "custom.yaml",
            {"defaults": {"allow_override": False}},
        )

        settings = MultiSourceSettings(_config_path=str(config_path), _env_file=None)

        assert settings.defaults.allow_override is False

    def test_discovered_in_cwd(self, clean_env):
        self._write(clean_env / "multisource.yaml", {"allow_deletion": True})

        settings = MultiSourceSettings(_env_file=None)

        assert settings.defaults.allow_deletion is True

    def test_env_var_path(self, clean_env, monkeypatch):
        config_path = self._write(clean_env / "elsewhere.yml", {"debug": True})
        monkeypatch.setenv("MULTISOURCE_CONFIG", str(config_path))

        settings = MultiSourceSettings(_env_file=None)

        assert settings.debug is True

    def test_yaml_beats_env(self, clean_env, monkeypatch):
        self._write(clean_env / "multisource.yaml", {"allow_deletion": False})
        monkeypatch.setenv("MULTISOURCE_DEFAULTS__ALLOW_DELETION", "true")

        settings = MultiSourceSettings(_env_file=None)

        assert settings.defaults.allow_deletion is False

    def test_init_beats_yaml(self, clean_env):
        self._write(clean_env / "multisource.yaml", {"log_level": "ERROR"})

        settings = MultiSourceSettings(log_level="DEBUG", _env_file=None)

        assert settings.log_level == "DEBUG"

    def test_invalid_yaml_raises(self, clean_env):
        config_path = clean_env / "bad.yaml"
        config_path.write_text("allow_duplicates: 'missing quote")

        with pytest.raises(yaml.YAMLError):
            MultiSourceSettings(_config_path=str(config_path), _env_file=None)

    def test_unknown_flag_in_defaults_rejected(self, clean_env):
        config_path = self._write(
            clean_env / "custom.yaml",
            {"defaults": {"allow_teleport": True}},
        )

        with pytest.raises(ValidationError):
            MultiSourceSettings(_config_path=str(config_path), _env_file=None)

    def test_composite_from_yaml(self, clean_env):
        self._write(clean_env / "multisource.yaml", {"allow_duplicates": False})

        composite = Composite.from_settings([{"x": 1}, {"x": 2}])

        assert composite.allow_duplicates is False


class TestMapToSettings:
    """Tests for YamlConfigSource._map_to_settings()."""

    def _build_source(self, yaml_data):
        """Create a YamlConfigSource with injected YAML data."""
        source = YamlConfigSource.__new__(YamlConfigSource)
        source._yaml_data = yaml_data
        return source

    def test_empty(self):
        assert self._build_source({})._map_to_settings() == {}

    def test_top_level_flag_overrides_section(self):
        source = self._build_source({
            "defaults": {"allow_deletion": False, "allow_override": False},
            "allow_deletion": True,
        })

        result = source._map_to_settings()

        assert result == {"defaults": {"allow_deletion": True, "allow_override": False}}

    def test_unrelated_keys_dropped(self):
        source = self._build_source({"port": 4000, "debug": True})

        assert source._map_to_settings() == {"debug": True}


class TestSetupLogging:

    def test_sets_package_level(self, clean_env):
        settings = MultiSourceSettings(log_level="WARNING", _env_file=None)

        logger = setup_logging(settings)
        try:
            assert logger.name == "multisource"
            assert logger.level == logging.WARNING
        finally:
            logger.setLevel(logging.NOTSET)

    def test_debug_adds_handler(self, clean_env):
        package_logger = logging.getLogger("multisource")
        saved = list(package_logger.handlers)
        package_logger.handlers.clear()
        try:
            setup_logging(MultiSourceSettings(debug=True, _env_file=None))

            assert package_logger.level == logging.DEBUG
            assert len(package_logger.handlers) == 1
        finally:
            package_logger.handlers[:] = saved
            package_logger.setLevel(logging.NOTSET)
