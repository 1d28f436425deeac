"""
multisource configuration management using Pydantic Settings.

Configuration only supplies *default* policy flags for composites built
through ``Composite.from_settings()`` / ``construct_composite(settings=...)``,
plus logging. Composites created directly keep the built-in defaults.

Configuration can be provided via:
1. multisource.yaml config file
2. MULTISOURCE_* env vars (nested with double underscore)
3. .env file
4. Direct instantiation

Priority (highest wins): init kwargs > multisource.yaml > env vars > defaults

The multisource.yaml format:
    allow_duplicates: false
    error_if_missing: true
    log_level: DEBUG

or, equivalently, with the flags nested:
    defaults:
      allow_duplicates: false
      error_if_missing: true
"""

import logging
import os
from pathlib import Path
from typing import Optional, Literal, Dict, Any, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
    PydanticBaseSettingsSource,
)

from multisource.policy.flags import PolicyFlags, FLAG_NAMES

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MULTISOURCE_CONFIG"
CONFIG_FILE_NAMES = ("multisource.yaml", "multisource.yml")


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from a multisource.yaml config file.

    Discovers config at:
    1. Explicit path passed via _config_path init kwarg
    2. $MULTISOURCE_CONFIG env var
    3. ./multisource.yaml
    4. ./multisource.yml

    Top-level flag keys are folded into the ``defaults`` section.
    """

    def __init__(
        self, settings_cls: Type[BaseSettings], config_path: Optional[str] = None
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._yaml_data: Optional[Dict[str, Any]] = None
        self._load()

    def _discover_config_file(self) -> Optional[Path]:
        """Find the config file to load."""
        if self._config_path:
            p = Path(self._config_path)
            return p if p.is_file() else None

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            p = Path(env_path)
            return p if p.is_file() else None

        for name in CONFIG_FILE_NAMES:
            p = Path(name)
            if p.is_file():
                return p

        return None

    def _load(self) -> None:
        """Load and parse the YAML config file.

        A file that is not valid YAML raises; a file whose top level is
        not a mapping is ignored with a warning.
        """
        path = self._discover_config_file()
        if path is None:
            self._yaml_data = {}
            return

        import yaml

        with open(path) as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            logger.warning(f"Ignoring config {path}: top level is not a mapping")
            data = None
        self._yaml_data = data or {}
        logger.debug(f"Loaded config from {path}")

    def _map_to_settings(self) -> Dict[str, Any]:
        """Map flat YAML keys to the nested MultiSourceSettings structure."""
        if not self._yaml_data:
            return {}

        data = self._yaml_data
        result: Dict[str, Any] = {}

        if "debug" in data:
            result["debug"] = data["debug"]

        if "log_level" in data:
            result["log_level"] = data["log_level"]

        # defaults section first, then top-level flags on top of it
        defaults_cfg = data.get("defaults", {})
        if isinstance(defaults_cfg, dict) and defaults_cfg:
            result.setdefault("defaults", {}).update(defaults_cfg)

        for flag in FLAG_NAMES:
            if flag in data:
                result.setdefault("defaults", {})[flag] = data[flag]

        return result

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        mapped = self._map_to_settings()
        value = mapped.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return self._map_to_settings()


class MultiSourceSettings(BaseSettings):
    """
    Main multisource configuration.

    All settings can be overridden via environment variables with the
    MULTISOURCE_ prefix. Nested settings use double underscore:
    MULTISOURCE_DEFAULTS__ALLOW_DELETION=true

    A multisource.yaml config file is also supported (config takes priority).
    Pass _config_path to override the config file location.
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTISOURCE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Path to multisource.yaml (set via _config_path kwarg, not a real setting field)
    _config_path: Optional[str] = None

    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Policy flags for composites built from settings
    defaults: PolicyFlags = Field(default_factory=PolicyFlags)

    def __init__(self, _config_path: Optional[str] = None, **kwargs: Any):
        self.__class__._config_path = _config_path
        super().__init__(**kwargs)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Insert YAML config source before env vars.

        Priority (highest first): init > yaml > env > dotenv. Secrets
        directories are not read.
        """
        yaml_source = YamlConfigSource(settings_cls, config_path=cls._config_path)
        return (
            init_settings,
            yaml_source,
            env_settings,
            dotenv_settings,
        )


def setup_logging(settings: Optional[MultiSourceSettings] = None) -> logging.Logger:
    """
    Apply the configured level to the ``multisource`` logger.

    Only the package logger is touched; handlers are left to the host
    application, except that ``debug`` attaches a stream handler if the
    logger has none.

    Returns:
        The package logger
    """
    settings = settings or MultiSourceSettings()
    package_logger = logging.getLogger("multisource")
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    package_logger.setLevel(level)

    if settings.debug and not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        package_logger.addHandler(handler)

    return package_logger
