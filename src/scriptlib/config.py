"""Configuration management for scriptlib using pydantic-settings.

Supports hierarchical configuration from:
1. Environment variables (highest priority)
2. JSON config file
3. Default values (lowest priority)

Environment variables use the format: SCRIPTLIB_<SECTION>__<FIELD>
Example: SCRIPTLIB_EDIT__ENCODING=latin-1

The process-wide flags (verbose, debug, dry-run, help) live in their own
settings class so a child process inherits them from SCRIPTLIB_VERBOSE etc.
"""

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from scriptlib.errors import InvalidConfigError


APP_NAME = "scriptlib"
ENV_PREFIX = "SCRIPTLIB_"


class ProcessFlags(BaseSettings):
    """Global flags shared by a script and the processes it spawns."""

    verbose: bool = False
    debug: bool = False
    dry_run: bool = False
    help: bool = False

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)

    def to_args(self) -> list[str]:
        """Serialize the flags as command-line arguments for a child invocation."""
        args: list[str] = []
        if self.debug:
            args.append("--debug")
        elif self.verbose:
            args.append("--verbose")
        if self.dry_run:
            args.append("--dry-run")
        if self.help:
            args.append("--help")
        return args

    def to_environ(self) -> dict[str, str]:
        """Serialize the flags as environment variables for a child process."""
        return {
            f"{ENV_PREFIX}{name.upper()}": "1" if value else "0"
            for name, value in self.model_dump().items()
        }


class JsonConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source for loading from JSON file."""

    def __init__(self, settings_cls: type[BaseSettings], json_file: Path):
        super().__init__(settings_cls)
        self.json_file = json_file

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value - required by base class but not used in v2."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from JSON file."""
        if self.json_file.exists():
            return _load_config_file(self.json_file)
        return {}


def _load_config_file(path: Path) -> dict[str, Any]:
    """Read a JSON config file, reporting unusable files as InvalidConfigError."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidConfigError(f"Failed to load config file {path}: {e}", path=str(path)) from e

    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"Config file {path} must contain a JSON object, not {type(raw).__name__}",
            path=str(path),
        )
    return _strip_comment_fields(raw)


class LoggingConfig(BaseModel):
    """Logging configuration section."""

    log_file: str | None = None  # None = console only
    file_level: str = "DEBUG"
    rotation: str = "10 MB"
    retention: str = "7 days"

    @field_validator("file_level")
    @classmethod
    def level_must_be_upper(cls, v: str) -> str:
        """Normalize level names so loguru accepts them."""
        return v.strip().upper()


class EditConfig(BaseModel):
    """Text editing primitives configuration section."""

    encoding: str = "utf-8"
    scratch_prefix: str = ".tmp_"
    preserve_mode: bool = True
    diff_context_lines: int = Field(default=3, ge=0)

    @field_validator("scratch_prefix")
    @classmethod
    def prefix_must_be_file_name(cls, v: str) -> str:
        """Scratch files live next to their target, so no separators."""
        if not v or os.sep in v or (os.altsep and os.altsep in v):
            raise ValueError("scratch_prefix must be a non-empty file name prefix")
        return v


def _default_secret_arguments() -> list[str]:
    return [
        "--password",
        "--passwd",
        "--token",
        "--secret",
        "--api-key",
        "--client-secret",
    ]


class RedactionConfig(BaseModel):
    """Secret masking applied when arguments are echoed in verbose mode."""

    secret_arguments: list[str] = Field(default_factory=_default_secret_arguments)
    mask: str = "********"


# Module-level variables
_json_config_file: Path | None = None  # For settings_customise_sources
_settings_cache: "Settings | None" = None  # For singleton pattern


def _strip_comment_fields(data: Any) -> Any:
    """Recursively strip keys starting with _ or $ from dict.

    Args:
        data: Dictionary to clean (or any other type, which is returned as-is)

    Returns:
        Dictionary with comment fields removed, or original value if not a dict
    """
    if not isinstance(data, dict):
        return data
    return {
        k: _strip_comment_fields(v) if isinstance(v, dict) else v
        for k, v in data.items()
        if not k.startswith('_') and not k.startswith('$')
    }


class Settings(BaseSettings):
    """Root configuration model with nested sections.

    Loads configuration from (in priority order):
    1. Environment variables with SCRIPTLIB_ prefix
    2. JSON config file (if provided)
    3. Default values
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    edit: EditConfig = Field(default_factory=EditConfig)
    redaction: RedactionConfig = Field(default_factory=RedactionConfig)

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def from_file(cls, config_path: Path | str) -> "Settings":
        """Load settings from a JSON config file.

        Args:
            config_path: Path to JSON config file

        Returns:
            Settings instance loaded from file, or default Settings if file doesn't exist

        Raises:
            InvalidConfigError: If the file is not a readable JSON object
        """
        path = Path(config_path)
        if not path.exists():
            return cls()
        return cls(**_load_config_file(path))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add JSON config file support.

        Priority order (highest to lowest):
        1. Environment variables
        2. JSON config file (if _json_config_file module variable is set)
        3. Default values
        """
        if _json_config_file is not None:
            json_source = JsonConfigSettingsSource(settings_cls, json_file=_json_config_file)
            return (env_settings, json_source, init_settings)
        return (env_settings, init_settings)


def get_config_file_path() -> Path:
    """Default config file location, honouring XDG_CONFIG_HOME."""
    xdg_base = os.environ.get("XDG_CONFIG_HOME")
    if xdg_base:
        return Path(xdg_base) / APP_NAME / "config.json"
    return Path.home() / ".config" / APP_NAME / "config.json"


def get_settings(config_path: Path | str | None = None, *, _force_reload: bool = False) -> Settings:
    """Load settings from optional JSON config file and environment variables.

    Implements singleton pattern - returns cached settings unless _force_reload=True
    or config_path is provided. Without an explicit path, the default config file
    is used when it exists.

    Args:
        config_path: Optional path to JSON config file. If provided, bypasses cache.
        _force_reload: If True, bypasses cache and creates fresh Settings instance

    Returns:
        Settings instance with merged configuration

    Raises:
        InvalidConfigError: If the config file is not a readable JSON object
        ValidationError: If a configured value is invalid
    """
    global _json_config_file, _settings_cache

    if _settings_cache is not None and not _force_reload and config_path is None:
        return _settings_cache

    json_file = Path(config_path) if config_path else get_config_file_path()
    _json_config_file = json_file
    try:
        settings = Settings()
    finally:
        _json_config_file = None  # Reset after use

    if config_path is None:
        _settings_cache = settings

    return settings
