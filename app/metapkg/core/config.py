"""User settings for metapkg.

This module provides the settings model and I/O functions. Settings are
stored in ~/.config/metapkg/config.toml and every field is optional; a
missing file simply means defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from metapkg.core.errors import MetapkgError
from metapkg.core.paths import get_config_path

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Settings for backend selection and process invocation.

    Attributes:
        manager: Preferred backend name. If None, a backend is autodetected.
        elevate: Run mutating commands through sudo.
        stream_output: Echo package manager output while it is captured.
        download_dir: Directory for downloaded package artifacts.
    """

    model_config = ConfigDict(extra="forbid")

    manager: Annotated[
        str | None,
        Field(description="Preferred package manager (None = autodetect)"),
    ] = None
    elevate: Annotated[
        bool,
        Field(description="Run mutating commands through sudo"),
    ] = False
    stream_output: Annotated[
        bool,
        Field(description="Echo captured package manager output"),
    ] = False
    download_dir: Annotated[
        Path | None,
        Field(description="Directory for downloaded package artifacts"),
    ] = None


class ConfigError(MetapkgError):
    """Base exception for settings errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the settings file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the settings file cannot be parsed."""


def read_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        ConfigNotFoundError: If the settings file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Settings file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid settings content: {e}") from e


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults when no file exists.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Settings from the file, or default Settings.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return read_settings(path)
    except ConfigNotFoundError:
        logger.debug("No settings file at %s, using defaults", path or get_config_path())
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write settings: {e}") from e

    return config_path


def settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    TOML has no null value, so unset optional fields are left out.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "elevate": settings.elevate,
        "stream_output": settings.stream_output,
    }

    if settings.manager is not None:
        result["manager"] = settings.manager

    if settings.download_dir is not None:
        result["download_dir"] = str(settings.download_dir)

    return result
