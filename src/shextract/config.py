"""Configuration handling for shextract."""

from dataclasses import dataclass, field
from pathlib import Path

# Use tomllib (3.11+) or tomli as fallback
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from shextract.flatten import DEFAULT_MAX_DEPTH


class ConfigError(Exception):
    """The configuration file is unreadable or holds invalid values."""


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return Path.home() / ".config" / "shextract"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.toml"


@dataclass
class ExtractConfig:
    """Extraction configuration."""
    clean: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH  # 0 = unlimited


@dataclass
class Config:
    """Complete configuration."""
    extract: ExtractConfig = field(default_factory=ExtractConfig)


def load_config(path: Path | None = None) -> Config:
    """
    Load configuration from file.

    Args:
        path: Path to config file. Defaults to ~/.config/shextract/config.toml

    Returns:
        Config object with loaded values (or defaults if file doesn't exist)

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    if path is None:
        path = get_config_path()

    config = Config()

    if not path.exists():
        return config

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    # Parse extract section
    if "extract" in data:
        extract_data = data["extract"]
        if "clean" in extract_data:
            if not isinstance(extract_data["clean"], bool):
                raise ConfigError(f"{path}: extract.clean must be true or false")
            config.extract.clean = extract_data["clean"]
        if "max_depth" in extract_data:
            max_depth = extract_data["max_depth"]
            if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
                raise ConfigError(f"{path}: extract.max_depth must be a non-negative integer")
            config.extract.max_depth = max_depth

    return config


def get_default_config_content() -> str:
    """Get the default configuration file content as a string."""
    return f'''# shextract configuration

[extract]
# Normalize every extracted command (same as --clean)
clean = false

# How many nested `sh -c` / `bash -c` levels to unwrap (0 = unlimited)
max_depth = {DEFAULT_MAX_DEPTH}
'''
