"""Configuration loading and management for clonestream.

Configuration sources are merged in priority order:
    1. Defaults (defined in DetectorConfig)
    2. Project config (./clonestream.toml)
    3. Explicit config file
    4. Legacy CHUNKSIZE environment variable
    5. CLONESTREAM_* environment variables
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(chunk_size=7)
    >>> config.chunk_size
    7
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import CloneStreamError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

DEFAULT_CHUNK_SIZE = 5
DEFAULT_SUFFIX = ".java"

PROJECT_CONFIG_NAME = "clonestream.toml"


@dataclass(frozen=True)
class DetectorConfig:
    """Configuration for a clone detection run.

    The window size must stay the same for the lifetime of a corpus: chunks
    stored under one size are rebuilt from contents when compared under
    another.

    Attributes:
        chunk_size: Number of content lines per comparison window (K)
        accepted_suffix: File name suffix accepted at admission
        retain_chunks: Keep chunks in the in-memory corpus after commit
        corpus_dir: Directory of a persistent corpus (None = in-memory)
        verbosity: Logging verbosity level
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    accepted_suffix: str = DEFAULT_SUFFIX
    retain_chunks: bool = True
    corpus_dir: Optional[str] = None
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ValueError("chunk_size must be an integer")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")

        if not self.accepted_suffix or not self.accepted_suffix.startswith("."):
            raise ValueError("accepted_suffix must start with '.'")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")


# Default configuration (singleton)
DEFAULT_CONFIG = DetectorConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> DetectorConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated DetectorConfig instance

    Raises:
        CloneStreamError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except CloneStreamError:
            raise
        except Exception as e:
            raise CloneStreamError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise CloneStreamError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except CloneStreamError:
            raise
        except Exception as e:
            raise CloneStreamError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(merged) - set(DetectorConfig.__dataclass_fields__)
    if unknown:
        key = sorted(unknown)[0]
        raise InvalidConfigError(key, merged[key], "unknown configuration key")

    try:
        return DetectorConfig(**merged)
    except ValueError as e:
        key = str(e).split(" ", 1)[0]
        raise InvalidConfigError(key, merged.get(key), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from the environment.

    Supported environment variables:
        CHUNKSIZE: int (legacy name for the window size)
        CLONESTREAM_CHUNK_SIZE: int
        CLONESTREAM_ACCEPTED_SUFFIX: str
        CLONESTREAM_RETAIN_CHUNKS: bool (true/false/1/0)
        CLONESTREAM_CORPUS_DIR: str
        CLONESTREAM_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(DetectorConfig)

    result: dict[str, Any] = {}

    legacy = os.environ.get("CHUNKSIZE")
    if legacy is not None:
        try:
            result["chunk_size"] = int(legacy)
        except ValueError:
            raise InvalidConfigError("chunk_size", legacy, "CHUNKSIZE must be an integer")

    for field_name in DetectorConfig.__dataclass_fields__:
        env_key = f"CLONESTREAM_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return the clonestream settings in it.

    Settings may live at the top level or under a ``[clonestream]`` table.

    Raises:
        CloneStreamError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise CloneStreamError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("clonestream")
    if isinstance(section, dict):
        return dict(section)
    return data
