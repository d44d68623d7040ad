"""Config file discovery and loading.

The first config file found is used; environment variables are layered on top
of it by ``AccessibilitySettings``.
"""

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..exceptions import InvalidConfigurationException
from ..logging import get_logger
from .settings import AccessibilitySettings

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAMES = (
    "accessibility.config.json",
    ".accessibilityrc.json",
    ".accessibilityrc",
)
HOME_CONFIG_FILENAME = ".accessibility.config.json"


def _search_paths(paths: Iterable[str | Path] | None, cwd: Path) -> list[Path]:
    candidates = [Path(p).expanduser().resolve() for p in paths or ()]
    candidates.extend(cwd / name for name in DEFAULT_CONFIG_FILENAMES)
    candidates.append(Path.home() / HOME_CONFIG_FILENAME)
    return list(dict.fromkeys(candidates))


def find_config_file(
    paths: Iterable[str | Path] | None = None, cwd: Path | None = None
) -> Path | None:
    """Return the first existing config file in priority order.

    Args:
        paths: Explicit paths, searched first in the given order
        cwd: Directory searched for the default file names (defaults to the
            current working directory)
    """
    for candidate in _search_paths(paths, cwd or Path.cwd()):
        if candidate.is_file():
            return candidate
    return None


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake_key(key: Any) -> Any:
    if not isinstance(key, str):
        return key
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _snake_keys(value: Any) -> Any:
    """Rewrite camelCase keys to field names so environment values merge onto them."""
    if isinstance(value, dict):
        return {_snake_key(key): _snake_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_snake_keys(item) for item in value]
    return value


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidConfigurationException(str(path), f"cannot be read: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidConfigurationException(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(str(path), "top-level value must be an object")
    return _snake_keys(data)


def load_settings(
    paths: Iterable[str | Path] | None = None,
    cwd: Path | None = None,
    **overrides: Any,
) -> AccessibilitySettings:
    """Load settings from the first config file found plus the environment.

    Args:
        paths: Explicit config file paths, highest priority first
        cwd: Directory searched for the default config file names
        **overrides: Section values merged over the file contents

    Returns:
        Validated settings

    Raises:
        InvalidConfigurationException: If the selected file is unreadable or
            not a JSON object
        pydantic.ValidationError: If a value is out of range
    """
    data: dict[str, Any] = {}
    config_file = find_config_file(paths, cwd)
    if config_file is not None:
        data = _read_config_file(config_file)
        logger.info("config_loaded", path=str(config_file))

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(data.get(key), dict):
            data[key] = {**data[key], **value}
        else:
            data[key] = value

    return AccessibilitySettings(**data)
