from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_INDEX_URL = "https://pypi.org"
DEFAULT_STATS_URL = "https://pypi-stats-api.vercel.app/api/packages"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    base_url: str = DEFAULT_INDEX_URL
    stats_url: str = DEFAULT_STATS_URL
    timeout: float = 15.0
    fetch_stats: bool = True


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    theme: str = "light"
    releases_limit: int = 0
    width: int | None = None


@dataclass(frozen=True, slots=True)
class AppConfig:
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def _coerce(section: str, data: dict[str, Any], key: str, cast: Callable[[Any], Any], default: Any) -> Any:
    if key not in data or data[key] is None:
        return default
    value = data[key]
    # TOML booleans are ints to Python; reject them for numeric settings.
    if isinstance(value, bool) and cast is not _strict_bool:
        logger.warning("Ignoring invalid %s.%s=%r, using %r", section, key, value, default)
        return default
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid %s.%s=%r, using %r", section, key, value, default)
        return default


def _positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError(f"expected a positive integer, got {value!r}")
    return number


def _strict_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def _parse_registry(data: dict[str, Any]) -> RegistryConfig:
    return RegistryConfig(
        base_url=os.getenv("PYPILENS_INDEX_URL") or _coerce("registry", data, "base_url", str, DEFAULT_INDEX_URL),
        stats_url=os.getenv("PYPILENS_STATS_URL") or _coerce("registry", data, "stats_url", str, DEFAULT_STATS_URL),
        timeout=_coerce("registry", data, "timeout", float, 15.0),
        fetch_stats=_coerce("registry", data, "fetch_stats", _strict_bool, True),
    )


def _parse_display(data: dict[str, Any]) -> DisplayConfig:
    theme = str(data.get("theme", "light")).lower()
    if theme not in {"light", "dark"}:
        logger.warning("Ignoring unknown display.theme=%r, using 'light'", data.get("theme"))
        theme = "light"
    return DisplayConfig(
        theme=theme,
        releases_limit=max(0, _coerce("display", data, "releases_limit", int, 0)),
        width=_coerce("display", data, "width", _positive_int, None),
    )


def load_config(app_dir: Path | None = None) -> AppConfig:
    """
    Load configuration from TOML files.

    Search order (later overrides earlier):
    1. ~/.config/pypilens/config.toml
    2. <app_dir>/config.toml
    3. ./pypilens.toml
    """
    config_paths = [
        Path.home() / ".config" / "pypilens" / "config.toml",
        (app_dir or default_app_dir()) / "config.toml",
        Path.cwd() / "pypilens.toml",
    ]

    merged: dict[str, Any] = {"registry": {}, "display": {}}

    for path in config_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.warning("Skipping invalid config file %s: %s", path, e)
                continue
            for section in ("registry", "display"):
                if isinstance(data.get(section), dict):
                    merged[section].update(data[section])

    return AppConfig(
        registry=_parse_registry(merged["registry"]),
        display=_parse_display(merged["display"]),
    )


def default_app_dir() -> Path:
    return Path.home() / ".config" / "pypilens"


def load_env(app_dir: Path) -> None:
    """
    Load environment variables from:
    - cwd/.env
    - ~/.config/pypilens/.env (or the resolved app_dir)
    """
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    load_dotenv(dotenv_path=app_dir / ".env", override=False)


def resolve_app_dir(app_dir: Path | None = None) -> Path:
    resolved = (app_dir or default_app_dir()).expanduser().resolve()
    load_env(resolved)
    return resolved
