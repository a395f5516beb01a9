#!/usr/bin/env python3
# CUI // SP-CTI
"""Loader and validator for the project's app.json.

The `app.json` config may contain the following keys:

- `name` - The short name used for the project, should be TitleCase
- `displayName` - The app's name on the home screen
- `icon` - The app's icon. Either a path string used for every platform, or
  an object with optional keys:
    `ios` - path to an icon used for the iOS platform
    `android` - path to an icon used for the Android platform
    `default` - path used for both platforms; `ios` and `android` override it
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from native_eject.errors import ConfigNotFoundError, MissingFieldError

APP_CONFIG_FILENAME = "app.json"

logger = logging.getLogger("native_eject.project_config")


@dataclass(frozen=True)
class IconConfig:
    ios: Optional[str] = None
    android: Optional[str] = None
    default: Optional[str] = None


@dataclass(frozen=True)
class ProjectConfig:
    name: str
    display_name: str
    icons: IconConfig = field(default_factory=IconConfig)

    @property
    def ios_icon(self) -> Optional[str]:
        return self.icons.ios or self.icons.default

    @property
    def android_icon(self) -> Optional[str]:
        return self.icons.android or self.icons.default


def _icon_path(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def normalize_icon_config(raw: Any) -> IconConfig:
    """Normalize the polymorphic `icon` field into an IconConfig."""
    if isinstance(raw, str):
        return IconConfig(default=_icon_path(raw))
    if isinstance(raw, dict):
        return IconConfig(
            ios=_icon_path(raw.get("ios")),
            android=_icon_path(raw.get("android")),
            default=_icon_path(raw.get("default")),
        )
    if raw is not None:
        logger.warning("Ignoring `icon` of unsupported type %s", type(raw).__name__)
    return IconConfig()


def parse_project_config(data: Any, source: str = APP_CONFIG_FILENAME) -> ProjectConfig:
    """Validate a decoded app.json document. Fails on the first missing field."""
    if not isinstance(data, dict):
        raise ConfigNotFoundError(source, "top-level value must be a JSON object")

    name = data.get("name")
    if not name or not isinstance(name, str):
        raise MissingFieldError("name")

    display_name = data.get("displayName")
    if not display_name or not isinstance(display_name, str):
        raise MissingFieldError("displayName")

    return ProjectConfig(
        name=name,
        display_name=display_name,
        icons=normalize_icon_config(data.get("icon")),
    )


def load_project_config(project_root: Path) -> ProjectConfig:
    """Read and validate <project_root>/app.json."""
    config_path = Path(project_root).resolve() / APP_CONFIG_FILENAME
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigNotFoundError(str(config_path))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ConfigNotFoundError(str(config_path), str(e))

    config = parse_project_config(data, str(config_path))
    logger.debug(
        "Loaded %s: name=%s displayName=%s ios_icon=%s android_icon=%s",
        config_path, config.name, config.display_name,
        config.ios_icon, config.android_icon,
    )
    return config
