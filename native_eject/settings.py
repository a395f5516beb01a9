#!/usr/bin/env python3
# CUI // SP-CTI
"""Tool settings for native-eject, loaded from args/eject_config.yaml.

Fallback chain for the template root:
    1. NATIVE_EJECT_TEMPLATES_DIR environment variable
    2. templates_dir in args/eject_config.yaml
    3. Default: <package>/templates/HelloWorld
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = PACKAGE_DIR / "args" / "eject_config.yaml"
TEMPLATES_ENV_VAR = "NATIVE_EJECT_TEMPLATES_DIR"

logger = logging.getLogger("native_eject.settings")

_DEFAULTS: Dict[str, Any] = {
    "templates_dir": "templates/HelloWorld",
    "placeholders": {
        "name": "HelloWorld",
        "name_lower": "helloworld",
        "display_name": "Hello App Display Name",
    },
    "binary_extensions": [
        ".png", ".jpg", ".jpeg", ".gif", ".ico", ".webp",
        ".jar", ".keystore", ".ttf", ".otf", ".zip",
    ],
    "resample": "LANCZOS",
    "max_workers": 4,
}


@dataclass(frozen=True)
class EjectSettings:
    templates_dir: Path
    name_token: str = "HelloWorld"
    name_lower_token: str = "helloworld"
    display_name_token: str = "Hello App Display Name"
    binary_extensions: Tuple[str, ...] = field(
        default_factory=lambda: tuple(_DEFAULTS["binary_extensions"]))
    resample: str = "LANCZOS"
    max_workers: int = 4

    @property
    def ios_template(self) -> Path:
        return self.templates_dir / "ios"

    @property
    def android_template(self) -> Path:
        return self.templates_dir / "android"


def _load_config(config_path: Path) -> Dict[str, Any]:
    """Load settings from YAML, merged over the built-in defaults."""
    if not config_path.exists():
        logger.debug("Config not found at %s, using defaults", config_path)
        return dict(_DEFAULTS)
    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load %s (%s), using defaults", config_path, e)
        return dict(_DEFAULTS)
    if not isinstance(loaded, dict):
        logger.warning("Ignoring %s: top level is not a mapping", config_path)
        return dict(_DEFAULTS)

    cfg = {**_DEFAULTS, **loaded}
    cfg["placeholders"] = {
        **_DEFAULTS["placeholders"], **(loaded.get("placeholders") or {})}
    return cfg


def _max_workers(raw: Any) -> int:
    default = int(_DEFAULTS["max_workers"])
    if raw is None:
        return default
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        logger.warning("Invalid max_workers %r, using %d", raw, default)
        return default


def load_settings(config_path: Optional[Path] = None) -> EjectSettings:
    """Build EjectSettings from the YAML config and environment."""
    cfg = _load_config(Path(config_path) if config_path else CONFIG_PATH)

    env_dir = os.environ.get(TEMPLATES_ENV_VAR, "").strip()
    templates_dir = Path(env_dir or cfg["templates_dir"])
    if not templates_dir.is_absolute():
        templates_dir = PACKAGE_DIR / templates_dir

    placeholders = cfg["placeholders"]
    extensions = tuple(
        ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        for ext in cfg.get("binary_extensions") or ()
    )
    return EjectSettings(
        templates_dir=templates_dir,
        name_token=str(placeholders["name"]),
        name_lower_token=str(placeholders["name_lower"]),
        display_name_token=str(placeholders["display_name"]),
        binary_extensions=extensions,
        resample=str(cfg.get("resample") or "LANCZOS").upper(),
        max_workers=_max_workers(cfg.get("max_workers")),
    )
