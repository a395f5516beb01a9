#!/usr/bin/env python3
# CUI // SP-CTI
"""The eject command: re-create the `ios` and `android` native folders.

Because native code can be difficult to maintain, a project can start from
an `app.json` config and eject into platform-owned source trees later.

Stages run strictly in order:
    1. Precondition check (./ios and ./android must not both exist)
    2. app.json load and validation
    3. iOS folder + icons + Contents.json
    4. Android folder + launcher icons

Any stage failure raises an EjectError; nothing already written is rolled
back, so a failed eject may leave a partially populated folder.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from native_eject.android_materializer import materialize_android
from native_eject.errors import BothPlatformsExistError
from native_eject.ios_materializer import materialize_ios
from native_eject.project_config import load_project_config
from native_eject.settings import EjectSettings, load_settings

logger = logging.getLogger("native_eject.eject")

COMMAND_NAME = "eject"
COMMAND_DESCRIPTION = "Re-create the iOS and Android folders and native code"


def check_preconditions(project_root: Path) -> Tuple[bool, bool]:
    """Return (ios_exists, android_exists).

    Raises:
        BothPlatformsExistError: both folders are already present.
    """
    ios_exists = (project_root / "ios").exists()
    android_exists = (project_root / "android").exists()
    if ios_exists and android_exists:
        raise BothPlatformsExistError()
    if ios_exists:
        logger.info("The iOS folder already exists; only the Android folder will be generated.")
    if android_exists:
        logger.info("The Android folder already exists; only the iOS folder will be generated.")
    return ios_exists, android_exists


def eject(
    project_root: Optional[Path] = None,
    settings: Optional[EjectSettings] = None,
) -> Dict[str, Any]:
    """Materialize the missing native folders for the project at project_root.

    Returns:
        Summary dict with per-platform results and collected warnings.

    Raises:
        EjectError: on the first failed stage.
    """
    start_time = datetime.now(tz=timezone.utc)
    root = Path(project_root or Path.cwd()).resolve()
    settings = settings or load_settings()

    ios_exists, android_exists = check_preconditions(root)
    config = load_project_config(root)

    results: Dict[str, Any] = {
        "status": "success",
        "project_root": str(root),
        "app_name": config.name,
        "display_name": config.display_name,
        "platforms": {},
        "warnings": [],
    }

    if ios_exists:
        results["platforms"]["ios"] = {"status": "skipped"}
    else:
        results["platforms"]["ios"] = materialize_ios(root, config, settings)

    if android_exists:
        results["platforms"]["android"] = {"status": "skipped"}
    else:
        results["platforms"]["android"] = materialize_android(root, config, settings)

    for platform_result in results["platforms"].values():
        results["warnings"].extend(platform_result.get("warnings", []))

    elapsed = (datetime.now(tz=timezone.utc) - start_time).total_seconds()
    results["elapsed_seconds"] = round(elapsed, 2)
    logger.info(
        "Ejected '%s' in %.1fs (%d warning(s))",
        config.name, elapsed, len(results["warnings"]),
    )
    return results
