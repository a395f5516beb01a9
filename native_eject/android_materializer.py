#!/usr/bin/env python3
# CUI // SP-CTI
"""Android materializer: template copy and launcher icon regeneration."""

import logging
from pathlib import Path
from typing import Any, Dict, List

from native_eject.errors import IconPipelineError
from native_eject.icon_generator import IconSpec, generate_icons, resolve_icon_source
from native_eject.project_config import ProjectConfig
from native_eject.settings import EjectSettings
from native_eject.template_copy import TemplateOptions, copy_project_template_and_replace

logger = logging.getLogger("native_eject.android_materializer")

PLATFORM = "android"
RES_DIR = Path("app", "src", "main", "res")

# Density bucket -> launcher icon pixel size, in generation order.
ICON_SIZES: Dict[str, int] = {
    "hdpi": 48,
    "mdpi": 72,
    "xhdpi": 96,
    "xxhdpi": 144,
}


def icon_size_specs(android_root: Path) -> List[IconSpec]:
    return [
        IconSpec(
            label=bucket,
            pixels=pixels,
            path=android_root / RES_DIR / f"mipmap-{bucket}" / "ic_launcher.png",
        )
        for bucket, pixels in ICON_SIZES.items()
    ]


def _remove_existing_icons(specs: List[IconSpec]) -> List[str]:
    """Delete stale launcher icons; returns a description of each failure."""
    failures = []
    for spec in specs:
        try:
            spec.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Could not remove %s: %s", spec.path, e)
            failures.append(f"{PLATFORM} {spec.label}: could not remove {spec.path}: {e}")
    return failures


def materialize_android(
    project_root: Path, config: ProjectConfig, settings: EjectSettings
) -> Dict[str, Any]:
    """Generate ./android from the template and regenerate its launcher icons.

    Raises:
        TemplateCopyError: template copy failed.
        IconPipelineError: any removal or resize failed; lists all of them.
    """
    android_root = project_root / "android"
    result: Dict[str, Any] = {"status": "success", "files_copied": 0,
                              "icons_written": [], "warnings": []}

    logger.info("Generating the Android folder.")
    written = copy_project_template_and_replace(
        settings.android_template, android_root, config.name,
        TemplateOptions(display_name=config.display_name), settings,
    )
    result["files_copied"] = len(written)

    logger.info("Setting up app icons for Android.")
    source = resolve_icon_source(project_root, config.android_icon)
    if source is None or not source.is_file():
        warning = (f"Android icon source not found: {source}" if source
                   else "No Android icon configured")
        logger.warning("%s; keeping the template launcher icons", warning)
        result["warnings"].append(warning)
        return result

    specs = icon_size_specs(android_root)
    failures = _remove_existing_icons(specs)
    if not failures:
        icon_results = generate_icons(
            PLATFORM, source, specs,
            max_workers=settings.max_workers, resample=settings.resample,
        )
        failures = [r.describe() for r in icon_results if not r.ok]
        result["icons_written"] = [str(r.path) for r in icon_results if r.ok]

    if failures:
        raise IconPipelineError(PLATFORM, failures)
    return result
