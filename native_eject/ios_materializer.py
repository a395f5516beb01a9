#!/usr/bin/env python3
# CUI // SP-CTI
"""iOS materializer: template copy, app icon generation, Contents.json patch.

Icons are written into the generated asset catalog as
`<points>pt-<icon basename>`, then every image entry of the catalog's
Contents.json is pointed at the file whose pixel size equals
`scale * points`.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from native_eject.errors import IconPipelineError, ManifestError
from native_eject.icon_generator import (
    IconResult,
    IconSpec,
    generate_icons,
    resolve_icon_source,
)
from native_eject.project_config import ProjectConfig
from native_eject.settings import EjectSettings
from native_eject.template_copy import TemplateOptions, copy_project_template_and_replace

logger = logging.getLogger("native_eject.ios_materializer")

PLATFORM = "ios"
ICON_POINT_SIZES = (40, 60, 58, 87, 80, 120, 180)


def appiconset_dir(ios_root: Path, app_name: str) -> Path:
    return ios_root / app_name / "Images.xcassets" / "AppIcon.appiconset"


def icon_size_specs(ios_root: Path, app_name: str, icon_source: str) -> List[IconSpec]:
    """Return the fixed iOS icon specs for a source icon."""
    base = Path(icon_source).name
    folder = appiconset_dir(ios_root, app_name)
    return [
        IconSpec(label=str(size), pixels=size, path=folder / f"{size}pt-{base}")
        for size in ICON_POINT_SIZES
    ]


def _required_pixels(entry: Dict[str, Any]) -> int:
    points = float(str(entry["size"]).split("x")[0])
    scale = float(str(entry["scale"]).replace("x", ""))
    return int(round(points * scale))


def patch_contents_json(contents_path: Path, filenames: Dict[str, str]) -> int:
    """Point every image entry at its generated file.

    Args:
        contents_path: The asset catalog's Contents.json.
        filenames: Mapping of "SIZE_<pixels>" to generated filename.

    Returns:
        Number of entries that received a filename.

    Raises:
        ManifestError: unreadable, malformed or unwritable manifest.
    """
    try:
        manifest = json.loads(Path(contents_path).read_text(encoding="utf-8"))
        images = manifest["images"]
        matched = 0
        for image in images:
            filename = filenames.get(f"SIZE_{_required_pixels(image)}")
            if filename:
                image["filename"] = filename
                matched += 1
            else:
                image.pop("filename", None)
        Path(contents_path).write_text(
            json.dumps(manifest, separators=(",", ":")), encoding="utf-8")
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ManifestError(f"Failed to update {contents_path}: {e}", platform=PLATFORM) from e

    logger.info("Patched %d/%d entries in %s", matched, len(images), contents_path)
    return matched


def materialize_ios(
    project_root: Path, config: ProjectConfig, settings: EjectSettings
) -> Dict[str, Any]:
    """Generate ./ios from the template and set up its app icons.

    Raises:
        TemplateCopyError: template copy failed.
        IconPipelineError: any icon or manifest step failed; lists all of them.
    """
    ios_root = project_root / "ios"
    result: Dict[str, Any] = {"status": "success", "files_copied": 0,
                              "icons_written": [], "warnings": []}

    logger.info("Generating the iOS folder.")
    written = copy_project_template_and_replace(
        settings.ios_template, ios_root, config.name,
        TemplateOptions(display_name=config.display_name), settings,
    )
    result["files_copied"] = len(written)

    logger.info("Setting up app icons for iOS.")
    source = resolve_icon_source(project_root, config.ios_icon)
    if source is None or not source.is_file():
        warning = (f"iOS icon source not found: {source}" if source
                   else "No iOS icon configured")
        logger.warning("%s; skipping iOS icon generation", warning)
        result["warnings"].append(warning)
        return result

    specs = icon_size_specs(ios_root, config.name, config.ios_icon)
    icon_results: List[IconResult] = generate_icons(
        PLATFORM, source, specs,
        max_workers=settings.max_workers, resample=settings.resample,
    )
    failures = [r.describe() for r in icon_results if not r.ok]

    # Every resize job has been joined at this point.
    filenames = {f"SIZE_{r.pixels}": r.path.name for r in icon_results if r.ok}
    try:
        patch_contents_json(appiconset_dir(ios_root, config.name) / "Contents.json", filenames)
    except ManifestError as e:
        failures.append(str(e))

    result["icons_written"] = [str(r.path) for r in icon_results if r.ok]
    if failures:
        raise IconPipelineError(PLATFORM, failures)
    return result
