#!/usr/bin/env python3
# CUI // SP-CTI
"""Icon resizing for platform launcher icons.

Each platform stage hands generate_icons() an ordered list of IconSpec
entries. Jobs run in a ThreadPoolExecutor and are all joined before
generate_icons() returns, so callers can rely on every file being written
(or every failure being reported) once it returns.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from native_eject.errors import ImageResizeError

logger = logging.getLogger("native_eject.icon_generator")

_JPEG_SUFFIXES = {".jpg", ".jpeg"}


@dataclass(frozen=True)
class IconSpec:
    label: str
    pixels: int
    path: Path


@dataclass
class IconResult:
    platform: str
    label: str
    pixels: int
    path: Path
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        return f"{self.platform} {self.label} ({self.pixels}px) -> {self.path}: {self.error}"


def resolve_icon_source(project_root: Path, icon: Optional[str]) -> Optional[Path]:
    """Resolve a configured icon path against the project root."""
    if not icon:
        return None
    path = Path(icon)
    return path if path.is_absolute() else Path(project_root) / path


def _resample_filter(name: str) -> Image.Resampling:
    try:
        return Image.Resampling[name.upper()]
    except KeyError:
        logger.warning("Unknown resample filter %r, using LANCZOS", name)
        return Image.Resampling.LANCZOS


def resize_icon(source: Path, dest: Path, pixels: int, resample: str = "LANCZOS") -> Path:
    """Resize source to a pixels x pixels square and write it to dest.

    Non-square sources are center-cropped to cover the square.

    Raises:
        ImageResizeError: unreadable source, invalid size, or failed write.
    """
    if pixels <= 0:
        raise ImageResizeError(f"Invalid icon size {pixels} for {dest}")
    try:
        with Image.open(source) as img:
            img.load()
            icon = ImageOps.fit(
                img.convert("RGBA"), (pixels, pixels), method=_resample_filter(resample))
        if Path(dest).suffix.lower() in _JPEG_SUFFIXES:
            icon = icon.convert("RGB")
        Path(dest).parent.mkdir(parents=True, exist_ok=True)
        icon.save(dest)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as e:
        raise ImageResizeError(f"Failed to resize {source} to {pixels}px at {dest}: {e}") from e
    return Path(dest)


def generate_icons(
    platform: str,
    source: Path,
    specs: Sequence[IconSpec],
    max_workers: int = 4,
    resample: str = "LANCZOS",
) -> List[IconResult]:
    """Run one resize job per spec and wait for all of them.

    Returns:
        One IconResult per spec, in spec order. Failed jobs carry `error`.
    """
    results: List[Optional[IconResult]] = [None] * len(specs)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(resize_icon, source, spec.path, spec.pixels, resample): idx
            for idx, spec in enumerate(specs)
        }
        for future in as_completed(futures):
            idx = futures[future]
            spec = specs[idx]
            result = IconResult(platform, spec.label, spec.pixels, spec.path)
            try:
                future.result()
                logger.debug("Wrote %s icon %s (%dpx)", platform, spec.path, spec.pixels)
            except ImageResizeError as exc:
                logger.error("%s icon %s failed: %s", platform, spec.label, exc)
                result.error = str(exc)
            except Exception as exc:
                logger.error("%s icon %s failed unexpectedly: %s", platform, spec.label, exc)
                result.error = f"{type(exc).__name__}: {exc}"
            results[idx] = result

    written = sum(1 for r in results if r and r.ok)
    logger.info("Generated %d/%d %s icons", written, len(specs), platform)
    return [r for r in results if r is not None]
