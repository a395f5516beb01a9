#!/usr/bin/env python3
# CUI // SP-CTI
"""Copy a bundled template tree into a project with name substitution.

Placeholder tokens are replaced in every path component and in the
contents of text files. Binary files are copied byte-for-byte.
"""

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from native_eject.errors import TemplateCopyError
from native_eject.settings import EjectSettings

logger = logging.getLogger("native_eject.template_copy")

SKIP_NAMES = {".DS_Store", "__pycache__"}


@dataclass(frozen=True)
class TemplateOptions:
    display_name: str


class _Substitution:
    """Single-pass token replacement; substituted values are never rescanned."""

    def __init__(self, name: str, options: TemplateOptions, settings: EjectSettings):
        self.values: Dict[str, str] = {}
        for token, value in (
            (settings.display_name_token, options.display_name),
            (settings.name_token, name),
            (settings.name_lower_token, name.lower()),
        ):
            if token:
                self.values.setdefault(token, value)
        # Longest token first when one token prefixes another.
        tokens = sorted(self.values, key=len, reverse=True)
        self.pattern = re.compile("|".join(re.escape(t) for t in tokens)) if tokens else None

    def __call__(self, text: str) -> str:
        if self.pattern is None:
            return text
        return self.pattern.sub(lambda m: self.values[m.group(0)], text)


def _is_binary(path: Path, settings: EjectSettings) -> bool:
    return path.suffix.lower() in settings.binary_extensions


def _copy_file(
    src: Path, dest: Path, substitute: _Substitution,
    settings: EjectSettings,
) -> None:
    dest.parent.mkdir(parents=True, exist_ok=True)
    if _is_binary(src, settings):
        shutil.copy2(src, dest)
        return
    try:
        content = src.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        shutil.copy2(src, dest)
        return
    dest.write_text(substitute(content), encoding="utf-8")
    shutil.copymode(src, dest)


def copy_project_template_and_replace(
    src_dir: Path,
    dest_dir: Path,
    name: str,
    options: TemplateOptions,
    settings: EjectSettings,
) -> List[Path]:
    """Copy src_dir to dest_dir, substituting the project name and display name.

    Returns:
        Destination paths of every file written, in walk order.

    Raises:
        TemplateCopyError: if the template is missing or any file fails to copy.
    """
    src_dir = Path(src_dir)
    dest_dir = Path(dest_dir)
    if not src_dir.is_dir():
        raise TemplateCopyError(f"Template directory does not exist: {src_dir}")

    substitute = _Substitution(name, options, settings)
    written: List[Path] = []

    for src_file in sorted(src_dir.rglob("*")):
        rel = src_file.relative_to(src_dir)
        if any(part in SKIP_NAMES for part in rel.parts):
            continue
        if not src_file.is_file():
            continue

        dest_rel = Path(*[substitute(part) for part in rel.parts])
        dest_file = dest_dir / dest_rel
        try:
            _copy_file(src_file, dest_file, substitute, settings)
        except OSError as e:
            raise TemplateCopyError(
                f"Failed to copy {src_file} -> {dest_file}: {e}") from e
        logger.debug("Copied %s -> %s", rel, dest_rel)
        written.append(dest_file)

    logger.info("Copied %d template files into %s", len(written), dest_dir)
    return written
