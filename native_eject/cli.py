#!/usr/bin/env python3
# CUI // SP-CTI
"""native-eject command line.

CLI: native-eject eject
     python -m native_eject.cli eject

Runs in the current working directory. Set NATIVE_EJECT_LOG_LEVEL=DEBUG for
per-file output.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from native_eject.eject import COMMAND_DESCRIPTION, COMMAND_NAME, eject
from native_eject.errors import EjectError

LOG_LEVEL_ENV_VAR = "NATIVE_EJECT_LOG_LEVEL"

logger = logging.getLogger("native_eject.cli")


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="native-eject",
        description="Materialize native iOS and Android folders from bundled templates",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser(COMMAND_NAME, help=COMMAND_DESCRIPTION, description=COMMAND_DESCRIPTION)
    return parser


def _print_summary(results: dict) -> None:
    print(f"\n{'=' * 60}")
    print(f"Eject: {results['app_name']} ({results['display_name']})")
    print(f"{'=' * 60}")
    for platform, platform_result in results["platforms"].items():
        status = platform_result.get("status", "unknown")
        if status == "skipped":
            print(f"  [SKIP] {platform}: folder already exists")
            continue
        print(
            f"  [OK]   {platform}: {platform_result.get('files_copied', 0)} files, "
            f"{len(platform_result.get('icons_written', []))} icons"
        )
    if results.get("warnings"):
        print("\nWarnings:")
        for warning in results["warnings"]:
            print(f"  - {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    parser = build_parser()
    parser.parse_args(argv)

    try:
        results = eject()
    except EjectError as e:
        logger.error("%s", e)
        return 1
    _print_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
