#!/usr/bin/env python3
# CUI // SP-CTI
"""native-eject — Structured Exception Hierarchy.

Every failure the eject command can report is an EjectError. The CLI
catches EjectError at the command boundary, logs the message once and
exits with status 1.

Usage:
    from native_eject.errors import MissingFieldError

    raise MissingFieldError("name")
"""

from typing import List


class EjectError(Exception):
    """Base exception for all eject failures.

    Attributes:
        platform: Platform the failure belongs to ("ios", "android") or "".
    """

    def __init__(self, message: str, platform: str = ""):
        super().__init__(message)
        self.platform = platform


class BothPlatformsExistError(EjectError):
    """Both ./ios and ./android already exist; nothing to eject."""

    def __init__(self, message: str = ""):
        super().__init__(
            message
            or "Both the iOS and Android folders already exist! Please delete "
            "`ios` and/or `android` before ejecting."
        )


class ConfigNotFoundError(EjectError):
    """app.json is missing, unreadable or not a JSON object."""

    def __init__(self, path: str, reason: str = ""):
        message = (
            f"Eject requires an `app.json` config file to be located at {path}, "
            "and it must at least specify a `name` for the project name, and a "
            "`displayName` for the app's home screen label."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


_FIELD_MESSAGES = {
    "name": (
        "App `name` must be defined in the `app.json` config file to define "
        "the project name. It must not contain any spaces or dashes."
    ),
    "displayName": (
        "App `displayName` must be defined in the `app.json` config file, to "
        "define the label of the app on the home screen."
    ),
}


class MissingFieldError(EjectError):
    """A required app.json field is absent or empty.

    Attributes:
        field: The app.json key that failed validation.
    """

    def __init__(self, field: str):
        super().__init__(
            _FIELD_MESSAGES.get(
                field, f"App `{field}` must be defined in the `app.json` config file."
            )
        )
        self.field = field


class TemplateCopyError(EjectError):
    """Copying a bundled template tree into the project failed."""


class ImageResizeError(EjectError):
    """A single icon could not be decoded, resized or written."""


class ManifestError(EjectError):
    """The asset-catalog Contents.json could not be read, parsed or written."""


class IconPipelineError(EjectError):
    """One or more icon jobs of a platform failed.

    Attributes:
        failures: Human-readable description of every failed job.
    """

    def __init__(self, platform: str, failures: List[str]):
        lines = "\n".join(f"  - {f}" for f in failures)
        super().__init__(
            f"{len(failures)} icon step(s) failed for {platform}:\n{lines}",
            platform=platform,
        )
        self.failures = list(failures)
