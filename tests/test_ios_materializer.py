# CUI // SP-CTI
"""Tests for native_eject.ios_materializer — iOS folder, icons, Contents.json."""

import json
from unittest.mock import patch

import pytest
from PIL import Image

from native_eject.errors import IconPipelineError, ImageResizeError, ManifestError
from native_eject.ios_materializer import (
    ICON_POINT_SIZES,
    appiconset_dir,
    materialize_ios,
    patch_contents_json,
)
from native_eject.project_config import IconConfig, ProjectConfig


def _config(icon="icon.png"):
    return ProjectConfig(name="MyApp", display_name="My App", icons=IconConfig(default=icon))


def _manifest(project_root):
    path = appiconset_dir(project_root / "ios", "MyApp") / "Contents.json"
    return json.loads(path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# TestMaterializeIos
# ---------------------------------------------------------------------------
class TestMaterializeIos:

    def test_copies_template_with_name(self, project_root, icon_png, settings):
        materialize_ios(project_root, _config(), settings)
        assert (project_root / "ios" / "MyApp" / "AppDelegate.m").is_file()
        assert (project_root / "ios" / "MyAppTests" / "MyAppTests.m").is_file()
        plist = (project_root / "ios" / "MyApp" / "Info.plist").read_text(encoding="utf-8")
        assert "<string>My App</string>" in plist

    def test_generates_seven_icons(self, project_root, icon_png, settings):
        result = materialize_ios(project_root, _config(), settings)
        folder = appiconset_dir(project_root / "ios", "MyApp")
        icons = sorted(folder.glob("*pt-icon.png"))
        assert len(icons) == 7
        assert len(result["icons_written"]) == 7
        for size in ICON_POINT_SIZES:
            with Image.open(folder / f"{size}pt-icon.png") as img:
                assert img.size == (size, size)

    def test_manifest_filenames_match_scale_times_size(self, project_root, icon_png, settings):
        materialize_ios(project_root, _config(), settings)
        images = _manifest(project_root)["images"]
        assert len(images) == 8
        for image in images:
            points = int(image["size"].split("x")[0])
            scale = int(image["scale"].replace("x", ""))
            assert image["filename"] == f"{points * scale}pt-icon.png"

    def test_icon_in_subfolder_uses_basename(self, project_root, settings):
        from conftest import make_png
        make_png(project_root / "assets" / "logo.png")
        materialize_ios(project_root, _config("assets/logo.png"), settings)
        folder = appiconset_dir(project_root / "ios", "MyApp")
        assert (folder / "120pt-logo.png").is_file()

    def test_missing_icon_file_is_skipped_with_warning(self, project_root, settings):
        result = materialize_ios(project_root, _config("nope.png"), settings)
        assert result["icons_written"] == []
        assert any("nope.png" in w for w in result["warnings"])
        assert (project_root / "ios" / "MyApp" / "Info.plist").is_file()
        assert all("filename" not in img for img in _manifest(project_root)["images"])

    def test_no_icon_configured_is_skipped_with_warning(self, project_root, settings):
        result = materialize_ios(project_root, _config(None), settings)
        assert result["warnings"] == ["No iOS icon configured"]

    def test_resize_failures_are_aggregated(self, project_root, icon_png, settings):
        def boom(source, dest, pixels, resample="LANCZOS"):
            raise ImageResizeError(f"cannot write {pixels}")

        with patch("native_eject.icon_generator.resize_icon", side_effect=boom):
            with pytest.raises(IconPipelineError) as exc:
                materialize_ios(project_root, _config(), settings)
        assert exc.value.platform == "ios"
        assert len(exc.value.failures) == 7

    def test_manifest_failure_is_reported(self, project_root, icon_png, settings):
        with patch("native_eject.ios_materializer.patch_contents_json",
                   side_effect=ManifestError("bad manifest", platform="ios")):
            with pytest.raises(IconPipelineError) as exc:
                materialize_ios(project_root, _config(), settings)
        assert exc.value.failures == ["bad manifest"]


# ---------------------------------------------------------------------------
# TestPatchContentsJson
# ---------------------------------------------------------------------------
class TestPatchContentsJson:

    def test_unmatched_entry_loses_filename(self, tmp_path):
        path = tmp_path / "Contents.json"
        path.write_text(json.dumps({"images": [
            {"size": "20x20", "scale": "2x", "filename": "old.png"},
            {"size": "1024x1024", "scale": "1x", "filename": "store.png"},
        ]}), encoding="utf-8")
        matched = patch_contents_json(path, {"SIZE_40": "40pt-icon.png"})
        images = json.loads(path.read_text(encoding="utf-8"))["images"]
        assert matched == 1
        assert images[0]["filename"] == "40pt-icon.png"
        assert "filename" not in images[1]

    def test_fractional_points(self, tmp_path):
        path = tmp_path / "Contents.json"
        path.write_text(json.dumps({"images": [
            {"size": "83.5x83.5", "scale": "2x"}]}), encoding="utf-8")
        patch_contents_json(path, {"SIZE_167": "167.png"})
        images = json.loads(path.read_text(encoding="utf-8"))["images"]
        assert images[0]["filename"] == "167.png"

    def test_missing_manifest_raises(self, tmp_path):
        with pytest.raises(ManifestError):
            patch_contents_json(tmp_path / "Contents.json", {})

    def test_malformed_manifest_raises(self, tmp_path):
        path = tmp_path / "Contents.json"
        path.write_text('{"images": [{"size": "20x20"}]}', encoding="utf-8")
        with pytest.raises(ManifestError):
            patch_contents_json(path, {})
