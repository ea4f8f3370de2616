"""Tests for ProfileLoader and the profile schema."""

import orjson
import pytest

from nibras_shell.config import ProfileLoader
from nibras_shell.config.schemas import ConfigValidator, SchemaValidationError


@pytest.fixture
def bundled() -> dict:
    return ProfileLoader().load()


def write_profile(path, data):
    path.write_bytes(orjson.dumps(data))
    return path


class TestProfileLoader:
    """Test loading the install profile."""

    def test_bundled_profile(self, bundled):
        assert set(bundled["package_groups"]) == {"essential", "aur", "optional"}
        assert bundled["package_groups"]["optional"]["confirm"] is True
        assert "quickshell" in bundled["removal"]["specific"]
        assert {o["mode"] for o in bundled["overlays"]} == {"tree", "contents", "file"}

    def test_cached(self, tmp_path, bundled):
        path = write_profile(tmp_path / "profile.json", bundled)
        loader = ProfileLoader(path)

        first = loader.load()
        path.unlink()

        assert loader.load() is first

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ProfileLoader(tmp_path / "absent.json").load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            ProfileLoader(path).load()

    def test_unknown_overlay_mode(self, tmp_path, bundled):
        bundled["overlays"][0]["mode"] = "symlink"
        path = write_profile(tmp_path / "profile.json", bundled)

        with pytest.raises(SchemaValidationError) as exc_info:
            ProfileLoader(path).load()

        assert exc_info.value.schema_type == "profile"
        assert exc_info.value.path == "overlays.0.mode"

    def test_missing_group(self, tmp_path, bundled):
        del bundled["package_groups"]["aur"]
        path = write_profile(tmp_path / "profile.json", bundled)

        with pytest.raises(SchemaValidationError, match="aur"):
            ProfileLoader(path).load()


class TestManifestSchema:
    """Test manifest validation."""

    def test_valid(self):
        ConfigValidator().validate_manifest(
            {
                "manifest_version": "1.0.0",
                "name": "nibras-backup-20240101-000000",
                "created": "2024-01-01T00:00:00",
                "entries": [
                    {"name": "hypr", "relative_path": "hypr-old"}
                ],
            }
        )

    def test_missing_entries(self):
        with pytest.raises(SchemaValidationError, match="entries"):
            ConfigValidator().validate_manifest(
                {
                    "manifest_version": "1.0.0",
                    "name": "nibras-backup-20240101-000000",
                    "created": "2024-01-01T00:00:00",
                }
            )
