"""Tests for shared types module."""

from pathlib import Path

from rso_packager.types import ContentKind, PackageResult


class TestEnums:
    """Test enum definitions."""

    def test_content_kind_values(self) -> None:
        """ContentKind should have expected values."""
        assert ContentKind.BOTH.value == "both"
        assert ContentKind.FORMS_ONLY.value == "forms-only"
        assert ContentKind.FIRMWARE_ONLY.value == "firmware-only"

    def test_content_kind_is_closed(self) -> None:
        """ContentKind should have exactly three members."""
        assert len(list(ContentKind)) == 3


class TestPackageResult:
    """Test PackageResult dataclass."""

    def test_minimal(self) -> None:
        """PackageResult should work with minimal args."""
        result = PackageResult(
            package_name="Acme",
            root_folder=Path("/tmp/Acme"),
            content=ContentKind.FORMS_ONLY,
            has_rollback=False,
        )
        assert result.manifest_path is None
        assert result.manifest_ok is False
        assert result.written_files == []

    def test_manifest_ok(self) -> None:
        """manifest_ok should reflect a generated manifest."""
        result = PackageResult(
            package_name="Acme",
            root_folder=Path("/tmp/Acme"),
            content=ContentKind.BOTH,
            has_rollback=True,
            manifest_path=Path("/tmp/Acme/Acme.manifest.json"),
        )
        assert result.manifest_ok is True
