"""Shared type definitions for rso_packager.

This module contains enums and dataclasses shared across subpackages
to avoid circular imports.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ContentKind(str, Enum):
    """Which install/rollback content categories a package carries."""

    BOTH = "both"
    FORMS_ONLY = "forms-only"
    FIRMWARE_ONLY = "firmware-only"


@dataclass
class PackageResult:
    """Result of a package creation run."""

    package_name: str
    root_folder: Path
    content: ContentKind
    has_rollback: bool
    manifest_path: Path | None = None
    written_files: list[Path] = field(default_factory=list)

    @property
    def manifest_ok(self) -> bool:
        """True if the content manifest was generated."""
        return self.manifest_path is not None


__all__ = ["ContentKind", "PackageResult"]
