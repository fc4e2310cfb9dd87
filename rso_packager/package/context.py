"""Package context: metadata and resolved paths for a single run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rso_packager.package.content import classify_content
from rso_packager.types import ContentKind

if TYPE_CHECKING:
    from rso_packager.inputs.schema import PackageInputSchema


@dataclass
class PackageContext:
    """Mutable record populated incrementally as the run progresses.

    Attributes:
        package_name: Package name, also the root output folder name.
        date: Release date for the changelog.
        package_description: Free-text description.
        business_item: Business item identifier.
        prerequisites: Pre-requisite steps for installation.
        input_*: Staging folders in the work directory.
        install_forms, install_firmware, rollback_forms, rollback_firmware:
            Content files captured before staging folders are moved.
        has_*: Content flags derived from the staging folders.
        *_folder: Output folders, set once created.
    """

    package_name: str = ""
    date: str = ""
    package_description: str = ""
    business_item: str = ""
    prerequisites: list[str] = field(default_factory=list)

    # Staging folders
    input_install_forms: Path | None = None
    input_install_firmware: Path | None = None
    input_rollback_forms: Path | None = None
    input_rollback_firmware: Path | None = None

    # Content
    install_forms: list[Path] = field(default_factory=list)
    install_firmware: list[Path] = field(default_factory=list)
    rollback_forms: list[Path] = field(default_factory=list)
    rollback_firmware: list[Path] = field(default_factory=list)

    has_forms: bool = False
    has_firmware: bool = False
    has_forms_rollback: bool = False
    has_firmware_rollback: bool = False

    # Output folders
    root_folder: Path | None = None
    install_folder: Path | None = None
    scripts_folder: Path | None = None
    verify_folder: Path | None = None
    rollback_folder: Path | None = None
    final_install_forms_folder: Path | None = None
    final_install_firmware_folder: Path | None = None
    final_rollback_forms_folder: Path | None = None
    final_rollback_firmware_folder: Path | None = None

    @property
    def has_rollback(self) -> bool:
        """True if the package carries rollback forms or firmware."""
        return self.has_forms_rollback or self.has_firmware_rollback

    @property
    def install_content(self) -> ContentKind:
        """Content category of the install side.

        Raises:
            NoContentError: If there are neither install forms nor firmware.
        """
        return classify_content(self.has_forms, self.has_firmware)

    @property
    def rollback_content(self) -> ContentKind:
        """Content category of the rollback side.

        Raises:
            NoContentError: If there are neither rollback forms nor firmware.
        """
        return classify_content(self.has_forms_rollback, self.has_firmware_rollback)

    @property
    def manifest_name(self) -> str:
        """File name of the content manifest."""
        return f"{self.package_name}.manifest.json"

    def apply_input(self, package_input: PackageInputSchema) -> None:
        """Copy validated input file fields onto the context."""
        self.package_name = package_input.package_name
        self.date = package_input.date
        self.business_item = package_input.business_item
        self.prerequisites = list(package_input.prerequisites)
        self.package_description = package_input.package_description


__all__ = ["PackageContext"]
