"""Filesystem steps for building a package tree.

This module handles:
- Creating the staging folders and the package output folders
- Capturing staged content and moving it into the package tree
- Exclusive create-or-skip creation of the generated files
- Removing leftover staging folders at the end of a run
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from rso_packager.package.context import PackageContext

logger = logging.getLogger(__name__)

INSTALL_FORMS = "install-forms"
INSTALL_FIRMWARE = "install-firmware"
ROLLBACK_FORMS = "rollback-forms"
ROLLBACK_FIRMWARE = "rollback-firmware"

INPUT_FOLDER_NAMES = (INSTALL_FORMS, INSTALL_FIRMWARE, ROLLBACK_FORMS, ROLLBACK_FIRMWARE)

FORMS_FOLDER = "Forms"
FIRMWARE_FOLDER = "Firmware"


class LayoutError(Exception):
    """Raised when a package folder operation fails."""

    def __init__(self, message: str, code: str = "layout_error") -> None:
        super().__init__(message)
        self.code = code


def ensure_folder(parent: Path, name: str) -> Path:
    """Create parent/name if it does not exist yet.

    Returns:
        Path to the folder.

    Raises:
        LayoutError: If the folder cannot be created.
    """
    folder = parent / name
    logger.info("Creating the %s folder at %s", name, parent)
    if folder.is_dir():
        logger.info("The %s folder already exists", folder)
        return folder
    try:
        folder.mkdir(parents=True)
    except OSError as e:
        raise LayoutError(
            f"Failed to create folder {folder}: {e}", code="folder_create_error"
        ) from e
    logger.info("Folder created successfully")
    return folder


def ensure_input_folders(ctx: PackageContext, work_dir: Path) -> None:
    """Create the four staging folders in work_dir and record them on ctx."""
    ctx.input_install_forms = ensure_folder(work_dir, INSTALL_FORMS)
    ctx.input_install_firmware = ensure_folder(work_dir, INSTALL_FIRMWARE)
    ctx.input_rollback_forms = ensure_folder(work_dir, ROLLBACK_FORMS)
    ctx.input_rollback_firmware = ensure_folder(work_dir, ROLLBACK_FIRMWARE)


def input_folders(ctx: PackageContext) -> list[Path]:
    """Return the staging folders recorded on ctx, in a fixed order."""
    return [
        p
        for p in (
            ctx.input_install_forms,
            ctx.input_install_firmware,
            ctx.input_rollback_forms,
            ctx.input_rollback_firmware,
        )
        if p is not None
    ]


def is_directory_empty(path: Path) -> bool:
    """True if path has no entries at all."""
    try:
        return not any(path.iterdir())
    except OSError as e:
        raise LayoutError(
            f"Failed to read folder {path}: {e}", code="folder_read_error"
        ) from e


def list_folder_files(folder: Path) -> list[Path]:
    """List regular files directly inside folder, sorted by name."""
    logger.info("Getting files from the %s folder", folder)
    try:
        files = sorted(p for p in folder.iterdir() if p.is_file())
    except OSError as e:
        raise LayoutError(
            f"Failed to read folder {folder}: {e}", code="folder_read_error"
        ) from e
    logger.debug("Found %d file(s) in %s", len(files), folder)
    return files


def has_files(folder: Path | None) -> bool:
    """True if folder exists and directly holds at least one regular file."""
    return folder is not None and folder.is_dir() and bool(list_folder_files(folder))


def set_content_flags(ctx: PackageContext) -> None:
    """Capture the staged file lists and derive the has_* flags from them.

    Subfolders are not content; a staging folder holding only folders
    counts as empty.
    """
    ctx.install_forms = _staged_files(ctx.input_install_forms)
    ctx.install_firmware = _staged_files(ctx.input_install_firmware)
    ctx.rollback_forms = _staged_files(ctx.input_rollback_forms)
    ctx.rollback_firmware = _staged_files(ctx.input_rollback_firmware)

    ctx.has_forms = bool(ctx.install_forms)
    ctx.has_firmware = bool(ctx.install_firmware)
    ctx.has_forms_rollback = bool(ctx.rollback_forms)
    ctx.has_firmware_rollback = bool(ctx.rollback_firmware)


def _staged_files(folder: Path | None) -> list[Path]:
    if folder is None or not folder.is_dir():
        return []
    return list_folder_files(folder)


def create_file(folder: Path, name: str) -> Path:
    """Create an empty file in folder unless it already exists.

    Generated documents are only written into empty files, so an existing
    populated file is left untouched by later steps.

    Returns:
        Path to the file.
    """
    path = folder / name
    logger.info("Creating the %s file in the %s folder", name, folder)
    try:
        with path.open("x", encoding="utf-8"):
            pass
    except FileExistsError:
        logger.info("%s already exists as a file", name)
        return path
    except OSError as e:
        raise LayoutError(
            f"Failed to create file {path}: {e}", code="file_create_error"
        ) from e
    logger.info("%s file created successfully", name)
    return path


def move_folder(source: Path, dest: Path) -> Path:
    """Move a staging folder into the package tree.

    Raises:
        LayoutError: If dest already exists or the move fails.
    """
    if dest.exists():
        raise LayoutError(
            f"Destination already exists: {dest}", code="destination_exists"
        )
    try:
        shutil.move(str(source), str(dest))
    except OSError as e:
        raise LayoutError(
            f"Failed to move {source} -> {dest}: {e}", code="folder_move_error"
        ) from e
    logger.info("Moved %s to %s", source, dest)
    return dest


def create_package_folders(ctx: PackageContext, work_dir: Path) -> None:
    """Create the package root and its install/scripts/verify folders."""
    ctx.root_folder = ensure_folder(work_dir, ctx.package_name)
    ctx.install_folder = ensure_folder(ctx.root_folder, "install")
    ctx.scripts_folder = ensure_folder(ctx.root_folder, "scripts")
    ctx.verify_folder = ensure_folder(ctx.root_folder, "verify")


def stage_install_content(ctx: PackageContext) -> None:
    """Move captured install content under install/."""
    if ctx.install_folder is None:
        raise LayoutError("Install folder has not been created", code="no_install_folder")

    if ctx.has_forms and ctx.input_install_forms is not None:
        ctx.final_install_forms_folder = move_folder(
            ctx.input_install_forms, ctx.install_folder / FORMS_FOLDER
        )

    if ctx.has_firmware and ctx.input_install_firmware is not None:
        ctx.final_install_firmware_folder = move_folder(
            ctx.input_install_firmware, ctx.install_folder / FIRMWARE_FOLDER
        )


def stage_rollback_content(ctx: PackageContext) -> None:
    """Create rollback/ and move captured rollback content under it."""
    if ctx.root_folder is None:
        raise LayoutError("Package root has not been created", code="no_root_folder")

    ctx.rollback_folder = ensure_folder(ctx.root_folder, "rollback")

    if ctx.has_forms_rollback and ctx.input_rollback_forms is not None:
        ctx.final_rollback_forms_folder = move_folder(
            ctx.input_rollback_forms, ctx.rollback_folder / FORMS_FOLDER
        )

    if ctx.has_firmware_rollback and ctx.input_rollback_firmware is not None:
        ctx.final_rollback_firmware_folder = move_folder(
            ctx.input_rollback_firmware, ctx.rollback_folder / FIRMWARE_FOLDER
        )


def clean_input_folders(ctx: PackageContext) -> list[Path]:
    """Remove staging folders that are still present and empty.

    Returns:
        The folders that were removed.

    Raises:
        LayoutError: If an empty staging folder cannot be removed.
    """
    removed: list[Path] = []
    for folder in input_folders(ctx):
        if not folder.is_dir():
            continue
        if not is_directory_empty(folder):
            logger.warning("Staging folder is not empty, leaving it in place: %s", folder)
            continue
        try:
            folder.rmdir()
        except OSError as e:
            raise LayoutError(
                f"Failed to remove staging folder {folder}: {e}",
                code="folder_remove_error",
            ) from e
        removed.append(folder)
        logger.info("Removed staging folder %s", folder)
    return removed


__all__ = [
    "FIRMWARE_FOLDER",
    "FORMS_FOLDER",
    "INPUT_FOLDER_NAMES",
    "INSTALL_FIRMWARE",
    "INSTALL_FORMS",
    "ROLLBACK_FIRMWARE",
    "ROLLBACK_FORMS",
    "LayoutError",
    "clean_input_folders",
    "create_file",
    "create_package_folders",
    "ensure_folder",
    "ensure_input_folders",
    "has_files",
    "input_folders",
    "is_directory_empty",
    "list_folder_files",
    "move_folder",
    "set_content_flags",
    "stage_install_content",
    "stage_rollback_content",
]
