"""Package creation service.

This module provides the high-level API for building an RSO package:
validating the work directory, reading the input file, staging content,
generating the package documents and scripts, writing the manifest and
cleaning up the staging folders.

Control flow is strictly linear. Fatal problems raise before anything
is written under the package root; only the manifest step may fail
without aborting the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rso_packager.inputs.io import INPUT_SUFFIX, load_package_input
from rso_packager.package import layout, templates
from rso_packager.package.context import PackageContext
from rso_packager.package.manifest import write_package_manifest
from rso_packager.types import PackageResult

if TYPE_CHECKING:
    from rso_packager.config import Settings

logger = logging.getLogger(__name__)


class PackageValidationError(Exception):
    """Raised when the input file or staging folders are not usable."""

    def __init__(self, problems: list[str], code: str = "validation_error") -> None:
        self.problems = problems
        self.code = code
        super().__init__(
            "The input file or input folders were not in a valid state: "
            + "; ".join(problems)
        )


def validate_environment(input_file: Path, ctx: PackageContext) -> list[str]:
    """Check the input file and staging folders.

    Args:
        input_file: Path to the JSON input file.
        ctx: Context with the staging folders recorded.

    Returns:
        A list of problems; empty if everything is in order.
    """
    problems: list[str] = []

    if not input_file.is_file():
        problems.append(f"Input file not found: {input_file}")
    elif input_file.suffix != INPUT_SUFFIX:
        problems.append(
            f"Input file must have a {INPUT_SUFFIX} extension: {input_file.name}"
        )

    folders = {
        layout.INSTALL_FORMS: ctx.input_install_forms,
        layout.INSTALL_FIRMWARE: ctx.input_install_firmware,
        layout.ROLLBACK_FORMS: ctx.input_rollback_forms,
        layout.ROLLBACK_FIRMWARE: ctx.input_rollback_firmware,
    }
    missing = [name for name, path in folders.items() if path is None or not path.is_dir()]
    for name in missing:
        problems.append(f"Input folder missing: {name}")

    install_names = (layout.INSTALL_FORMS, layout.INSTALL_FIRMWARE)
    if not any(name in missing for name in install_names):
        if not any(layout.has_files(folders[name]) for name in install_names):
            problems.append(
                f"Both {layout.INSTALL_FORMS} and {layout.INSTALL_FIRMWARE} are empty; "
                "at least one must contain files"
            )

    return problems


def build_package_files(ctx: PackageContext, device: templates.TargetDevice) -> list[Path]:
    """Create and populate the root, verify, scripts and install files.

    Returns:
        The files that were written (already populated files are skipped).
    """
    if (
        ctx.root_folder is None
        or ctx.verify_folder is None
        or ctx.scripts_folder is None
        or ctx.install_folder is None
    ):
        raise layout.LayoutError(
            "Package folders have not been created", code="no_package_folders"
        )

    root_readme = layout.create_file(ctx.root_folder, "readme.md")
    changelog = layout.create_file(ctx.root_folder, "changelog.txt")
    verify_readme = layout.create_file(ctx.verify_folder, "readme.md")
    touch_script = layout.create_file(ctx.scripts_folder, "touch.cmd")
    install_readme = layout.create_file(ctx.install_folder, "readme.md")
    install_script = layout.create_file(ctx.install_folder, "install.cmd")

    written: list[Path] = []
    if templates.build_root_readme(ctx, root_readme):
        written.append(root_readme)
    if templates.build_changelog(ctx, changelog):
        written.append(changelog)
    if templates.build_verify_readme(ctx, device, verify_readme):
        written.append(verify_readme)
    if templates.build_touch_script(touch_script):
        written.append(touch_script)
    if templates.build_install_readme(ctx, device, install_readme):
        written.append(install_readme)
    if templates.build_install_script(ctx, device, install_script):
        written.append(install_script)
    return written


def build_rollback_files(
    ctx: PackageContext, device: templates.TargetDevice
) -> list[Path]:
    """Stage rollback content and populate the rollback readme and script."""
    layout.stage_rollback_content(ctx)
    if ctx.rollback_folder is None:
        raise layout.LayoutError(
            "Rollback folder has not been created", code="no_rollback_folder"
        )

    rollback_readme = layout.create_file(ctx.rollback_folder, "readme.md")
    rollback_script = layout.create_file(ctx.rollback_folder, "rollback.cmd")

    written: list[Path] = []
    if templates.build_rollback_readme(ctx, device, rollback_readme):
        written.append(rollback_readme)
    if templates.build_rollback_script(ctx, device, rollback_script):
        written.append(rollback_script)
    return written


def create_package(input_file: Path, settings: Settings) -> PackageResult:
    """Build an RSO package from input_file and the staging folders.

    Args:
        input_file: Path to the JSON input file.
        settings: Effective settings (work_dir, device strings, manifest command).

    Returns:
        PackageResult describing the package.

    Raises:
        PackageValidationError: If the input file or staging folders are invalid.
        InputFileError: If the input file cannot be read or fails validation.
        LayoutError: If a folder or file operation fails.
    """
    work_dir = settings.work_dir
    ctx = PackageContext()

    layout.ensure_input_folders(ctx, work_dir)

    problems = validate_environment(input_file, ctx)
    if problems:
        for problem in problems:
            logger.error(problem)
        raise PackageValidationError(problems)

    ctx.apply_input(load_package_input(input_file))
    layout.set_content_flags(ctx)
    content = ctx.install_content

    layout.create_package_folders(ctx, work_dir)
    layout.stage_install_content(ctx)

    device = templates.TargetDevice.from_settings(settings)
    written = build_package_files(ctx, device)

    if ctx.has_rollback:
        written += build_rollback_files(ctx, device)

    manifest_path = write_package_manifest(
        ctx,
        command=settings.manifest_command,
        timeout=settings.manifest_timeout,
    )
    layout.clean_input_folders(ctx)

    if ctx.root_folder is None:
        raise layout.LayoutError(
            "Package root has not been created", code="no_root_folder"
        )
    logger.info("Package %s created at %s", ctx.package_name, ctx.root_folder)
    return PackageResult(
        package_name=ctx.package_name,
        root_folder=ctx.root_folder,
        content=content,
        has_rollback=ctx.has_rollback,
        manifest_path=manifest_path,
        written_files=written,
    )


__all__ = [
    "PackageValidationError",
    "build_package_files",
    "build_rollback_files",
    "create_package",
    "validate_environment",
]
