"""Package document renderers and emitters.

Renderers are pure functions from a PackageContext to document text.
Emitters write that text to a target file, but only while the file is
still empty, so re-running generation never overwrites a populated file.

Batch scripts (.cmd) are written with CRLF line endings, markdown and
text documents with LF.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rso_packager.package.content import (
    content_files,
    content_noun,
    format_file_list,
)
from rso_packager.package.context import PackageContext
from rso_packager.package.layout import LayoutError
from rso_packager.types import ContentKind

if TYPE_CHECKING:
    from rso_packager.config import Settings

logger = logging.getLogger(__name__)

SCRIPT_NEWLINE = "\r\n"
TEXT_NEWLINE = "\n"

BANNER = ":" * 85

TOUCH_SCRIPT = """\
@Echo Off
setLocal
:::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::
:: touch.cmd FILE
:: Update the last-modified timestamp of FILE without changing its contents
:::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::::
if "%~1"=="" (
    1>&2 echo:usage: %~nx0 FILE
    exit /b 1
)
if not exist "%~1" (
    1>&2 echo:ERROR: %~1 not found
    exit /b 1
)
pushd "%~dp1" || exit /b 1
copy /b "%~nx1"+,, "%~nx1" >nul
set "ERRLEV=%ERRORLEVEL%"
popd
exit /b %ERRLEV%
"""


@dataclass(frozen=True)
class TargetDevice:
    """Device-specific strings used in the generated documents."""

    data_dir: str = "C:\\NCRDiagnostics\\DeviceData\\iSC350"
    name: str = "Ingenico iSC350 CDU"
    utility: str = "NCRDiag"

    @property
    def forms_dir(self) -> str:
        return f"{self.data_dir}\\Forms"

    @property
    def firmware_dir(self) -> str:
        return f"{self.data_dir}\\Firmware"

    @property
    def config_log(self) -> str:
        return f"{self.data_dir}\\config.log"

    @classmethod
    def from_settings(cls, settings: Settings) -> TargetDevice:
        return cls(
            data_dir=settings.device_data_dir,
            name=settings.device_name,
            utility=settings.diag_utility,
        )


def write_if_empty(path: Path, text: str, newline: str = TEXT_NEWLINE) -> bool:
    """Write text to path only if the file is missing or empty.

    Args:
        path: Target file.
        text: Document text with LF line endings.
        newline: Line ending written to disk.

    Returns:
        True if the file was written, False if it was skipped.

    Raises:
        LayoutError: If the file cannot be inspected or written.
    """
    try:
        if path.exists() and path.stat().st_size > 0:
            logger.debug("Skipping %s: file already has content", path)
            return False
        with path.open("w", encoding="utf-8", newline=newline) as f:
            f.write(text)
    except OSError as e:
        raise LayoutError(
            f"Failed to write file {path}: {e}", code="file_write_error"
        ) from e
    return True


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def render_changelog(ctx: PackageContext) -> str:
    """Render changelog.txt."""
    return "\n".join(
        [
            f"RSO Package: {ctx.package_name}",
            "",
            f"{ctx.date} v1",
            " - initial version",
            "",
        ]
    )


def render_root_readme(ctx: PackageContext) -> str:
    """Render the package root readme.md."""
    lines = [
        f"# ReadMe - About {ctx.package_name.lstrip()}",
        "",
        ctx.package_description.lstrip(),
        "",
        f"* Business Item: {ctx.business_item.lstrip()}",
    ]
    if ctx.has_rollback:
        lines += ["", "Rollback instructions are provided in the `rollback` folder."]
    return "\n".join(lines) + "\n"


def _process_steps(
    kind: ContentKind,
    noun: str,
    device: TargetDevice,
    log_text: str,
) -> list[str]:
    """Numbered steps shared by the install and rollback readme files."""
    touch = f"Update the timestamp (touch) on the {noun} included in the `Forms` folder"
    copy_forms = (
        f"Copy the contents of the included `Forms` folder into `{device.forms_dir}`"
    )
    copy_firmware = (
        "Copy the contents of the included `Firmware` folder into "
        f"`{device.firmware_dir}`"
    )

    steps = ["Kill desktop shell & desktop"]
    if kind is ContentKind.BOTH:
        steps += [touch, copy_forms, copy_firmware]
    elif kind is ContentKind.FORMS_ONLY:
        steps += [touch, copy_forms]
    elif kind is ContentKind.FIRMWARE_ONLY:
        steps += [copy_firmware]
    else:
        raise ValueError(f"Unknown content kind: {kind!r}")
    steps += [
        f"Append text `[DATE TIME]RSO:{log_text}` to `{device.config_log}` "
        "(replacing DATE and TIME with actual date and time stamps)",
        "Reboot the machine",
    ]
    return [f"{n}. {step}" for n, step in enumerate(steps, start=1)]


def render_install_readme(ctx: PackageContext, device: TargetDevice) -> str:
    """Render install/readme.md."""
    kind = ctx.install_content
    noun = content_noun(kind, ctx.install_forms, ctx.install_firmware)
    files = content_files(kind, ctx.install_forms, ctx.install_firmware)

    lines = [
        f"# ReadMe - {ctx.package_name.lstrip()} Installation",
        "",
        "## Description",
        f"This process will stage the {format_file_list(files)} {noun} for "
        f"installation to the {device.name} via the {device.utility} utility",
        "",
        "## Pre-Requisites",
    ]
    if ctx.prerequisites:
        lines += [f"* {item}" for item in ctx.prerequisites]
    else:
        lines.append("* None")
    lines += ["", "## Installation Process"]
    lines += _process_steps(
        kind, noun, device, f"{ctx.package_name} package installed"
    )
    lines += [
        "",
        f"Upon booting, the machine will install the {noun} to the {device.name} "
        f"as part of the {device.utility} startup step.",
    ]
    return "\n".join(lines) + "\n"


def render_rollback_readme(ctx: PackageContext, device: TargetDevice) -> str:
    """Render rollback/readme.md from the rollback content."""
    kind = ctx.rollback_content
    noun = content_noun(kind, ctx.rollback_forms, ctx.rollback_firmware)
    files = content_files(kind, ctx.rollback_forms, ctx.rollback_firmware)

    lines = [
        f"# ReadMe - {ctx.package_name.lstrip()} Rollback",
        "",
        "## Description",
        f"This process will rollback the {format_file_list(files)} {noun} for "
        f"installation to the {device.name} via the {device.utility} utility",
        "",
        "## Rollback Process",
    ]
    lines += _process_steps(
        kind, noun, device, f"{ctx.package_name} package rollback applied"
    )
    lines += [
        "",
        f"Upon booting, the machine will install the previous version of the "
        f"{noun} to the {device.name} as part of the {device.utility} startup step.",
    ]
    return "\n".join(lines) + "\n"


def render_verify_readme(ctx: PackageContext, device: TargetDevice) -> str:
    """Render verify/readme.md."""
    kind = ctx.install_content
    manifest = f"`{ctx.manifest_name}`"
    if kind is ContentKind.BOTH:
        check = (
            "Ensure that the md5 hash of the files as they appear in "
            f"`{device.forms_dir}` and `{device.firmware_dir}` match the md5 "
            f"hashes listed in {manifest}"
        )
    elif kind is ContentKind.FORMS_ONLY:
        check = (
            "Ensure that the md5 hash of the forms as they appear in "
            f"`{device.forms_dir}` matches the md5 hashes listed in {manifest}"
        )
    elif kind is ContentKind.FIRMWARE_ONLY:
        check = (
            "Ensure that the md5 hash of the files as they appear in "
            f"`{device.firmware_dir}` matches the md5 hashes listed in {manifest}"
        )
    else:
        raise ValueError(f"Unknown content kind: {kind!r}")

    return "\n".join(
        [
            f"# ReadMe - {ctx.package_name.lstrip()} Verification",
            "",
            "To verify that files have been staged correctly:",
            "",
            check,
            "",
        ]
    )


def _render_script(
    ctx: PackageContext,
    device: TargetDevice,
    *,
    kind: ContentKind,
    purpose: str,
    forms: list[Path],
    log_text: str,
    reboot_comment: str,
) -> str:
    """Render the batch script shared by install.cmd and rollback.cmd."""
    has_forms = kind in (ContentKind.BOTH, ContentKind.FORMS_ONLY)
    has_firmware = kind in (ContentKind.BOTH, ContentKind.FIRMWARE_ONLY)
    lines = [
        "@Echo Off",
        "setLocal enableDelayedExpansion",
        BANNER,
        f":: example/test script for {purpose} of the {ctx.package_name} package",
        BANNER,
        'set "ERRLEV=0"',
        'set "SCRIPTHOME=%~dp0"',
        'set "SCRIPTNAME=%~nx0"',
    ]
    if has_forms:
        lines.append(f'set "FORMSDIR={device.forms_dir}"')
    if has_firmware:
        lines.append(f'set "FIRMWAREDIR={device.firmware_dir}"')

    copies: list[str] = []
    if has_forms:
        copies.append('xcopy /y "!SCRIPTHOME!Forms\\*" "!FORMSDIR!"')
    if has_firmware:
        copies.append('xcopy /y "!SCRIPTHOME!Firmware\\*" "!FIRMWAREDIR!"')
    copies.append("goto :UPDATE_TIMESTAMP")

    lines += [
        "",
        ":KILL_RSS",
        "echo:Killing desktopshell...",
        'taskkill /F /FI "IMAGENAME eq desktopshell.exe"',
        "",
        "echo:Killing desktop...",
        'taskkill /F /FI "IMAGENAME eq desktop.exe"',
        "",
        ":COPY_FILES",
        "echo:Copying files...",
        " && ".join(copies),
        "",
        ":: Handle filecopy failure",
        "set ERRLEV=1",
        "1>&2 echo:ERROR: failed to copy files",
        "goto :ERR",
        "",
        ":UPDATE_TIMESTAMP",
    ]
    if has_forms:
        for form in forms:
            name = Path(form).name
            lines += [
                f":: Update timestamp on {name}",
                f'call "!SCRIPTHOME!..\\scripts\\touch.cmd" "!FORMSDIR!\\{name}" '
                "|| goto :TOUCH_ERR",
            ]
    lines += [
        "",
        "goto :LOG_PACKAGE_INSTALL",
        "",
        ":TOUCH_ERR",
        "set ERRLEV=2",
        "1>&2 echo:ERROR: failed to update timestamp",
        "goto :ERR",
        "",
        ":LOG_PACKAGE_INSTALL",
        "echo:Logging config change...",
        "call :GET_DATESTAMP",
        f'echo:[!DATESTAMP! !TIME!]RSO:{log_text} >> "{device.config_log}"',
        "",
        ":REBOOT_TERMINAL",
        "echo:Scheduling reboot...",
        f'shutdown.exe -r -d p:4:1 -c "{reboot_comment}" -t 30',
        "",
        "goto :END",
        "",
        ":ERR",
        'if "!ERRLEV!"=="0" (',
        "    set ERRLEV=1",
        "    1>&2 echo:ERROR: !SCRIPTNAME! failed",
        ")",
        "goto :END",
        "",
        ":END",
        "exit /b %ERRLEV%",
        "",
        ":" * 79,
        ":GET_DATESTAMP",
        "call :PROCESS_DATE %DATE:/= %",
        "exit /b",
        "",
        ":PROCESS_DATE",
        'set "DATESTAMP=%4.%2.%3"',
        "exit /b",
    ]
    return "\n".join(lines) + "\n"


def render_install_script(ctx: PackageContext, device: TargetDevice) -> str:
    """Render install/install.cmd."""
    return _render_script(
        ctx,
        device,
        kind=ctx.install_content,
        purpose="installation",
        forms=ctx.install_forms,
        log_text=f"{ctx.package_name} package installed",
        reboot_comment=f"install {ctx.package_name} package",
    )


def render_rollback_script(ctx: PackageContext, device: TargetDevice) -> str:
    """Render rollback/rollback.cmd from the rollback content."""
    return _render_script(
        ctx,
        device,
        kind=ctx.rollback_content,
        purpose="rollback",
        forms=ctx.rollback_forms,
        log_text=f"{ctx.package_name} package rolled back",
        reboot_comment=f"rollback {ctx.package_name} package",
    )


# ---------------------------------------------------------------------------
# Emitters
# ---------------------------------------------------------------------------


def _emit(label: str, path: Path, text: str, newline: str = TEXT_NEWLINE) -> bool:
    logger.info("Building %s", label)
    written = write_if_empty(path, text, newline=newline)
    if written:
        logger.info("%s successfully built", label)
    return written


def build_changelog(ctx: PackageContext, path: Path) -> bool:
    return _emit("changelog.txt file", path, render_changelog(ctx))


def build_touch_script(path: Path) -> bool:
    return _emit("touch.cmd script", path, TOUCH_SCRIPT, newline=SCRIPT_NEWLINE)


def build_root_readme(ctx: PackageContext, path: Path) -> bool:
    return _emit("root readme.md file", path, render_root_readme(ctx))


def build_install_readme(ctx: PackageContext, device: TargetDevice, path: Path) -> bool:
    return _emit("install readme.md file", path, render_install_readme(ctx, device))


def build_install_script(ctx: PackageContext, device: TargetDevice, path: Path) -> bool:
    return _emit(
        "install.cmd script",
        path,
        render_install_script(ctx, device),
        newline=SCRIPT_NEWLINE,
    )


def build_rollback_readme(
    ctx: PackageContext, device: TargetDevice, path: Path
) -> bool:
    return _emit("rollback readme.md file", path, render_rollback_readme(ctx, device))


def build_rollback_script(
    ctx: PackageContext, device: TargetDevice, path: Path
) -> bool:
    return _emit(
        "rollback.cmd script",
        path,
        render_rollback_script(ctx, device),
        newline=SCRIPT_NEWLINE,
    )


def build_verify_readme(ctx: PackageContext, device: TargetDevice, path: Path) -> bool:
    return _emit("verify readme.md file", path, render_verify_readme(ctx, device))


__all__ = [
    "SCRIPT_NEWLINE",
    "TOUCH_SCRIPT",
    "TargetDevice",
    "build_changelog",
    "build_install_readme",
    "build_install_script",
    "build_rollback_readme",
    "build_rollback_script",
    "build_root_readme",
    "build_touch_script",
    "build_verify_readme",
    "render_changelog",
    "render_install_readme",
    "render_install_script",
    "render_rollback_readme",
    "render_rollback_script",
    "render_root_readme",
    "render_verify_readme",
    "write_if_empty",
]
