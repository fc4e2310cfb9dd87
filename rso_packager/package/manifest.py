"""Content manifest generation.

The manifest step runs an external hashing command over the package
root and writes its output verbatim to ``<PackageName>.manifest.json``.
A failure here is recoverable: the package is still usable without a
manifest, so errors are logged and reported, never raised to the caller
of write_package_manifest.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from pathlib import Path

from rso_packager.package.context import PackageContext

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_TIMEOUT = 300


class ManifestError(Exception):
    """Raised when the manifest command fails."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        code: str = "manifest_error",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.code = code


def default_manifest_command() -> list[str]:
    """Return the bundled hashing command (the target is appended later)."""
    return [sys.executable, "-m", "rso_packager.hashtool", "--recurse"]


def run_manifest_command(
    root: Path,
    command: list[str] | None = None,
    timeout: int = DEFAULT_MANIFEST_TIMEOUT,
) -> str:
    """Run the hashing command against root and return its stdout.

    Args:
        root: Package root folder, appended as the last argument.
        command: Command prefix; defaults to the bundled hashtool.
        timeout: Timeout in seconds.

    Returns:
        The command's standard output.

    Raises:
        ManifestError: If the command cannot run, times out, exits non-zero
            or produces no output.
    """
    cmd = [*(command or default_manifest_command()), str(root)]
    cmd_str = shlex.join(cmd)
    logger.info("Executing manifest command: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise ManifestError(
            f"Manifest command timed out after {timeout} seconds",
            exit_code=-1,
            code="manifest_timeout",
        ) from e
    except OSError as e:
        raise ManifestError(
            f"Failed to execute manifest command: {e}",
            code="execution_error",
        ) from e

    if result.returncode != 0:
        raise ManifestError(
            f"Manifest command failed with exit code {result.returncode}: "
            f"{result.stderr.strip()}",
            exit_code=result.returncode,
            code="manifest_command_failed",
        )
    if not result.stdout.strip():
        raise ManifestError(
            "Manifest command produced no output",
            exit_code=result.returncode,
            code="manifest_empty",
        )
    return result.stdout


def write_package_manifest(
    ctx: PackageContext,
    command: list[str] | None = None,
    timeout: int = DEFAULT_MANIFEST_TIMEOUT,
) -> Path | None:
    """Generate the package manifest file.

    Args:
        ctx: Package context with root_folder set.
        command: Optional hashing command prefix.
        timeout: Timeout in seconds.

    Returns:
        Path to the manifest, or None if it could not be generated.
    """
    if ctx.root_folder is None:
        logger.warning("Package root is not set; skipping manifest")
        return None

    logger.info(
        "Beginning execution of manifest command for the %s package", ctx.package_name
    )
    try:
        output = run_manifest_command(ctx.root_folder, command, timeout=timeout)
    except ManifestError as e:
        logger.warning("Failed to create a manifest file for the package: %s", e)
        return None

    manifest_path = ctx.root_folder / ctx.manifest_name
    try:
        with manifest_path.open("w", encoding="utf-8") as f:
            f.write(output)
    except OSError as e:
        logger.warning("Failed to write manifest file %s: %s", manifest_path, e)
        return None

    logger.info("Manifest file created successfully: %s", manifest_path)
    return manifest_path


__all__ = [
    "DEFAULT_MANIFEST_TIMEOUT",
    "ManifestError",
    "default_manifest_command",
    "run_manifest_command",
    "write_package_manifest",
]
