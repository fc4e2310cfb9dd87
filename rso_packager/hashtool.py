"""Standalone file-hash manifest command.

Run as ``python -m rso_packager.hashtool TARGET --recurse`` to print a
JSON document listing a hash for every file under TARGET. This is the
default external command used by the package manifest step.
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Any, Literal

import typer

HASH_CHUNK_SIZE = 64 * 1024  # 64KB

Algorithm = Literal["md5", "sha1", "sha256"]
SUPPORTED_ALGORITHMS = ("md5", "sha1", "sha256")

app = typer.Typer(
    name="rso-hashtool",
    help="Print a JSON hash manifest of the files under a folder",
    add_completion=False,
)


def compute_file_hash(
    file_path: Path,
    algorithm: str = "md5",
    chunk_size: int = HASH_CHUNK_SIZE,
) -> str:
    """Compute the hex digest of a file.

    Args:
        file_path: Path to the file.
        algorithm: Hash algorithm (md5, sha1, sha256).
        chunk_size: Size of chunks for streaming hash.

    Returns:
        Hex digest.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    digest = hashlib.new(algorithm)
    with file_path.open("rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()


def iter_target_files(target: Path, recurse: bool = False) -> list[Path]:
    """List files under target (or target itself if it is a file)."""
    if target.is_file():
        return [target]
    pattern = target.rglob("*") if recurse else target.glob("*")
    return sorted(p for p in pattern if p.is_file())


def build_hash_manifest(
    target: Path,
    recurse: bool = False,
    algorithm: str = "md5",
) -> dict[str, Any]:
    """Build the manifest dictionary for target.

    File paths are relative to target and use forward slashes.
    """
    base = target if target.is_dir() else target.parent
    files: list[dict[str, Any]] = []
    for path in iter_target_files(target, recurse=recurse):
        files.append(
            {
                "path": path.relative_to(base).as_posix(),
                "size_bytes": path.stat().st_size,
                "hash": compute_file_hash(path, algorithm),
            }
        )

    return {
        "target": str(target),
        "algorithm": algorithm,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "files": files,
    }


@app.command()
def main(
    target: Annotated[Path, typer.Argument(help="File or folder to hash")],
    recurse: Annotated[
        bool,
        typer.Option("--recurse", "-r", help="Include files in subfolders"),
    ] = False,
    algorithm: Annotated[
        str,
        typer.Option("--algorithm", "-a", help="Hash algorithm (md5, sha1, sha256)"),
    ] = "md5",
) -> None:
    """Print a JSON hash manifest of TARGET."""
    if algorithm not in SUPPORTED_ALGORITHMS:
        typer.echo(f"Unsupported hash algorithm: {algorithm}", err=True)
        raise typer.Exit(code=2)
    if not target.exists():
        typer.echo(f"Target not found: {target}", err=True)
        raise typer.Exit(code=1)

    manifest = build_hash_manifest(target, recurse=recurse, algorithm=algorithm)
    typer.echo(json.dumps(manifest, indent=2))


__all__ = [
    "HASH_CHUNK_SIZE",
    "SUPPORTED_ALGORITHMS",
    "app",
    "build_hash_manifest",
    "compute_file_hash",
    "iter_target_files",
]


if __name__ == "__main__":
    app()
