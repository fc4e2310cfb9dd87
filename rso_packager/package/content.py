"""Content-category branching and wording helpers.

Every generated document that depends on what a package carries
(forms, firmware or both) selects its wording through ContentKind.
The "neither" case is an error rather than a silent no-op.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from rso_packager.types import ContentKind


class NoContentError(Exception):
    """Raised when a package side has neither forms nor firmware."""

    def __init__(
        self,
        message: str = "Package has neither forms nor firmware",
        code: str = "no_content",
    ) -> None:
        super().__init__(message)
        self.code = code


def classify_content(has_forms: bool, has_firmware: bool) -> ContentKind:
    """Map content flags onto a ContentKind.

    Args:
        has_forms: Whether forms are present.
        has_firmware: Whether firmware files are present.

    Returns:
        The matching ContentKind.

    Raises:
        NoContentError: If neither flag is set.
    """
    if has_forms and has_firmware:
        return ContentKind.BOTH
    if has_forms:
        return ContentKind.FORMS_ONLY
    if has_firmware:
        return ContentKind.FIRMWARE_ONLY
    raise NoContentError()


def content_noun(
    kind: ContentKind,
    forms: Sequence[Path],
    firmware: Sequence[Path],
) -> str:
    """Pick the noun used for the content in prose.

    Mixed content is always "files"; forms use "form"/"forms" and
    firmware "file"/"files" depending on the count.
    """
    if kind is ContentKind.BOTH:
        return "files"
    if kind is ContentKind.FORMS_ONLY:
        return "form" if len(forms) == 1 else "forms"
    if kind is ContentKind.FIRMWARE_ONLY:
        return "file" if len(firmware) == 1 else "files"
    raise ValueError(f"Unknown content kind: {kind!r}")


def content_files(
    kind: ContentKind,
    forms: Sequence[Path],
    firmware: Sequence[Path],
) -> list[Path]:
    """Return the files a document describes for the given kind."""
    if kind is ContentKind.BOTH:
        return [*forms, *firmware]
    if kind is ContentKind.FORMS_ONLY:
        return list(forms)
    if kind is ContentKind.FIRMWARE_ONLY:
        return list(firmware)
    raise ValueError(f"Unknown content kind: {kind!r}")


def format_file_list(paths: Sequence[Path]) -> str:
    """Render file base names as an English list of back-quoted names.

    Examples:
        [a] -> `a`
        [a, b] -> `a` and `b`
        [a, b, c] -> `a`, `b`, and `c`
    """
    names = [f"`{Path(p).name}`" for p in paths]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return ", ".join(names[:-1]) + f", and {names[-1]}"


__all__ = [
    "NoContentError",
    "classify_content",
    "content_files",
    "content_noun",
    "format_file_list",
]
