"""Tests for package/content.py module."""

from pathlib import Path

import pytest

from rso_packager.package.content import (
    NoContentError,
    classify_content,
    content_files,
    content_noun,
    format_file_list,
)
from rso_packager.types import ContentKind

FORMS = [Path("/x/Forms/a.frm"), Path("/x/Forms/b.frm")]
FIRMWARE = [Path("/x/Firmware/fw.bin")]


class TestClassifyContent:
    """Tests for classify_content function."""

    def test_both(self):
        assert classify_content(True, True) is ContentKind.BOTH

    def test_forms_only(self):
        assert classify_content(True, False) is ContentKind.FORMS_ONLY

    def test_firmware_only(self):
        assert classify_content(False, True) is ContentKind.FIRMWARE_ONLY

    def test_neither_raises(self):
        """The empty case is an explicit error, not a silent no-op."""
        with pytest.raises(NoContentError) as exc_info:
            classify_content(False, False)
        assert exc_info.value.code == "no_content"


class TestContentNoun:
    """Tests for content_noun function."""

    def test_single_form(self):
        assert content_noun(ContentKind.FORMS_ONLY, FORMS[:1], []) == "form"

    def test_multiple_forms(self):
        assert content_noun(ContentKind.FORMS_ONLY, FORMS, []) == "forms"

    def test_single_firmware(self):
        assert content_noun(ContentKind.FIRMWARE_ONLY, [], FIRMWARE) == "file"

    def test_multiple_firmware(self):
        firmware = FIRMWARE + [Path("/x/Firmware/fw2.bin")]
        assert content_noun(ContentKind.FIRMWARE_ONLY, [], firmware) == "files"

    def test_both_is_files(self):
        assert content_noun(ContentKind.BOTH, FORMS[:1], FIRMWARE) == "files"


class TestContentFiles:
    """Tests for content_files function."""

    def test_both_lists_forms_then_firmware(self):
        assert content_files(ContentKind.BOTH, FORMS, FIRMWARE) == FORMS + FIRMWARE

    def test_forms_only(self):
        assert content_files(ContentKind.FORMS_ONLY, FORMS, FIRMWARE) == FORMS

    def test_firmware_only(self):
        assert content_files(ContentKind.FIRMWARE_ONLY, FORMS, FIRMWARE) == FIRMWARE


class TestFormatFileList:
    """Tests for format_file_list function."""

    def test_empty(self):
        assert format_file_list([]) == ""

    def test_single(self):
        assert format_file_list([Path("/x/a.frm")]) == "`a.frm`"

    def test_two(self):
        assert format_file_list(FORMS) == "`a.frm` and `b.frm`"

    def test_three_uses_base_names(self):
        result = format_file_list(FORMS + FIRMWARE)
        assert result == "`a.frm`, `b.frm`, and `fw.bin`"
