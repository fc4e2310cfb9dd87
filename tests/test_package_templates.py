"""Tests for package/templates.py module.

Tests document rendering per content category and the
write-only-if-empty emitter behaviour.
"""

from pathlib import Path

import pytest

from rso_packager.config import Settings
from rso_packager.package.content import NoContentError
from rso_packager.package.context import PackageContext
from rso_packager.package.layout import LayoutError
from rso_packager.package.templates import (
    TOUCH_SCRIPT,
    TargetDevice,
    build_changelog,
    build_install_script,
    build_touch_script,
    render_changelog,
    render_install_readme,
    render_install_script,
    render_rollback_readme,
    render_rollback_script,
    render_root_readme,
    render_verify_readme,
    write_if_empty,
)

DEVICE = TargetDevice()


def _ctx(
    forms: list[str] | None = None,
    firmware: list[str] | None = None,
    rollback_forms: list[str] | None = None,
    rollback_firmware: list[str] | None = None,
) -> PackageContext:
    ctx = PackageContext(
        package_name="Acme",
        date="2024-01-01",
        package_description="Acme forms update",
        business_item="BI-1",
        prerequisites=["Terminal online"],
    )
    ctx.install_forms = [Path("/pkg/install/Forms") / f for f in forms or []]
    ctx.install_firmware = [Path("/pkg/install/Firmware") / f for f in firmware or []]
    ctx.rollback_forms = [Path("/pkg/rollback/Forms") / f for f in rollback_forms or []]
    ctx.rollback_firmware = [
        Path("/pkg/rollback/Firmware") / f for f in rollback_firmware or []
    ]
    ctx.has_forms = bool(ctx.install_forms)
    ctx.has_firmware = bool(ctx.install_firmware)
    ctx.has_forms_rollback = bool(ctx.rollback_forms)
    ctx.has_firmware_rollback = bool(ctx.rollback_firmware)
    return ctx


class TestTargetDevice:
    """Tests for TargetDevice."""

    def test_default_paths(self):
        assert DEVICE.forms_dir == "C:\\NCRDiagnostics\\DeviceData\\iSC350\\Forms"
        assert DEVICE.firmware_dir == "C:\\NCRDiagnostics\\DeviceData\\iSC350\\Firmware"
        assert DEVICE.config_log == "C:\\NCRDiagnostics\\DeviceData\\iSC350\\config.log"

    def test_from_settings(self):
        settings = Settings(device_data_dir="D:\\Dev", device_name="X", diag_utility="Y")
        device = TargetDevice.from_settings(settings)
        assert device.forms_dir == "D:\\Dev\\Forms"
        assert device.name == "X"
        assert device.utility == "Y"


class TestRenderChangelog:
    """Tests for render_changelog."""

    def test_contents(self):
        text = render_changelog(_ctx(forms=["a.frm"]))
        assert text.splitlines() == [
            "RSO Package: Acme",
            "",
            "2024-01-01 v1",
            " - initial version",
        ]


class TestRenderRootReadme:
    """Tests for render_root_readme."""

    def test_without_rollback(self):
        text = render_root_readme(_ctx(forms=["a.frm"]))
        assert text.startswith("# ReadMe - About Acme\n")
        assert "Acme forms update" in text
        assert "* Business Item: BI-1" in text
        assert "rollback" not in text.lower()

    def test_with_rollback(self):
        text = render_root_readme(_ctx(forms=["a.frm"], rollback_forms=["a.frm"]))
        assert "Rollback instructions are provided in the `rollback` folder." in text


class TestRenderInstallReadme:
    """Tests for render_install_readme."""

    def test_single_form_uses_singular(self):
        text = render_install_readme(_ctx(forms=["a.frm"]), DEVICE)
        assert "stage the `a.frm` form for installation" in text
        assert "forms" not in text
        assert "install the form to the" in text

    def test_multiple_forms_use_plural(self):
        text = render_install_readme(_ctx(forms=["a.frm", "b.frm"]), DEVICE)
        assert "`a.frm` and `b.frm` forms" in text
        assert "touch) on the forms included" in text

    def test_single_firmware_uses_file(self):
        text = render_install_readme(_ctx(firmware=["fw.bin"]), DEVICE)
        assert "`fw.bin` file for installation" in text
        assert "Forms" not in text

    def test_forms_only_steps(self):
        text = render_install_readme(_ctx(forms=["a.frm"]), DEVICE)
        assert "1. Kill desktop shell & desktop" in text
        assert "2. Update the timestamp (touch) on the form" in text
        assert "3. Copy the contents of the included `Forms` folder" in text
        assert "4. Append text `[DATE TIME]RSO:Acme package installed`" in text
        assert "5. Reboot the machine" in text
        assert "`Firmware`" not in text

    def test_firmware_only_steps(self):
        text = render_install_readme(_ctx(firmware=["fw.bin"]), DEVICE)
        assert "2. Copy the contents of the included `Firmware` folder" in text
        assert "3. Append text" in text
        assert "4. Reboot the machine" in text
        assert "touch" not in text

    def test_both_steps(self):
        text = render_install_readme(_ctx(forms=["a.frm"], firmware=["fw.bin"]), DEVICE)
        assert "`a.frm` and `fw.bin` files" in text
        assert "2. Update the timestamp (touch) on the files" in text
        assert "3. Copy the contents of the included `Forms` folder" in text
        assert "4. Copy the contents of the included `Firmware` folder" in text
        assert "6. Reboot the machine" in text

    def test_prerequisites(self):
        text = render_install_readme(_ctx(forms=["a.frm"]), DEVICE)
        assert "## Pre-Requisites\n* Terminal online\n" in text

    def test_no_prerequisites(self):
        ctx = _ctx(forms=["a.frm"])
        ctx.prerequisites = []
        text = render_install_readme(ctx, DEVICE)
        assert "## Pre-Requisites\n* None\n" in text

    def test_no_content_raises(self):
        with pytest.raises(NoContentError):
            render_install_readme(_ctx(), DEVICE)


class TestRenderRollbackReadme:
    """Tests for render_rollback_readme."""

    def test_uses_rollback_content(self):
        """Wording follows the rollback content, not the install content."""
        ctx = _ctx(forms=["a.frm"], firmware=["fw.bin"], rollback_forms=["old.frm"])
        text = render_rollback_readme(ctx, DEVICE)
        assert text.startswith("# ReadMe - Acme Rollback\n")
        assert "This process will rollback the `old.frm` form for" in text
        assert "`Firmware`" not in text
        assert "RSO:Acme package rollback applied" in text
        assert "previous version of the form" in text

    def test_no_rollback_raises(self):
        with pytest.raises(NoContentError):
            render_rollback_readme(_ctx(forms=["a.frm"]), DEVICE)


class TestRenderVerifyReadme:
    """Tests for render_verify_readme."""

    def test_forms_only(self):
        text = render_verify_readme(_ctx(forms=["a.frm"]), DEVICE)
        assert "md5 hash of the forms" in text
        assert "`Acme.manifest.json`" in text
        assert "Firmware" not in text

    def test_firmware_only(self):
        text = render_verify_readme(_ctx(firmware=["fw.bin"]), DEVICE)
        assert "md5 hash of the files" in text
        assert "iSC350\\Firmware" in text
        assert "iSC350\\Forms" not in text

    def test_both(self):
        text = render_verify_readme(_ctx(forms=["a.frm"], firmware=["fw.bin"]), DEVICE)
        assert "iSC350\\Forms` and `" in text
        assert "iSC350\\Firmware" in text


class TestRenderInstallScript:
    """Tests for render_install_script."""

    def test_both_copies_and_touches(self):
        text = render_install_script(
            _ctx(forms=["a.frm", "b.frm"], firmware=["fw.bin"]), DEVICE
        )
        assert 'set "FORMSDIR=C:\\NCRDiagnostics\\DeviceData\\iSC350\\Forms"' in text
        assert 'set "FIRMWAREDIR=C:\\NCRDiagnostics\\DeviceData\\iSC350\\Firmware"' in text
        assert (
            'xcopy /y "!SCRIPTHOME!Forms\\*" "!FORMSDIR!" && '
            'xcopy /y "!SCRIPTHOME!Firmware\\*" "!FIRMWAREDIR!" && '
            "goto :UPDATE_TIMESTAMP"
        ) in text
        assert ":: Update timestamp on a.frm" in text
        assert '"!FORMSDIR!\\b.frm" || goto :TOUCH_ERR' in text
        assert "RSO:Acme package installed" in text
        assert 'shutdown.exe -r -d p:4:1 -c "install Acme package" -t 30' in text

    def test_firmware_only_has_no_forms_steps(self):
        text = render_install_script(_ctx(firmware=["fw.bin"]), DEVICE)
        assert "FORMSDIR" not in text
        assert "touch.cmd" not in text
        assert (
            'xcopy /y "!SCRIPTHOME!Firmware\\*" "!FIRMWAREDIR!" && goto :UPDATE_TIMESTAMP'
        ) in text
        # The goto target still exists
        assert ":UPDATE_TIMESTAMP\n" in text

    def test_forms_only(self):
        text = render_install_script(_ctx(forms=["a.frm"]), DEVICE)
        assert "FIRMWAREDIR" not in text
        assert ":: Update timestamp on a.frm" in text

    def test_header(self):
        text = render_install_script(_ctx(forms=["a.frm"]), DEVICE)
        lines = text.splitlines()
        assert lines[0] == "@Echo Off"
        assert lines[1] == "setLocal enableDelayedExpansion"
        assert ":: example/test script for installation of the Acme package" in lines


class TestRenderRollbackScript:
    """Tests for render_rollback_script."""

    def test_uses_rollback_forms(self):
        ctx = _ctx(forms=["new.frm"], rollback_forms=["old.frm"])
        text = render_rollback_script(ctx, DEVICE)
        assert ":: example/test script for rollback of the Acme package" in text
        assert ":: Update timestamp on old.frm" in text
        assert "new.frm" not in text
        assert "RSO:Acme package rolled back" in text
        assert '-c "rollback Acme package"' in text

    def test_rollback_firmware_only(self):
        ctx = _ctx(forms=["new.frm"], rollback_firmware=["old.bin"])
        text = render_rollback_script(ctx, DEVICE)
        assert "FIRMWAREDIR" in text
        assert "FORMSDIR" not in text


class TestWriteIfEmpty:
    """Tests for write_if_empty and the emitters."""

    def test_writes_empty_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.touch()
        assert write_if_empty(path, "hello\n") is True
        assert path.read_text() == "hello\n"

    def test_writes_missing_file(self, tmp_path):
        path = tmp_path / "a.txt"
        assert write_if_empty(path, "hello\n") is True
        assert path.exists()

    def test_skips_populated_file(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_text("existing")
        assert write_if_empty(path, "hello\n") is False
        assert path.read_text() == "existing"

    def test_rerun_is_noop(self, tmp_path):
        """Re-running an emitter against a populated file changes nothing."""
        ctx = _ctx(forms=["a.frm"])
        path = tmp_path / "changelog.txt"
        path.touch()
        assert build_changelog(ctx, path) is True
        first = path.read_bytes()

        ctx.date = "2099-12-31"
        assert build_changelog(ctx, path) is False
        assert path.read_bytes() == first

    def test_scripts_use_crlf(self, tmp_path):
        path = tmp_path / "install.cmd"
        build_install_script(_ctx(forms=["a.frm"]), DEVICE, path)
        raw = path.read_bytes()
        assert b"@Echo Off\r\n" in raw
        assert b"\r\r\n" not in raw

    def test_touch_script(self, tmp_path):
        path = tmp_path / "touch.cmd"
        assert build_touch_script(path) is True
        assert path.read_text() == TOUCH_SCRIPT

    def test_write_failure_raises_layout_error(self, tmp_path):
        path = tmp_path / "missing" / "a.txt"
        with pytest.raises(LayoutError) as exc_info:
            write_if_empty(path, "hello\n")
        assert exc_info.value.code == "file_write_error"
