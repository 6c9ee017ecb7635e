"""Unit tests for the CLI — command registration and behavior via CliRunner.

Commands that talk to the remote side get the in-memory gateway through
``obj=CliContext(gateway=...)``.
"""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from rightst.cli.app import app
from rightst.cli.context import CliContext
from rightst.core.hasher import md5_hex

runner = CliRunner()


def _invoke(args: list[str], gateway=None):
    return runner.invoke(app, args, obj=CliContext(gateway=gateway))


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "rightscript" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "right-st" in result.output

    def test_rightscript_commands_registered(self):
        result = runner.invoke(app, ["rightscript", "--help"])
        assert result.exit_code == 0
        for name in ("list", "show", "upload", "download", "scaffold", "validate"):
            assert name in result.output

    def test_each_command_has_help(self):
        for name in ("list", "show", "upload", "download", "scaffold", "validate"):
            result = runner.invoke(app, ["rightscript", name, "--help"])
            assert result.exit_code == 0, name


# ---------------------------------------------------------------------------
# Test: local-only commands
# ---------------------------------------------------------------------------


class TestValidate:
    def test_valid_script(self, make_script):
        script = make_script(attachments={"a.sh": b"aaa"})
        result = _invoke(["rightscript", "validate", str(script)])
        assert result.exit_code == 0
        assert md5_hex(b"aaa") in result.output

    def test_missing_metadata_fails(self, make_script):
        result = _invoke(["rightscript", "validate", str(make_script(name=None))])
        assert result.exit_code == 1

    def test_missing_attachment_fails(self, make_script):
        script = make_script(declared=["gone.tgz"])
        result = _invoke(["rightscript", "validate", str(script)])
        assert result.exit_code == 1


class TestScaffold:
    def test_adds_metadata(self, tmp_path: Path):
        path = tmp_path / "run.sh"
        path.write_text("#!/bin/bash\necho run\n", encoding="utf-8")
        result = _invoke(["rightscript", "scaffold", str(path)])
        assert result.exit_code == 0
        assert "RightScript Name: run" in path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Test: remote commands
# ---------------------------------------------------------------------------


class TestUpload:
    def test_upload_creates_script_and_attachments(self, gateway, make_script):
        script = make_script(name="widget", attachments={"a.sh": b"a"})
        result = _invoke(["rightscript", "upload", str(script)], gateway)

        assert result.exit_code == 0, result.output
        [handle] = gateway.scripts
        assert gateway.scripts[handle].name == "widget"
        assert [a.name for a in gateway.attachments[handle]] == ["a.sh"]

    def test_upload_without_metadata_needs_force(self, gateway, make_script):
        script = make_script("plain.sh", name=None)

        refused = _invoke(["rightscript", "upload", str(script)], gateway)
        assert refused.exit_code == 1
        assert gateway.mutations() == []

        forced = _invoke(["rightscript", "upload", "--force", str(script)], gateway)
        assert forced.exit_code == 0
        assert [s.name for s in gateway.scripts.values()] == ["plain"]

    def test_upload_pushes_nothing_if_any_script_invalid(self, gateway, make_script):
        good = make_script("good.sh", name="good")
        bad = make_script("bad.sh", name=None)
        result = _invoke(["rightscript", "upload", str(good), str(bad)], gateway)
        assert result.exit_code == 1
        assert gateway.calls == []

    def test_upload_reports_failed_script(self, gateway, make_script):
        gateway.add_script("dup")
        gateway.add_script("dup")
        result = _invoke(["rightscript", "upload", str(make_script(name="dup"))], gateway)
        assert result.exit_code == 1
        assert gateway.mutations() == []


class TestListShowDownload:
    def test_list(self, gateway):
        gateway.add_script("deploy")
        result = _invoke(["rightscript", "list", "deploy"], gateway)
        assert result.exit_code == 0
        assert ("list_scripts", "", "deploy") in gateway.calls

    def test_show_by_name(self, gateway):
        handle = gateway.add_script("deploy")
        gateway.add_attachment(handle, "a.sh", b"aaa")
        result = _invoke(["rightscript", "show", "deploy"], gateway)
        assert result.exit_code == 0
        assert md5_hex(b"aaa") in result.output

    def test_show_ambiguous(self, gateway):
        gateway.add_script("deploy")
        gateway.add_script("deploy")
        result = _invoke(["rightscript", "show", "deploy"], gateway)
        assert result.exit_code == 1

    def test_download_writes_executable_source(self, gateway, tmp_path: Path):
        handle = gateway.add_script("deploy", source="#!/bin/bash\necho hi\n")
        target = tmp_path / "out.sh"
        result = _invoke(["rightscript", "download", handle, str(target)], gateway)
        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "#!/bin/bash\necho hi\n"
        assert target.stat().st_mode & 0o777 == 0o755

    def test_download_unknown(self, gateway):
        result = _invoke(["rightscript", "download", "nothing"], gateway)
        assert result.exit_code == 1
