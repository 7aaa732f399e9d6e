"""Tests for the vzconf command line."""

import io
import textwrap

import pytest

from vzconf.cli import main


UUID_TEXT = "86c12009-e591-a159-6e9f-91d18b85ef78"


@pytest.fixture
def run(conf_dir):
    """Run the CLI against the test config directory."""
    def run_cli(*args):
        main(["--conf-dir", str(conf_dir), *args])
    return run_cli


class TestGetParam:

    def test_prints_value(self, run, write_conf, capsys):
        write_conf(101, 'OSTEMPLATE="fedora-core-5"\nOSTEMPLATE=centos-6\n')
        run("get-param", "101", "OSTEMPLATE")
        assert capsys.readouterr().out == "centos-6\n"

    def test_missing_param(self, run, write_conf, capsys):
        write_conf(101, "")
        with pytest.raises(SystemExit) as exc_info:
            run("get-param", "101", "OSTEMPLATE")
        assert exc_info.value.code == 1
        assert "OSTEMPLATE is not set" in capsys.readouterr().err

    def test_missing_file(self, run, capsys):
        with pytest.raises(SystemExit):
            run("get-param", "404", "OSTEMPLATE")
        assert "404.conf" in capsys.readouterr().err


class TestUuidCommands:

    def test_uuid(self, run, write_conf, capsys):
        write_conf(101, f"#UUID: {UUID_TEXT}\n")
        run("uuid", "101")
        assert capsys.readouterr().out == f"{UUID_TEXT}\n"

    def test_assign_uuids(self, run, write_conf, conf_dir, capsys):
        write_conf(0, "")
        path = write_conf(101, "")
        (conf_dir / "102.conf").mkdir()

        run("assign-uuids")

        out = capsys.readouterr()
        assert "1 of 2 VEs have a UUID" in out.out
        assert "Skipped VEs: 102" in out.err
        assert "#UUID: " in path.read_text()


class TestShow:

    def test_prints_yaml(self, run, tmp_path, capsys):
        doc = tmp_path / "101.xml"
        doc.write_text(textwrap.dedent(f"""\
            <domain type="openvz">
              <name>101</name>
              <uuid>{UUID_TEXT}</uuid>
              <devices>
                <filesystem type="template">
                  <source name="centos-6"/>
                </filesystem>
              </devices>
            </domain>
        """))

        run("show", str(doc))

        out = capsys.readouterr().out
        assert "name: '101'" in out
        assert f"uuid: {UUID_TEXT}" in out
        assert "template: centos-6" in out

    def test_invalid_document(self, run, tmp_path, capsys):
        doc = tmp_path / "50.xml"
        doc.write_text("<domain type='openvz'><name>50</name></domain>")
        with pytest.raises(SystemExit):
            run("show", str(doc))
        assert "VPS ID Error" in capsys.readouterr().err

    def test_missing_file(self, run, tmp_path, capsys):
        with pytest.raises(SystemExit):
            run("show", str(tmp_path / "nope.xml"))
        assert "Cannot read" in capsys.readouterr().err


class TestList:

    def test_lists_vzlist_output(self, run, write_conf, monkeypatch, capsys):
        write_conf(101, f"#UUID: {UUID_TEXT}\n")
        write_conf(102, "")
        monkeypatch.setattr("sys.stdin", io.StringIO("  101 running\n  102 stopped\n"))

        run("list")

        out = capsys.readouterr().out
        assert f"101   running  {UUID_TEXT}" in out
        assert "102   stopped  -" in out
        assert "1 active, 1 inactive" in out

    def test_malformed_output(self, run, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("nonsense\n"))
        with pytest.raises(SystemExit):
            run("list")
        assert "Failed to parse vzlist output" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 0
    assert "usage: vzconf" in capsys.readouterr().out


def test_version(run, capsys):
    run("version")
    assert capsys.readouterr().out.startswith("vzconf ")
