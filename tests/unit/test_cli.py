"""
Tests for the admin CLI against a temporary SQLite store.
"""

import pytest

from zosale.app_shell.cli import main


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ZOSALE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ZOSALE_RULES_PATH", str(tmp_path / "rules.yaml"))
    main(["migrate"])
    return tmp_path


def test_migrate_reports_applied(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("ZOSALE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("ZOSALE_RULES_PATH", str(tmp_path / "rules.yaml"))

    main(["migrate"])
    assert "Applied 2 migration(s)." in capsys.readouterr().out

    main(["migrate"])
    assert "Applied 0 migration(s)." in capsys.readouterr().out


def test_list(workspace, capsys):
    capsys.readouterr()
    main(["list"])

    out = capsys.readouterr().out
    assert "SER-001" in out
    assert "3 service(s)" in out


def test_filter_by_status(workspace, capsys):
    capsys.readouterr()
    main(["filter", "--status", "Expired"])

    out = capsys.readouterr().out
    assert "SER-003" in out
    assert "SER-001" not in out
    assert "1 service(s)" in out


def test_enable_then_summary(workspace, capsys):
    main(["enable", "SER-003"])
    main(["summary"])

    out = capsys.readouterr().out
    assert "Service SER-003 enabled." in out
    assert "Total: 3  Active: 2  Expiring soon: 1  Expired: 0" in out


def test_invalid_transition_exits(workspace):
    with pytest.raises(SystemExit) as exc_info:
        main(["disable", "SER-003"])
    assert exc_info.value.code == 1


def test_delete_missing_exits(workspace):
    with pytest.raises(SystemExit):
        main(["delete", "SER-404"])


def test_export_csv(workspace, capsys):
    output = workspace / "active.csv"
    main(["export", "--status", "Active", "--output", str(output)])

    lines = output.read_text(encoding="utf-8").split("\n")
    assert lines[0].startswith("Ser_No,")
    assert lines[1].startswith('"SER-001",')
    assert len(lines) == 2
    assert "Exported 1 service(s)" in capsys.readouterr().out


def test_export_html_default_name(workspace):
    main(["export", "--format", "html", "--search", "aman"])

    report = (workspace / "services.html").read_text(encoding="utf-8")
    assert "<title>Services Report</title>" in report
    assert "SER-002" in report


def test_malformed_date_bound_exits(workspace):
    with pytest.raises(SystemExit):
        main(["filter", "--date-from", "someday"])
