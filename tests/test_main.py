"""Tests for the headless batch export entry point."""

import sys

import pytest

from pvalue_plotter.__main__ import main


def test_headless_export(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, 'excepthook', sys.excepthook)
    out = tmp_path / "charts"
    with pytest.raises(SystemExit) as exc:
        main(['--export', str(out), '--n-tests', '300', '--bins', '10'])
    assert exc.value.code == 0
    assert (out / "overview.png").is_file()
    assert (out / "pvalues.csv").is_file()
    assert len(list(out.glob("*.png"))) == 13
    printed = capsys.readouterr().out
    assert "Anti-Conservative" in printed
    assert "Wrote 14 files" in printed


def test_headless_export_reports_bad_input(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, 'excepthook', sys.excepthook)
    bad = tmp_path / "bad.csv"
    bad.write_text("p\n2.0\n", encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main(['--export', str(tmp_path / "out"), '--input', str(bad)])
    assert exc.value.code == 1
    assert "outside" in capsys.readouterr().err
