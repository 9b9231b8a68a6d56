from __future__ import annotations

import json

import pytest

from visiai import cli
from visiai.repository import ScanRepository


@pytest.fixture(autouse=True)
def no_keys(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False, log_file=None: None)
    for name in ("PAGESPEED_API_KEY", "LIGHTHOUSE_API_KEY", "OPENROUTER_API_KEY", "REIMAGINE_API_KEY"):
        monkeypatch.setenv(name, "")


def test_health_reports_providers(capsys, tmp_path):
    assert cli.main(["--data-dir", str(tmp_path), "health"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"status": "ok", "providers": {"audit": False, "vision": False, "ux": False}}


def test_list_show_delete(capsys, tmp_path, make_record):
    doc = ScanRepository(tmp_path).save(make_record())

    assert cli.main(["--data-dir", str(tmp_path), "list"]) == 0
    listing = json.loads(capsys.readouterr().out)
    assert [d["id"] for d in listing["data"]] == [doc["id"]]
    assert "screenshot" not in listing["data"][0]

    assert cli.main(["--data-dir", str(tmp_path), "show", doc["id"]]) == 0
    assert json.loads(capsys.readouterr().out)["url"] == "https://example.com"

    assert cli.main(["--data-dir", str(tmp_path), "delete", doc["id"]]) == 0
    assert "deleted" in capsys.readouterr().out
    assert ScanRepository(tmp_path).get(doc["id"]) is None


def test_missing_scan_exits_nonzero(capsys, tmp_path):
    assert cli.main(["--data-dir", str(tmp_path), "show", "0" * 32]) == 1
    assert "Scan not found" in capsys.readouterr().out


def test_invalid_url_exits_nonzero(capsys, tmp_path, monkeypatch):
    class NoCapture:
        async def capture(self, url):
            raise AssertionError("capture must not run")

    real_pipeline = cli.ScanPipeline
    monkeypatch.setattr(cli, "ScanPipeline", lambda config, repository: real_pipeline(config, capturer=NoCapture(), repository=repository))
    assert cli.main(["--data-dir", str(tmp_path), "scan", "not-a-url"]) == 1
    assert "Invalid URL format" in capsys.readouterr().out


def test_print_summary_lists_fallbacks(capsys, make_record):
    doc = make_record().to_dict()
    doc["fallbacks"] = {"vision": "missing credentials"}
    cli.print_summary(doc)
    out = capsys.readouterr().out
    assert "OVERALL SCORE" in out
    assert "vision: default record used (missing credentials)" in out
