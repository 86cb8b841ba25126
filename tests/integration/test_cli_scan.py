import json

import pytest
from click.testing import CliRunner

from testlens.cli.main import app


@pytest.mark.integration
def test_scan_json_summaries(tmp_path, monkeypatch, sample_project):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["--quiet", "scan", "--json", str(sample_project)])

    assert result.exit_code == 0, result.output
    summaries = json.loads(result.output)
    assert summaries == [
        {
            "file": "tests/acceptance/login-test.js",
            "variant": "script",
            "modules": 2,
            "tests": 2,
            "error": None,
        },
        {
            "file": "tests/integration/greeting-test.gjs",
            "variant": "template",
            "modules": 1,
            "tests": 1,
            "error": None,
        },
    ]


@pytest.mark.integration
def test_scan_table(tmp_path, monkeypatch, sample_project):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["scan", str(sample_project)])

    assert result.exit_code == 0, result.output
    assert "Test Files" in result.output
    assert "login-test.js" in result.output


@pytest.mark.integration
def test_scan_empty_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "empty").mkdir()

    result = CliRunner().invoke(app, ["scan", str(tmp_path / "empty")])

    assert result.exit_code == 0, result.output
    assert "No test files found" in result.output
