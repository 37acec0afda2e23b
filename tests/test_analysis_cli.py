"""Tests for the python -m src.analytics entry point."""
import json
import shutil
import subprocess
import sys

import pytest

from src.analytics.__main__ import main
from src.config import BASE_DIR, SAMPLES_SOURCE_DIR


@pytest.fixture
def source_dir(tmp_path):
    target = tmp_path / "source"
    shutil.copytree(BASE_DIR / SAMPLES_SOURCE_DIR, target)
    return target


class TestAnalysisCommand:
    def test_help(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "src.analytics", "--help"],
            capture_output=True,
            text=True,
            cwd=BASE_DIR,
        )
        assert result.returncode == 0
        assert "--samples" in result.stdout
        assert "--requests-per-minute" in result.stdout

    def test_success(self, source_dir, tmp_path, capsys) -> None:
        log_dir = tmp_path / "logs"

        code = main(["--source-dir", str(source_dir), "--log-dir", str(log_dir)])

        assert code == 0
        output = json.loads((tmp_path / "mapping" / "analysis_results.json").read_text())
        assert output["tickets"]["total"] == 3

        info_log = (log_dir / "info.log").read_text(encoding="utf-8")
        assert "Total Tickets: 3" in info_log
        assert "Total Users: 2" in info_log
        assert "Total Organizations: 1" in info_log
        assert "Estimated migration time: 1 minutes" in info_log
        assert (log_dir / "error.log").read_text(encoding="utf-8") == ""

        assert "Analysis complete!" in capsys.readouterr().out

    def test_failure_exits_non_zero(self, source_dir, tmp_path, capsys) -> None:
        (source_dir / "tickets.xml").unlink()
        log_dir = tmp_path / "logs"

        code = main(["--source-dir", str(source_dir), "--log-dir", str(log_dir)])

        assert code == 1
        assert not (tmp_path / "mapping").exists()
        error_log = (log_dir / "error.log").read_text(encoding="utf-8")
        assert "Analysis failed" in error_log
        assert "tickets.xml" in error_log
        assert "Analysis failed" in capsys.readouterr().err

    def test_invalid_rate_exits_non_zero(self, source_dir, tmp_path) -> None:
        code = main([
            "--source-dir", str(source_dir),
            "--log-dir", str(tmp_path / "logs"),
            "--requests-per-minute", "0",
        ])

        assert code == 1
        assert not (tmp_path / "mapping").exists()
