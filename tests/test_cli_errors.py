import os
import subprocess
import sys
from pathlib import Path

import pytest

from vendorsplit.cli.main import main

ROOT = Path(__file__).resolve().parents[1]


def test_cli_missing_snapshot_exits_nonzero(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    cmd = [sys.executable, "-m", "vendorsplit", "overlay", str(tmp_path / "missing.json")]
    result = subprocess.run(cmd, env=env, cwd=tmp_path, capture_output=True, text=True)
    assert result.returncode == 2
    assert "vendorsplit: error:" in result.stderr


def test_cli_bad_since(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["sellers", str(tmp_path / "orders.json"), "--since", "yesterday"])
    assert excinfo.value.code == 2
    assert "--since" in capsys.readouterr().err


def test_cli_unknown_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        main(["timeseries", "orders.json", "--source", "mongo"])
    assert excinfo.value.code == 2


def test_cli_internal_errors_are_not_masked(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken(options: object) -> None:
        raise KeyError("seller-ama")

    monkeypatch.setattr("vendorsplit.cli.main.run_sellers", _broken)
    with pytest.raises(KeyError):
        main(["sellers", str(tmp_path / "orders.json")])
