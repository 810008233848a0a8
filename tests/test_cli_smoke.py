import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _env() -> dict[str, str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    return env


def test_cli_timeseries_json(tmp_path: Path) -> None:
    out = tmp_path / "report.json"
    cmd = [
        sys.executable,
        "-m",
        "vendorsplit",
        "timeseries",
        str(ROOT / "fixtures" / "snapshots" / "marketplace.json"),
        "--all-time",
        "--granularity",
        "weekly",
        "--out",
        str(out),
    ]
    subprocess.check_call(cmd, env=_env(), cwd=tmp_path)
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert [bucket["key"] for bucket in payload["buckets"]] == ["2024-W14", "2024-W11"]
    assert payload["buckets"][1]["orderCount"] == 2


def test_cli_sellers_stdout(tmp_path: Path) -> None:
    cmd = [
        sys.executable,
        "-m",
        "vendorsplit",
        "sellers",
        str(ROOT / "fixtures" / "snapshots" / "marketplace.json"),
        "--since",
        "2024-01-01",
        "--until",
        "2024-12-31",
        "--seller",
        "seller-ama",
    ]
    output = subprocess.check_output(cmd, env=_env(), cwd=tmp_path)
    (row,) = json.loads(output)
    assert row["sellerId"] == "seller-ama"
    assert row["grossRevenue"] == 230.0


def test_cli_overlay_defaults_to_all_time(tmp_path: Path) -> None:
    cmd = [
        sys.executable,
        "-m",
        "vendorsplit",
        "overlay",
        str(ROOT / "fixtures" / "snapshots" / "marketplace.json"),
        "--seller",
        "seller-esi",
    ]
    output = subprocess.check_output(cmd, env=_env(), cwd=tmp_path)
    rows = json.loads(output)
    assert [row["orderId"] for row in rows] == ["ord-1002", "ord-1004"]
    assert [row["dominantStatus"] for row in rows] == ["cancelled", "delivered"]
