import json
from pathlib import Path

from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.pipeline import report_from_source
from vendorsplit.core.types import ReportRequest
from vendorsplit.io.snapshot import JsonSnapshotSource
from vendorsplit.reporting.json_reporter import JsonReporter

FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "snapshots" / "marketplace.json"


def _report():
    return report_from_source(
        JsonSnapshotSource(str(FIXTURE)),
        ReportRequest(granularity="weekly", config=VendorSplitConfig()),
    )


def test_json_reporter(tmp_path: Path) -> None:
    out = tmp_path / "report.json"
    JsonReporter().write(_report(), str(out))
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert "schema_version" in payload
    assert "fingerprint" in payload
    assert payload["granularity"] == "weekly"
    assert payload["window"] is None
    first = payload["buckets"][0]
    assert first["key"] == "2024-W14"
    assert first["totalRevenue"] == 60.0
    assert first["grossWithShipping"] == 200.0
    assert payload["buckets"][1]["totalPlatformFees"] == 15.25
    ama = payload["sellers"][0]
    assert ama["sellerId"] == "seller-ama"
    assert ama["shippingByRegion"] == {"lowCost": 1, "standard": 1}
    assert payload["diagnostics"]["excludedTimestamps"] == 1


def test_fingerprint_ignores_timing() -> None:
    first = json.loads(JsonReporter().render(_report()))
    second = json.loads(JsonReporter().render(_report()))
    assert first["fingerprint"] == second["fingerprint"]
