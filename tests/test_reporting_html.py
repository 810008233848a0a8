from pathlib import Path

from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.pipeline import report_from_source
from vendorsplit.core.types import ReportRequest
from vendorsplit.io.snapshot import JsonSnapshotSource
from vendorsplit.reporting.html_reporter import HtmlReporter

FIXTURE = Path(__file__).resolve().parents[1] / "fixtures" / "snapshots" / "marketplace.json"


def test_html_reporter(tmp_path: Path) -> None:
    report = report_from_source(
        JsonSnapshotSource(str(FIXTURE)),
        ReportRequest(granularity="monthly", config=VendorSplitConfig(), seller_id="seller-esi"),
    )
    out = tmp_path / "report.html"
    HtmlReporter().write(report, str(out))
    text = out.read_text(encoding="utf-8")
    assert "<html" in text
    assert "March 2024" in text
    assert "seller-esi" in text
    assert "status-cancelled" in text
    assert "seller-ama" not in text
