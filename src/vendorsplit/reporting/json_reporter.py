from __future__ import annotations

import json

from vendorsplit.core.types import RevenueReport
from vendorsplit.io.fingerprints import payload_fingerprint
from vendorsplit.model.interfaces import Reporter
from vendorsplit.reporting.schema import SCHEMA_VERSION
from vendorsplit.reporting.serialize import report_to_dict


class JsonReporter(Reporter):
    def write(self, report: RevenueReport, out_path: str) -> None:
        with open(out_path, "w", encoding="utf-8") as handle:
            handle.write(self.render(report))

    def render(self, report: RevenueReport) -> str:
        body = report_to_dict(report)
        payload = {
            "schema_version": SCHEMA_VERSION,
            **body,
            # Timing varies run to run, so it stays out of the fingerprint.
            "fingerprint": payload_fingerprint(body),
            "timing": report.timing,
        }
        return json.dumps(payload, indent=2)
