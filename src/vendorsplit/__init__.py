"""vendorsplit package."""

from vendorsplit.attribution.order import attribute_order
from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.pipeline import report_from_source, run_report

__all__ = ["VendorSplitConfig", "attribute_order", "report_from_source", "run_report"]
