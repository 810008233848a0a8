from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING

from vendorsplit.core.types import RawSnapshot, RevenueReport, ShippingTier

if TYPE_CHECKING:
    from vendorsplit.attribution.shipping import ShippingContext


class SnapshotSource(ABC):
    @abstractmethod
    def load(self) -> RawSnapshot: ...


class ShippingStrategy(ABC):
    tier: ShippingTier

    @abstractmethod
    def resolve(self, seller_id: str, context: ShippingContext) -> Decimal | None: ...


class Reporter(ABC):
    @abstractmethod
    def write(self, report: RevenueReport, out_path: str) -> None: ...
