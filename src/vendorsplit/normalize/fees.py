"""Fee normalization.

Shipping fees reach the engine in several encodings depending on which code
path last wrote the order: a bare number, the same number as text, or a
record such as ``{"fee": 40, "vendorName": "..."}``. ``classify_fee`` turns
any of them into one ``FeeValue`` variant and ``normalize_fee`` reduces that
variant to a non-negative ``Decimal``. Nothing here raises on bad input.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Union

ZERO = Decimal("0")

# Amounts at or above 10**16 are treated as overflow.
_MAX_ADJUSTED_EXPONENT = 15
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True, slots=True)
class NoFee:
    pass


@dataclass(frozen=True, slots=True)
class NumericFee:
    value: int | float | Decimal


@dataclass(frozen=True, slots=True)
class TextFee:
    text: str


@dataclass(frozen=True, slots=True)
class FeeRecord:
    fee: Any
    vendor_name: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


FeeValue = Union[NoFee, NumericFee, TextFee, FeeRecord]

_VARIANTS = (NoFee, NumericFee, TextFee, FeeRecord)


def classify_fee(raw: Any) -> FeeValue:
    if isinstance(raw, _VARIANTS):
        return raw
    if raw is None or isinstance(raw, bool):
        return NoFee()
    if isinstance(raw, (int, float, Decimal)):
        return NumericFee(raw)
    if isinstance(raw, str):
        return TextFee(raw)
    if isinstance(raw, Mapping):
        vendor = raw.get("vendorName") or raw.get("adminName")
        return FeeRecord(
            fee=raw.get("fee"),
            vendor_name=str(vendor) if vendor else None,
            metadata={key: value for key, value in raw.items() if key != "fee"},
        )
    return NoFee()


def normalize_fee(raw: Any) -> Decimal:
    value = classify_fee(raw)
    if isinstance(value, FeeRecord):
        # A record's fee is a scalar; nested records are not a known encoding.
        value = classify_fee(value.fee)
        if isinstance(value, FeeRecord):
            return ZERO
    if isinstance(value, NumericFee):
        return parse_amount(value.value) or ZERO
    if isinstance(value, TextFee):
        return parse_amount(value.text) or ZERO
    return ZERO


def parse_amount(raw: Any) -> Decimal | None:
    """Parse a non-negative money amount, or return ``None`` when it is unusable.

    Text is read by its leading numeric prefix, so ``"70 GHS"`` gives 70 while
    ``"GHS 70"`` does not parse.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        amount = raw
    elif isinstance(raw, (int, float)):
        amount = Decimal(str(raw)) if isinstance(raw, float) else Decimal(raw)
    elif isinstance(raw, str):
        match = _NUMERIC_PREFIX.match(raw)
        if match is None:
            return None
        try:
            amount = Decimal(match.group(0).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    if amount == 0:
        return ZERO
    if amount.adjusted() > _MAX_ADJUSTED_EXPONENT:
        return None
    return amount
