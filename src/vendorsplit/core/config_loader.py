from __future__ import annotations

import sys
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from vendorsplit.core.config import VendorSplitConfig
from vendorsplit.core.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover - only used on Python < 3.11
    import tomli as tomllib


def load_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def load_config(root: Path, overrides: dict[str, Any] | None = None) -> VendorSplitConfig:
    overrides = overrides or {}
    config = VendorSplitConfig()
    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        data = load_toml(pyproject)
        tool_cfg: dict[str, Any] = data.get("tool", {}).get("vendorsplit", {})
        config = _apply_config(config, tool_cfg)
    config = _apply_config(config, overrides)
    validate_config(config)
    return config


def validate_config(config: VendorSplitConfig) -> None:
    if not Decimal("0") <= config.commission.rate <= Decimal("1"):
        raise ConfigError("commission.rate must be between 0 and 1")
    if config.shipping.low_cost_fee < 0 or config.shipping.standard_fee < 0:
        raise ConfigError("shipping fees must be >= 0")
    if config.shipping.tolerance < 0:
        raise ConfigError("shipping.tolerance must be >= 0")
    if not config.attribution.unassigned_seller:
        raise ConfigError("attribution.unassigned_seller must not be empty")
    if config.runtime.processes < 1:
        raise ConfigError("runtime.processes must be >= 1")
    if config.runtime.timeout_seconds < 0:
        raise ConfigError("runtime.timeout_seconds must be >= 0")
    windows = config.windows
    if min(windows.daily_days, windows.weekly_days, windows.monthly_months, windows.yearly_years) <= 0:
        raise ConfigError("window lengths must be > 0")


def _apply_config(config: VendorSplitConfig, cfg: dict[str, Any]) -> VendorSplitConfig:
    if not cfg:
        return config
    if "commission" in cfg:
        c = cfg["commission"]
        config = replace(
            config,
            commission=replace(
                config.commission,
                rate=_decimal(c.get("rate", config.commission.rate), "commission.rate"),
            ),
        )
    if "shipping" in cfg:
        s = cfg["shipping"]
        config = replace(
            config,
            shipping=replace(
                config.shipping,
                low_cost_region=str(s.get("low_cost_region", config.shipping.low_cost_region)),
                low_cost_fee=_decimal(
                    s.get("low_cost_fee", config.shipping.low_cost_fee), "shipping.low_cost_fee"
                ),
                standard_fee=_decimal(
                    s.get("standard_fee", config.shipping.standard_fee), "shipping.standard_fee"
                ),
                tolerance=_decimal(s.get("tolerance", config.shipping.tolerance), "shipping.tolerance"),
            ),
        )
    if "attribution" in cfg:
        a = cfg["attribution"]
        config = replace(
            config,
            attribution=replace(
                config.attribution,
                unassigned_seller=str(
                    a.get("unassigned_seller", config.attribution.unassigned_seller)
                ),
            ),
        )
    if "runtime" in cfg:
        r = cfg["runtime"]
        config = replace(
            config,
            runtime=replace(
                config.runtime,
                processes=_int(r.get("processes", config.runtime.processes), "runtime.processes"),
                timeout_seconds=float(
                    _decimal(
                        r.get("timeout_seconds", config.runtime.timeout_seconds),
                        "runtime.timeout_seconds",
                    )
                ),
            ),
        )
    if "windows" in cfg:
        w = cfg["windows"]
        config = replace(
            config,
            windows=replace(
                config.windows,
                daily_days=_int(w.get("daily_days", config.windows.daily_days), "windows.daily_days"),
                weekly_days=_int(
                    w.get("weekly_days", config.windows.weekly_days), "windows.weekly_days"
                ),
                monthly_months=_int(
                    w.get("monthly_months", config.windows.monthly_months), "windows.monthly_months"
                ),
                yearly_years=_int(
                    w.get("yearly_years", config.windows.yearly_years), "windows.yearly_years"
                ),
            ),
        )
    return config


def _decimal(value: Any, name: str) -> Decimal:
    # str() first so TOML floats like 0.05 keep their written digits.
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if not result.is_finite():
        raise ConfigError(f"{name} must be finite")
    return result


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
