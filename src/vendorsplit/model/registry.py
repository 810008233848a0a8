from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from vendorsplit.core.errors import UnknownSource
from vendorsplit.model.interfaces import SnapshotSource


@dataclass(frozen=True, slots=True)
class SourceRegistration:
    name: str
    factory: Callable[[str], SnapshotSource]


_REGISTRY: dict[str, SourceRegistration] = {}


def register_source(name: str, factory: Callable[[str], SnapshotSource]) -> None:
    _REGISTRY[name] = SourceRegistration(name=name, factory=factory)


def get_source(name: str, location: str) -> SnapshotSource:
    if name not in _REGISTRY:
        known = ", ".join(source_names()) or "none"
        raise UnknownSource(f"Snapshot source not registered: {name} (known: {known})")
    return _REGISTRY[name].factory(location)


def source_names() -> list[str]:
    return sorted(_REGISTRY)
