from vendorsplit.io.snapshot import InMemorySnapshotSource, JsonSnapshotSource
from vendorsplit.model.registry import register_source

register_source("json", lambda location: JsonSnapshotSource(location))

__all__ = ["InMemorySnapshotSource", "JsonSnapshotSource"]
