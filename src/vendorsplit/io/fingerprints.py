from __future__ import annotations

import hashlib
import json
from typing import Any


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def payload_fingerprint(payload: Any) -> str:
    """Stable digest of a JSON-serializable payload, independent of key order."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hash_text(canonical)
