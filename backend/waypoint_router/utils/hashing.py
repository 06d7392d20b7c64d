from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Iterable


def sha256_canonical(obj: Any) -> str:
    """Hash over canonical JSON (stable key ordering, no whitespace)."""
    data = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return "sha256:" + hashlib.sha256(data).hexdigest()


def obstacle_set_version(obstacles: Iterable[Dict[str, Any]]) -> str:
    """Version tag for an ordered obstacle set.

    Clients that cache virtual points key them on this; any added, removed
    or reordered circle changes it.
    """
    return sha256_canonical([[float(o["x"]), float(o["y"]), float(o["radius"])] for o in obstacles])
