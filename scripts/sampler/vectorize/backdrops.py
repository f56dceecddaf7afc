"""backdrops.py

What it does:
- Picks the full-snapshot events out of a decoded rrweb event stream and vectorizes
  each embedded DOM tree into a Backdrop (timestamp + vector + raw tree).

Main entrypoint:
- extract_backdrops(events, dictionary) -> List[Backdrop]

Notes:
- Events without a node or with an unreadable timestamp are skipped before anything
  is registered in the dictionary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from sampler.log import get_logger

from .features import FeatureDictionary
from .snapshot import vectorize_snapshot

log = get_logger("backdrops")

# rrweb EventType
EVENT_DOM_CONTENT_LOADED = 0
EVENT_LOAD = 1
EVENT_FULL_SNAPSHOT = 2
EVENT_INCREMENTAL_SNAPSHOT = 3
EVENT_META = 4
EVENT_CUSTOM = 5
EVENT_PLUGIN = 6


@dataclass
class Backdrop:
    timestamp: int
    vector: List[int]
    snapshot: Dict[str, Any]  # raw rrweb node, passed through untouched


def is_full_snapshot(event: Any) -> bool:
    return isinstance(event, dict) and event.get("type") == EVENT_FULL_SNAPSHOT


def _snapshot_node(event: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    data = event.get("data")
    if not isinstance(data, dict):
        return None
    node = data.get("node")
    return node if isinstance(node, dict) else None


def _timestamp(event: Dict[str, Any]) -> Optional[int]:
    raw = event.get("timestamp")
    if raw is None:
        return 0
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return None


def extract_backdrops(events: Iterable[Any], dictionary: FeatureDictionary) -> List[Backdrop]:
    """One Backdrop per full-snapshot event, in event order."""
    out: List[Backdrop] = []
    for e in events:
        if not is_full_snapshot(e):
            continue
        node = _snapshot_node(e)
        if node is None:
            log.debug("full snapshot at %s has no node; skipped", e.get("timestamp"))
            continue
        ts = _timestamp(e)
        if ts is None:
            log.debug("full snapshot with unreadable timestamp %r; skipped", e.get("timestamp"))
            continue
        vector = vectorize_snapshot(node, dictionary)
        out.append(Backdrop(timestamp=ts, vector=vector, snapshot=node))
    return out
