"""
What this file does:
- Loads the per-session records handed over by the fetch/decode side: a local manifest
  JSON listing sessions, each with inline decoded rrweb events or a path to an event blob
  (gzip-compressed or plain JSON).
- Randomly samples which sessions get processed at all.

Main entrypoints:
- load_sessions(manifest_path) -> List[SessionRecord]
- sample_sessions(records, rate, rng) -> List[SessionRecord]

Notes:
- A session whose blob is missing or undecodable still yields a record, with events=None.
  It simply contributes no backdrops later; it never fails the run.
"""

from __future__ import annotations

import gzip
import json
import random
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from sampler.log import get_logger

log = get_logger("sessions")


@dataclass(frozen=True)
class SessionRecord:
    session_id: str
    url: Optional[str]
    events: Optional[List[Dict[str, Any]]]  # None => fetch/decode failed


def decode_blob(raw: bytes) -> Optional[List[Dict[str, Any]]]:
    """gunzip (if needed) + JSON-decode an rrweb event blob. None on any failure."""
    try:
        if raw[:2] == b"\x1f\x8b":
            raw = gzip.decompress(raw)
        obj = json.loads(raw.decode("utf-8"))
    except (OSError, EOFError, zlib.error, UnicodeDecodeError, ValueError) as exc:
        log.warning("could not decode event blob: %s", exc)
        return None

    if not isinstance(obj, list):
        log.warning("event blob is %s, expected a list of events", type(obj).__name__)
        return None
    return obj


def _load_blob(path: Path) -> Optional[List[Dict[str, Any]]]:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        log.warning("could not read event blob %s: %s", path, exc)
        return None
    return decode_blob(raw)


def _record_from_obj(obj: Dict[str, Any], base_dir: Path, i: int) -> SessionRecord:
    sid = str(obj.get("id") or obj.get("session_id") or f"session-{i:04d}")
    url = obj.get("url")
    url = str(url) if url else None

    events = obj.get("events")
    if events is not None and not isinstance(events, list):
        log.warning("session %s: events is not a list; treating as failed decode", sid)
        events = None

    blob = obj.get("blob")
    if events is None and blob:
        events = _load_blob(base_dir / str(blob))

    return SessionRecord(session_id=sid, url=url, events=events)


def load_sessions(manifest_path: str | Path) -> List[SessionRecord]:
    p = Path(manifest_path)
    data = json.loads(p.read_text(encoding="utf-8"))

    if isinstance(data, dict):
        data = data.get("sessions", [])
    if not isinstance(data, list):
        raise ValueError(f"{p}: expected a list of sessions or {{'sessions': [...]}}")

    records: List[SessionRecord] = []
    for i, obj in enumerate(data):
        if not isinstance(obj, dict):
            log.warning("manifest entry %d is not an object; skipped", i)
            continue
        records.append(_record_from_obj(obj, p.parent, i))

    n_failed = sum(1 for r in records if r.events is None)
    log.info("loaded %d sessions (%d without events)", len(records), n_failed)
    return records


def sample_sessions(records: List[SessionRecord], rate: float, rng: random.Random) -> List[SessionRecord]:
    """Keep each record independently with probability `rate`."""
    if rate >= 1.0:
        return list(records)
    if rate <= 0.0:
        return []
    kept = [r for r in records if rng.random() < rate]
    log.info("sampled %d of %d sessions (rate=%.2f)", len(kept), len(records), rate)
    return kept
