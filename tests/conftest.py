from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from sampler.ingest.sessions import SessionRecord
from sampler.vectorize.features import FeatureDictionary


def el(tag: str, *children: Dict[str, Any], cls: Optional[str] = None, src: Optional[str] = None, style: Optional[str] = None) -> Dict[str, Any]:
    attrs: Dict[str, Any] = {}
    if cls is not None:
        attrs["class"] = cls
    if src is not None:
        attrs["src"] = src
    if style is not None:
        attrs["style"] = style
    return {"type": 2, "tagName": tag, "attributes": attrs, "childNodes": list(children)}


def text(value: str = "hello") -> Dict[str, Any]:
    return {"type": 3, "textContent": value}


def document(*children: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": 0, "childNodes": list(children)}


def full_snapshot(node: Dict[str, Any], timestamp: int = 1000) -> Dict[str, Any]:
    return {"type": 2, "timestamp": timestamp, "data": {"node": node, "initialOffset": {"top": 0, "left": 0}}}


def meta_event(timestamp: int = 999) -> Dict[str, Any]:
    return {"type": 4, "timestamp": timestamp, "data": {"href": "https://example.com", "width": 1280, "height": 720}}


def incremental(timestamp: int = 1500) -> Dict[str, Any]:
    return {"type": 3, "timestamp": timestamp, "data": {"source": 0, "adds": [], "removes": []}}


def session(sid: str, nodes: List[Dict[str, Any]], url: Optional[str] = None, t0: int = 1000) -> SessionRecord:
    events: List[Dict[str, Any]] = [meta_event(t0 - 1)]
    for i, n in enumerate(nodes):
        events.append(full_snapshot(n, timestamp=t0 + i * 100))
        events.append(incremental(t0 + i * 100 + 50))
    return SessionRecord(session_id=sid, url=url or f"https://replays.example.com/{sid}.json.gz", events=events)


@pytest.fixture
def dictionary() -> FeatureDictionary:
    return FeatureDictionary()
