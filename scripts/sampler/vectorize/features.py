"""features.py

What it does:
- Holds the per-run feature dictionary: an append-only, ordered registry mapping a
  structural DOM feature (tag, class, src) to a stable vector index.

Main entrypoints:
- FeatureDictionary.register(tag, cls, style, src) -> index (or None for ignored tags)
- FeatureDictionary.size() -> current vector dimensionality

Notes:
- Style is remembered from the first registration but is NOT part of the key, so two
  elements that only differ by inline style collapse into one feature.
- Create one dictionary per run and pass it to every vectorizer call. Indices never
  change once assigned; `clear()` exists only to reuse an object between unrelated runs.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

IGNORED_TAGS = frozenset({"script", "noscript", "meta", "iframe", "head", "html", "style"})


def should_ignore_tag(tag: str) -> bool:
    return tag in IGNORED_TAGS


def attr_text(value: Any) -> str:
    """rrweb attribute values may be missing, booleans or numbers."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class FeatureKey:
    tag: str
    cls: str
    src: str


@dataclass(frozen=True)
class Feature:
    key: FeatureKey
    style: str  # first style seen; informational only

    @property
    def tag(self) -> str:
        return self.key.tag

    @property
    def cls(self) -> str:
        return self.key.cls

    @property
    def src(self) -> str:
        return self.key.src


class FeatureDictionary:
    def __init__(self) -> None:
        self._features: List[Feature] = []
        self._index: Dict[FeatureKey, int] = {}
        # single writer; only matters if a caller vectorizes sessions in threads
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._features)

    def size(self) -> int:
        return len(self._features)

    @property
    def features(self) -> List[Feature]:
        return list(self._features)

    def lookup(self, tag: str, cls: Any = "", src: Any = "") -> Optional[int]:
        return self._index.get(FeatureKey(tag, attr_text(cls), attr_text(src)))

    def register(self, tag: str, cls: Any = "", style: Any = "", src: Any = "") -> Optional[int]:
        """Return the index for (tag, cls, src), appending a new feature if unseen.

        Ignored tags return None and never allocate a slot.
        """
        if should_ignore_tag(tag):
            return None

        key = FeatureKey(tag, attr_text(cls), attr_text(src))
        idx = self._index.get(key)
        if idx is not None:
            return idx

        with self._lock:
            idx = self._index.get(key)
            if idx is None:
                idx = len(self._features)
                self._features.append(Feature(key=key, style=attr_text(style)))
                self._index[key] = idx
        return idx

    def describe(self, index: int) -> str:
        """Short CSS-ish label for reports: div.card.big, img[src=...]."""
        f = self._features[index]
        label = f.tag
        if f.cls:
            label += "." + ".".join(f.cls.split())
        if f.src:
            src = f.src if len(f.src) <= 48 else f.src[:47] + "…"
            label += f"[src={src}]"
        return label

    def clear(self) -> None:
        with self._lock:
            self._features.clear()
            self._index.clear()
