"""representatives.py

What it does:
- Picks one backdrop per non-empty cluster, uniformly at random, and pairs it with its
  session id and playback URL.

Main entrypoint:
- sample_representatives(entries, result, rng) -> List[Representative]

Notes:
- Output follows cluster order; with a seeded rng the picks are reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List

from sampler.log import get_logger

from .corpus import CorpusEntry
from .kmeans import KMeansResult

log = get_logger("representatives")


@dataclass
class Representative:
    cluster_id: int
    corpus_index: int
    session_id: str
    url: str
    timestamp: int
    snapshot: Dict[str, Any]
    vector: List[int]

    def to_summary(self) -> Dict[str, Any]:
        """Compact form the viewer front-end takes as a URL parameter."""
        return {"timestamp": self.timestamp, "url": self.url}


def sample_representatives(
    entries: List[CorpusEntry],
    result: KMeansResult,
    rng: random.Random,
) -> List[Representative]:
    """One uniformly random member per non-empty cluster, in cluster order."""
    reps: List[Representative] = []
    for cid, idxs in enumerate(result.clusters):
        if not idxs:
            continue
        i = rng.choice(idxs)
        e = entries[i]
        reps.append(
            Representative(
                cluster_id=cid,
                corpus_index=i,
                session_id=e.session_id,
                url=e.url,
                timestamp=e.timestamp,
                snapshot=e.backdrop.snapshot,
                vector=e.vector,
            )
        )
    log.info("sampled %d representatives", len(reps))
    return reps
