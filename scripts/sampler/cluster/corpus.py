"""corpus.py

What it does:
- Vectorizes every processed session into backdrops and flattens them into one corpus,
  each entry tagged with its session id and playback URL.
- Widens every vector to the final dictionary size once all sessions are done.

Main entrypoint:
- assemble_corpus(records, dictionary) -> List[CorpusEntry]

Notes:
- Padding happens exactly once, after the last session was vectorized: only then is the
  final dimensionality known. Vectors are padded on the right, never truncated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from sampler.ingest.sessions import SessionRecord
from sampler.log import get_logger
from sampler.vectorize.backdrops import Backdrop, extract_backdrops
from sampler.vectorize.features import FeatureDictionary
from sampler.vectorize.snapshot import pad_vector

log = get_logger("corpus")


@dataclass
class CorpusEntry:
    session_id: str
    url: str
    backdrop: Backdrop

    @property
    def vector(self) -> List[int]:
        return self.backdrop.vector

    @property
    def timestamp(self) -> int:
        return self.backdrop.timestamp


def assemble_corpus(records: Iterable[SessionRecord], dictionary: FeatureDictionary) -> List[CorpusEntry]:
    entries: List[CorpusEntry] = []
    n_sessions = 0
    for r in records:
        if r.events is None or not r.url:
            log.debug("session %s contributes nothing (events=%s, url=%s)", r.session_id, r.events is not None, bool(r.url))
            continue
        backdrops = extract_backdrops(r.events, dictionary)
        if backdrops:
            n_sessions += 1
        for b in backdrops:
            entries.append(CorpusEntry(session_id=r.session_id, url=r.url, backdrop=b))

    dim = dictionary.size()
    for e in entries:
        pad_vector(e.backdrop.vector, dim)

    log.info("assembled %d backdrops from %d sessions over %d features", len(entries), n_sessions, dim)
    return entries
