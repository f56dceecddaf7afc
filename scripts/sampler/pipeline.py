"""pipeline.py

What it does:
- Runs the core end to end for one corpus: vectorize all sessions, pad, cluster, pick
  one representative per cluster.

Main entrypoint:
- select_representatives(records, k=5, rng=..., max_iterations=100) -> PipelineRun

Notes:
- A fresh FeatureDictionary is created per call, so indices never leak between runs.
- All sessions must be decoded before this is called; nothing is clustered incrementally.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sampler.cluster.corpus import CorpusEntry, assemble_corpus
from sampler.cluster.kmeans import KMeansResult, kmeans_pp
from sampler.cluster.representatives import Representative, sample_representatives
from sampler.ingest.sessions import SessionRecord
from sampler.vectorize.features import FeatureDictionary


@dataclass
class PipelineRun:
    dictionary: FeatureDictionary
    entries: List[CorpusEntry]
    result: KMeansResult
    representatives: List[Representative]


def select_representatives(
    records: Iterable[SessionRecord],
    *,
    k: int = 5,
    rng: Optional[random.Random] = None,
    max_iterations: int = 100,
) -> PipelineRun:
    rng = rng or random.Random()
    dictionary = FeatureDictionary()

    entries = assemble_corpus(records, dictionary)
    result = kmeans_pp([e.vector for e in entries], k, rng, max_iterations=max_iterations)
    reps = sample_representatives(entries, result, rng)

    return PipelineRun(dictionary=dictionary, entries=entries, result=result, representatives=reps)
