from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass
class SamplerConfig:
    # Number of clusters requested; small corpora may yield fewer.
    k: int = 5
    max_iterations: int = 100

    # Fraction of loaded sessions that get vectorized at all.
    sample_rate: float = 0.5

    # None => nondeterministic run
    seed: Optional[int] = None

    # Front-end that replays the representatives
    viewer_base_url: str = "http://localhost:3000"

    # Report / dashboard detail
    top_features_per_cluster: int = 8
