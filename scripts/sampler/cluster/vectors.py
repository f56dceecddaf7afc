from __future__ import annotations

import math
from typing import List, Sequence, Tuple


def squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return float(sum((float(x) - float(y)) ** 2 for x, y in zip(a, b)))

def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(squared_distance(a, b))

def vec_add(acc: List[float], v: Sequence[float], w: float = 1.0) -> None:
    for i, x in enumerate(v):
        acc[i] += float(w) * float(x)

def vec_scale(v: Sequence[float], s: float) -> List[float]:
    return [float(x) * float(s) for x in v]

def mean_vector(vs: List[Sequence[float]]) -> List[float]:
    if not vs:
        return []
    acc = [0.0] * len(vs[0])
    for v in vs:
        vec_add(acc, v)
    return vec_scale(acc, 1.0 / float(len(vs)))

def top_dims(v: Sequence[float], k: int = 8) -> List[Tuple[int, float]]:
    """Largest non-zero coordinates, ties by lower index."""
    nz = [(i, float(x)) for i, x in enumerate(v) if x]
    nz.sort(key=lambda t: (-t[1], t[0]))
    return nz[:k]
