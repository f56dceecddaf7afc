"""kmeans.py

What it does:
- Partitions equal-length count vectors into at most k clusters with k-means,
  seeded k-means++ style.

Main entrypoint:
- kmeans_pp(vectors, k, rng, max_iterations=100) -> KMeansResult

Notes:
- Seeding: first centroid uniform over points, each next one drawn with probability
  proportional to its squared distance to the nearest chosen centroid. Seeding stops
  early when every point already coincides with a centroid, so identical vectors or a
  corpus smaller than k give fewer clusters. That is a normal result, not an error.
- Distance is plain Euclidean over raw counts. No weighting: frequent generic tags
  (div, span) dominate. Known bias, kept on purpose.
- Ties go to the lowest centroid index; with a seeded `random.Random` the whole run is
  reproducible.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from sampler.log import get_logger

from .vectors import mean_vector, squared_distance

log = get_logger("kmeans")


class VectorLengthMismatch(RuntimeError):
    """Vectors of different length reached clustering: corpus padding was skipped."""


@dataclass
class KMeansResult:
    clusters: List[List[int]]  # point indices, non-empty clusters only
    centroids: List[List[float]]  # aligned with clusters
    assignment: List[int] = field(default_factory=list)  # point -> position in clusters
    iterations: int = 0
    inertia: float = 0.0
    converged: bool = True


def check_equal_lengths(vectors: Sequence[Sequence[float]]) -> int:
    dims = {len(v) for v in vectors}
    if len(dims) > 1:
        raise VectorLengthMismatch(f"vectors have differing lengths: {sorted(dims)}")
    return dims.pop() if dims else 0


def seed_centroids(vectors: Sequence[Sequence[float]], k: int, rng: random.Random) -> List[List[float]]:
    n = len(vectors)
    first = rng.randrange(n)
    centroids: List[List[float]] = [[float(x) for x in vectors[first]]]
    d2 = [squared_distance(v, centroids[0]) for v in vectors]

    while len(centroids) < k:
        total = sum(d2)
        if total <= 0.0:
            break

        r = rng.random() * total
        acc = 0.0
        pick = -1
        for i, w in enumerate(d2):
            if w <= 0.0:
                continue
            pick = i
            acc += w
            if acc > r:
                break

        c = [float(x) for x in vectors[pick]]
        centroids.append(c)
        d2 = [min(d, squared_distance(v, c)) for d, v in zip(d2, vectors)]

    return centroids


def _assign(vectors: Sequence[Sequence[float]], centroids: List[List[float]]) -> Tuple[List[int], float]:
    labels: List[int] = []
    inertia = 0.0
    for v in vectors:
        best_j = 0
        best_d = squared_distance(v, centroids[0])
        for j in range(1, len(centroids)):
            d = squared_distance(v, centroids[j])
            if d < best_d:
                best_d = d
                best_j = j
        labels.append(best_j)
        inertia += best_d
    return labels, inertia


def _members(labels: List[int], n_centroids: int) -> List[List[int]]:
    groups: List[List[int]] = [[] for _ in range(n_centroids)]
    for i, j in enumerate(labels):
        groups[j].append(i)
    return groups


def kmeans_pp(
    vectors: Sequence[Sequence[float]],
    k: int,
    rng: random.Random,
    *,
    max_iterations: int = 100,
) -> KMeansResult:
    if k <= 0:
        raise ValueError(f"k must be positive, got {k}")

    check_equal_lengths(vectors)
    if not vectors:
        return KMeansResult(clusters=[], centroids=[])

    centroids = seed_centroids(vectors, k, rng)
    labels, inertia = _assign(vectors, centroids)
    best_labels, best_inertia = labels, inertia

    iterations = 0
    converged = False
    while iterations < max_iterations:
        iterations += 1
        groups = _members(labels, len(centroids))
        for j, idxs in enumerate(groups):
            # empty cluster keeps its previous centroid
            if idxs:
                centroids[j] = mean_vector([vectors[i] for i in idxs])

        new_labels, inertia = _assign(vectors, centroids)
        if inertia < best_inertia:
            best_labels, best_inertia = new_labels, inertia
        if new_labels == labels:
            converged = True
            break
        labels = new_labels

    if not converged:
        log.info("k-means stopped at iteration cap (%d)", max_iterations)

    clusters = [g for g in _members(best_labels, len(centroids)) if g]
    assignment = [0] * len(vectors)
    for pos, idxs in enumerate(clusters):
        for i in idxs:
            assignment[i] = pos

    log.info(
        "k-means: %d points -> %d clusters (k=%d, iterations=%d, inertia=%.2f)",
        len(vectors), len(clusters), k, iterations, best_inertia,
    )
    return KMeansResult(
        clusters=clusters,
        centroids=[mean_vector([vectors[i] for i in idxs]) for idxs in clusters],
        assignment=assignment,
        iterations=iterations,
        inertia=float(best_inertia),
        converged=converged,
    )
