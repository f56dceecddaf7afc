"""summary.py

What it does:
- Summarizes clusters for humans: size, distinct sessions, dominant features.
- Builds a small networkx graph (cluster hubs + backdrop leaves) for the dashboard.

Main entrypoints:
- summarize_clusters(entries, result, dictionary, top_k=8) -> List[dict]
- build_cluster_graph(entries, result) -> nx.Graph
- cluster_graph_stats(G) -> Dict[str, int]
"""

from __future__ import annotations

from typing import Dict, List, Optional

import networkx as nx

from sampler.vectorize.features import FeatureDictionary

from .corpus import CorpusEntry
from .kmeans import KMeansResult
from .vectors import euclidean, top_dims


def summarize_clusters(
    entries: List[CorpusEntry],
    result: KMeansResult,
    dictionary: FeatureDictionary,
    *,
    top_k: int = 8,
) -> List[dict]:
    summaries: List[dict] = []
    for cid, idxs in enumerate(result.clusters):
        centroid = result.centroids[cid]
        sessions = sorted({entries[i].session_id for i in idxs})
        summaries.append(
            {
                "cluster_id": cid,
                "size": len(idxs),
                "n_sessions": len(sessions),
                "sessions": sessions,
                "top_features": [
                    {"feature": dictionary.describe(d), "mean_count": round(w, 3)}
                    for d, w in top_dims(centroid, k=top_k)
                ],
            }
        )
    return summaries


def build_cluster_graph(
    entries: List[CorpusEntry],
    result: KMeansResult,
    *,
    representatives: Optional[Dict[int, int]] = None,
) -> nx.Graph:
    """Hub node per cluster (c:<id>), leaf per backdrop (b:<index>).

    Edge weight is the backdrop's Euclidean distance to its cluster centroid.
    `representatives` maps cluster id -> corpus index of its picked backdrop.
    """
    representatives = representatives or {}
    G = nx.Graph()
    for cid, idxs in enumerate(result.clusters):
        hub = f"c:{cid}"
        G.add_node(hub, ntype="cluster", size=len(idxs))
        centroid = result.centroids[cid]
        for i in idxs:
            e = entries[i]
            leaf = f"b:{i}"
            G.add_node(
                leaf,
                ntype="backdrop",
                session_id=e.session_id,
                timestamp=int(e.timestamp),
                representative=representatives.get(cid) == i,
            )
            G.add_edge(hub, leaf, weight=float(euclidean(e.vector, centroid)), etype="member")
    return G


def cluster_graph_stats(G: nx.Graph) -> Dict[str, int]:
    clusters = [n for n, d in G.nodes(data=True) if d.get("ntype") == "cluster"]
    backdrops = [n for n, d in G.nodes(data=True) if d.get("ntype") == "backdrop"]
    sessions = {G.nodes[n].get("session_id") for n in backdrops}
    return {
        "nodes": G.number_of_nodes(),
        "edges": G.number_of_edges(),
        "clusters": len(clusters),
        "backdrops": len(backdrops),
        "sessions": len(sessions),
    }


def graph_to_dict(G: nx.Graph) -> dict:
    return {
        "nodes": [{"id": n, **d} for n, d in G.nodes(data=True)],
        "edges": [{"source": u, "target": v, **d} for u, v, d in G.edges(data=True)],
    }


def graph_from_dict(data: dict) -> nx.Graph:
    G = nx.Graph()
    for n in data.get("nodes", []):
        attrs = {k: v for k, v in n.items() if k != "id"}
        G.add_node(n["id"], **attrs)
    for e in data.get("edges", []):
        attrs = {k: v for k, v in e.items() if k not in {"source", "target"}}
        G.add_edge(e["source"], e["target"], **attrs)
    return G
