"""main.py

Representative session sampler.

What it does:
- Loads decoded rrweb session records from a manifest JSON
- Randomly samples which sessions to process
- Vectorizes every full DOM snapshot over a shared (tag, class, src) feature dictionary
- Clusters the snapshots with k-means++ and picks one random representative per cluster
- Writes artifacts + prints a viewer link

Outputs (in --out):
- blobs/<i>.json          raw snapshot tree of representative i
- representatives.json    cluster/session/timestamp/url per representative
- clusters.json           config, stats, per-cluster summaries
- cluster_graph.json      cluster hubs + backdrop leaves (dashboard)
- REPORT.md

Usage:
  python scripts/main.py --sessions sessions.json --out artifacts -k 5 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import asdict
from pathlib import Path

from sampler.cluster.summary import (
    build_cluster_graph,
    cluster_graph_stats,
    graph_to_dict,
    summarize_clusters,
)
from sampler.config import SamplerConfig
from sampler.ingest.sessions import load_sessions, sample_sessions
from sampler.log import setup_logger
from sampler.output.io import (
    representatives_payload,
    save_json,
    viewer_url,
    write_report_md,
    write_snapshots,
)
from sampler.pipeline import select_representatives


def main() -> None:
    ap = argparse.ArgumentParser(description="Pick structurally representative sessions out of a replay corpus")
    ap.add_argument("--sessions", dest="sessions_path", type=str, default="sessions.json", help="Session manifest JSON")
    ap.add_argument("--out", dest="out_dir", type=str, default="artifacts", help="Output directory")
    ap.add_argument("-k", "--clusters", dest="k", type=int, default=5, help="Number of clusters requested")
    ap.add_argument("--sample-rate", type=float, default=0.5, help="Fraction of sessions to process")
    ap.add_argument("--seed", type=int, default=None, help="Random seed (reproducible runs)")
    ap.add_argument("--max-iterations", type=int, default=100)
    ap.add_argument("--top-features", type=int, default=8, help="Features listed per cluster")
    ap.add_argument("--viewer-url", type=str, default="http://localhost:3000", help="Replay viewer base URL")
    ap.add_argument("--log-level", type=str, default="INFO")
    ap.add_argument("--log-file", type=str, default="")
    args = ap.parse_args()

    cfg = SamplerConfig(
        k=int(args.k),
        max_iterations=int(args.max_iterations),
        sample_rate=float(args.sample_rate),
        seed=args.seed,
        viewer_base_url=str(args.viewer_url),
        top_features_per_cluster=int(args.top_features),
    )

    log = setup_logger(
        log_file=args.log_file or None,
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
    )

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    rng = random.Random(cfg.seed)

    records = load_sessions(args.sessions_path)
    records = sample_sessions(records, cfg.sample_rate, rng)

    run = select_representatives(records, k=cfg.k, rng=rng, max_iterations=cfg.max_iterations)
    reps = run.representatives
    if not reps:
        log.warning("no full snapshots found; nothing to sample")

    clusters = summarize_clusters(run.entries, run.result, run.dictionary, top_k=cfg.top_features_per_cluster)
    G = build_cluster_graph(run.entries, run.result, representatives={r.cluster_id: r.corpus_index for r in reps})
    stats = cluster_graph_stats(G)
    stats["features"] = run.dictionary.size()

    link = viewer_url(cfg.viewer_base_url, reps)

    write_snapshots(out_dir / "blobs", reps)
    save_json(out_dir / "representatives.json", representatives_payload(reps))
    save_json(
        out_dir / "clusters.json",
        {
            "config": asdict(cfg),
            "stats": stats,
            "iterations": run.result.iterations,
            "converged": run.result.converged,
            "inertia": run.result.inertia,
            "clusters": clusters,
            "viewer_url": link,
        },
    )
    save_json(out_dir / "cluster_graph.json", graph_to_dict(G))
    write_report_md(out_dir / "REPORT.md", reps, clusters, stats, link=link)

    print(f"Wrote: {out_dir / 'representatives.json'}")
    print(f"Wrote: {out_dir / 'REPORT.md'}")
    print(f"Open: {link}")


if __name__ == "__main__":
    main()
