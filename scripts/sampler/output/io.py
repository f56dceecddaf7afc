from __future__ import annotations
import base64
import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

from sampler.cluster.representatives import Representative

def save_json(path: Path, obj: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")

def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))

def write_snapshots(blob_dir: Path, reps: List[Representative]) -> List[Path]:
    """One JSON document per representative snapshot: <blob_dir>/<i>.json (lossless)."""
    blob_dir.mkdir(parents=True, exist_ok=True)
    paths: List[Path] = []
    for i, r in enumerate(reps):
        p = blob_dir / f"{i}.json"
        p.write_text(json.dumps(r.snapshot, ensure_ascii=False), encoding="utf-8")
        paths.append(p)
    return paths

def encode_summary(reps: List[Representative]) -> str:
    """base64(JSON [{timestamp, url}, ...]), as the viewer expects in ?replays=."""
    payload = json.dumps([r.to_summary() for r in reps], separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")

def decode_summary(param: str) -> List[Dict[str, Any]]:
    raw = base64.b64decode(unquote(param).encode("ascii"))
    return json.loads(raw.decode("utf-8"))

def viewer_url(base_url: str, reps: List[Representative]) -> str:
    return f"{base_url.rstrip('/')}?replays={quote(encode_summary(reps), safe='')}"

def representatives_payload(reps: List[Representative]) -> List[dict]:
    return [
        {
            "index": i,
            "cluster_id": r.cluster_id,
            "session_id": r.session_id,
            "timestamp": r.timestamp,
            "url": r.url,
            "snapshot_file": f"blobs/{i}.json",
        }
        for i, r in enumerate(reps)
    ]

def write_report_md(
    path: Path,
    reps: List[Representative],
    clusters: List[dict],
    stats: Dict[str, int],
    *,
    link: Optional[str] = None,
) -> None:
    lines: List[str] = []
    lines.append("# Representative Sessions")
    lines.append("")
    lines.append(f"- **Sessions with backdrops:** {stats.get('sessions', 0)}")
    lines.append(f"- **Backdrops clustered:** {stats.get('backdrops', 0)}")
    lines.append(f"- **Features:** {stats.get('features', 0)}")
    lines.append(f"- **Clusters:** {stats.get('clusters', 0)}")
    if link:
        lines.append(f"- **Viewer:** {link}")
    lines.append("")

    by_cluster = {r.cluster_id: (i, r) for i, r in enumerate(reps)}
    for c in clusters:
        cid = c["cluster_id"]
        lines.append(f"## Cluster {cid} (size={c['size']}, sessions={c['n_sessions']})")
        lines.append("")

        picked = by_cluster.get(cid)
        if picked:
            i, r = picked
            lines.append(f"Representative: session `{r.session_id}` at {r.timestamp} ([snapshot](blobs/{i}.json))")
            lines.append("")
            lines.append(f"- {r.url}")
            lines.append("")

        tf = c.get("top_features", [])
        if tf:
            lines.append("**Top features**")
            for f in tf:
                lines.append(f"- {f['feature']} (mean={f['mean_count']})")
            lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")
