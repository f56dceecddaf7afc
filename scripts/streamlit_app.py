from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import networkx as nx
import pandas as pd
import streamlit as st
import streamlit.components.v1 as components
from pyvis.network import Network

from sampler.cluster.summary import graph_from_dict
from sampler.output.io import decode_summary, load_json


# -----------------------------
# Helpers
# -----------------------------

def safe_float(x, default=0.0) -> float:
    try:
        return float(x)
    except (TypeError, ValueError):
        return float(default)

def cluster_subgraph(G: nx.Graph, cluster_id: int, max_leaves: int = 400) -> nx.Graph:
    """Hub + its closest backdrops (smallest distance first)."""
    hub = f"c:{cluster_id}"
    if hub not in G:
        return nx.Graph()
    leaves = sorted(G.neighbors(hub), key=lambda n: safe_float(G[hub][n].get("weight", 0.0)))
    # always keep the representative
    reps = [n for n in leaves if G.nodes[n].get("representative")]
    keep = set(leaves[:max_leaves]) | set(reps) | {hub}
    return G.subgraph(keep).copy()

def pyvis_html(G: nx.Graph, height_px: int = 720) -> str:
    """Render clusters and their backdrops with PyVis and return HTML."""
    net = Network(height=f"{height_px}px", width="100%", bgcolor="#0b0b0b", font_color="#f3f3f3")

    for n, data in G.nodes(data=True):
        t = data.get("ntype", "unknown")
        if t == "cluster":
            net.add_node(n, label=n, title=f"<b>{n}</b><br/>size: {data.get('size', 0)}", shape="star", size=30)
            continue

        title_lines = [
            f"<b>{n}</b>",
            f"session: {data.get('session_id', '')}",
            f"timestamp: {data.get('timestamp', '')}",
        ]
        is_rep = bool(data.get("representative"))
        if is_rep:
            title_lines.append("representative")
        net.add_node(
            n,
            label="★" if is_rep else "",
            title="<br/>".join(title_lines),
            shape="diamond" if is_rep else "dot",
            size=18 if is_rep else 8,
        )

    for u, v, d in G.edges(data=True):
        w = safe_float(d.get("weight", 0.0))
        # closer to centroid => stronger spring
        net.add_edge(u, v, value=1.0 / (1.0 + w), title=f"distance={w:.2f}")

    net.set_options(
        """
        var options = {
          "physics": {
            "enabled": true,
            "solver": "forceAtlas2Based",
            "stabilization": { "enabled": true, "iterations": 400 }
          },
          "interaction": { "hover": true, "tooltipDelay": 120, "navigationButtons": true }
        }
        """
    )
    return net.generate_html()


@st.cache_data(show_spinner=False)
def load_artifacts(artifacts_dir: str) -> Tuple[dict, List[dict], dict]:
    ad = Path(artifacts_dir)
    clusters = load_json(ad / "clusters.json")
    reps = load_json(ad / "representatives.json")
    graph = load_json(ad / "cluster_graph.json")
    return clusters, reps, graph


@st.cache_data(show_spinner=False)
def load_snapshot(artifacts_dir: str, snapshot_file: str) -> dict:
    return load_json(Path(artifacts_dir) / snapshot_file)


# -----------------------------
# UI
# -----------------------------

st.set_page_config(page_title="Representative Sessions", layout="wide")

st.title("Representative Sessions")
st.caption("Clusters of structurally similar DOM snapshots and the session picked for each.")

with st.sidebar:
    st.header("Inputs")
    artifacts_dir = st.text_input("Artifacts dir", value="artifacts")
    max_leaves = st.slider("Max backdrops per cluster graph", 50, 1000, 400, step=50)
    if st.button("Reload", type="primary"):
        st.cache_data.clear()

if not Path(artifacts_dir).exists():
    st.error(f"Cannot find artifacts dir: {artifacts_dir}")
    st.stop()

with st.spinner("Loading artifacts…"):
    clusters_doc, reps, graph_doc = load_artifacts(artifacts_dir)
    G = graph_from_dict(graph_doc)

stats = clusters_doc.get("stats", {})

tab1, tab2, tab3 = st.tabs(["Overview", "Clusters", "Viewer link"])

# -----------------------------
# Overview
# -----------------------------
with tab1:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Sessions", f"{stats.get('sessions', 0):,}")
    c2.metric("Backdrops", f"{stats.get('backdrops', 0):,}")
    c3.metric("Features", f"{stats.get('features', 0):,}")
    c4.metric("Clusters", f"{stats.get('clusters', 0):,}")

    comm_df = pd.DataFrame(clusters_doc.get("clusters", []))
    if not comm_df.empty:
        st.subheader("Cluster sizes")
        st.bar_chart(comm_df.set_index("cluster_id")["size"])

    st.subheader("Representatives")
    st.dataframe(pd.DataFrame(reps), use_container_width=True)

    st.caption(
        f"k-means: {clusters_doc.get('iterations', 0)} iterations, "
        f"converged={clusters_doc.get('converged')}, inertia={safe_float(clusters_doc.get('inertia')):.2f}"
    )

# -----------------------------
# Clusters
# -----------------------------
with tab2:
    cl = clusters_doc.get("clusters", [])
    if not cl:
        st.warning("No clusters found.")
        st.stop()

    cid = st.selectbox("Select cluster_id", options=[c["cluster_id"] for c in cl], index=0)
    row = next(c for c in cl if c["cluster_id"] == cid)
    st.write(f"**Size:** {int(row['size'])} | **Sessions:** {int(row['n_sessions'])}")

    cL, cR = st.columns([1, 1])
    with cL:
        st.markdown("**Top features (mean count)**")
        st.dataframe(pd.DataFrame(row.get("top_features", [])), use_container_width=True)
    with cR:
        st.markdown("**Sessions**")
        st.write(row.get("sessions", []))

    st.divider()
    st.subheader("Cluster graph (interactive)")
    H = cluster_subgraph(G, int(cid), max_leaves=max_leaves)
    if H.number_of_nodes() == 0:
        st.info("No nodes in this cluster.")
    else:
        components.html(pyvis_html(H), height=760, scrolling=True)

    rep = next((r for r in reps if r.get("cluster_id") == cid), None)
    if rep:
        st.subheader("Representative snapshot")
        st.write(f"session `{rep['session_id']}` at {rep['timestamp']}: {rep['url']}")
        st.json(load_snapshot(artifacts_dir, rep["snapshot_file"]), expanded=False)

# -----------------------------
# Viewer link
# -----------------------------
with tab3:
    link = clusters_doc.get("viewer_url", "")
    st.markdown(f"[Open replay viewer]({link})")

    param = st.text_input("Decode a ?replays= parameter", value=link.split("replays=", 1)[-1] if link else "")
    if param:
        try:
            st.dataframe(pd.DataFrame(decode_summary(param)), use_container_width=True)
        except ValueError as exc:
            st.error(f"Not a valid summary parameter: {exc}")
