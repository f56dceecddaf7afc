"""Tests for artifact writing and the viewer summary parameter."""

import base64
import json
from urllib.parse import unquote

from conftest import document, el

from sampler.cluster.representatives import Representative
from sampler.output.io import (
    decode_summary,
    encode_summary,
    load_json,
    representatives_payload,
    save_json,
    viewer_url,
    write_report_md,
    write_snapshots,
)


def _reps():
    snap = document(el("div", el("img", src="/a.png", style="width: 10px"), cls="card"))
    return [
        Representative(0, 3, "s1", "https://r/s1.gz", 1700000000000, snap, [1, 1]),
        Representative(1, 7, "s2", "https://r/s2.gz?sig=a+b/c", 1700000005000, document(el("span")), [0, 0, 1]),
    ]


class TestSummary:
    def test_encode_is_base64_json_of_timestamp_and_url(self):
        raw = json.loads(base64.b64decode(encode_summary(_reps())))
        assert raw == [
            {"timestamp": 1700000000000, "url": "https://r/s1.gz"},
            {"timestamp": 1700000005000, "url": "https://r/s2.gz?sig=a+b/c"},
        ]

    def test_viewer_url_param_decodes(self):
        link = viewer_url("http://localhost:3000/", _reps())
        assert link.startswith("http://localhost:3000?replays=")
        param = link.split("replays=", 1)[1]
        assert "/" not in param and "+" not in param and "=" not in param
        assert decode_summary(param)[1]["url"] == "https://r/s2.gz?sig=a+b/c"
        assert decode_summary(unquote(param)) == decode_summary(param)

    def test_empty(self):
        assert decode_summary(encode_summary([])) == []


class TestArtifacts:
    def test_snapshots_written_losslessly(self, tmp_path):
        reps = _reps()
        paths = write_snapshots(tmp_path / "blobs", reps)
        assert [p.name for p in paths] == ["0.json", "1.json"]
        assert load_json(paths[0]) == reps[0].snapshot

    def test_payload_and_report(self, tmp_path):
        reps = _reps()
        save_json(tmp_path / "representatives.json", representatives_payload(reps))
        payload = load_json(tmp_path / "representatives.json")
        assert payload[1]["snapshot_file"] == "blobs/1.json"
        assert payload[1]["session_id"] == "s2"

        clusters = [
            {"cluster_id": 0, "size": 4, "n_sessions": 2, "sessions": ["s1", "s3"],
             "top_features": [{"feature": "div.card", "mean_count": 1.0}]},
            {"cluster_id": 1, "size": 1, "n_sessions": 1, "sessions": ["s2"], "top_features": []},
        ]
        stats = {"sessions": 3, "backdrops": 5, "features": 3, "clusters": 2}
        write_report_md(tmp_path / "REPORT.md", reps, clusters, stats, link="http://v?replays=x")

        report = (tmp_path / "REPORT.md").read_text(encoding="utf-8")
        assert "## Cluster 0 (size=4, sessions=2)" in report
        assert "- div.card (mean=1.0)" in report
        assert "blobs/1.json" in report
        assert "http://v?replays=x" in report
