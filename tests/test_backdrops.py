"""Tests for backdrop extraction from rrweb events."""

from conftest import el, full_snapshot, incremental, meta_event

from sampler.vectorize.backdrops import extract_backdrops, is_full_snapshot


class TestExtractBackdrops:
    def test_one_backdrop_per_full_snapshot_in_order(self, dictionary):
        a = el("div", cls="a")
        b = el("span", cls="b")
        events = [meta_event(1), full_snapshot(a, 10), incremental(11), full_snapshot(b, 20), incremental(21)]

        out = extract_backdrops(events, dictionary)

        assert [bd.timestamp for bd in out] == [10, 20]
        assert out[0].snapshot is a
        assert out[1].snapshot is b
        assert out[0].vector == [1]
        assert out[1].vector == [0, 1]

    def test_no_full_snapshots(self, dictionary):
        assert extract_backdrops([meta_event(), incremental()], dictionary) == []
        assert dictionary.size() == 0

    def test_full_snapshot_without_node_is_skipped(self, dictionary):
        events = [{"type": 2, "timestamp": 5, "data": {}}, {"type": 2, "timestamp": 6}]
        assert extract_backdrops(events, dictionary) == []

    def test_is_full_snapshot(self):
        assert is_full_snapshot({"type": 2})
        assert not is_full_snapshot({"type": 3})
        assert not is_full_snapshot("nope")

    def test_unreadable_timestamp_is_skipped_before_registration(self, dictionary):
        events = [
            {"type": 2, "timestamp": "n/a", "data": {"node": el("div", cls="lost")}},
            full_snapshot(el("span"), 30),
        ]
        out = extract_backdrops(events, dictionary)

        assert [bd.timestamp for bd in out] == [30]
        assert dictionary.lookup("div", "lost") is None
        assert dictionary.size() == 1

    def test_numeric_string_timestamp_is_accepted(self, dictionary):
        events = [{"type": 2, "timestamp": "42", "data": {"node": el("div")}}]
        assert [bd.timestamp for bd in extract_backdrops(events, dictionary)] == [42]
