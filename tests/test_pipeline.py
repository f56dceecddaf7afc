"""End-to-end tests over the whole sampling pipeline."""

import random

from conftest import document, el, session

from sampler.ingest.sessions import SessionRecord
from sampler.pipeline import select_representatives


def _two_sessions():
    a = session("A", [document(el("body", el("div", cls="card"), el("div", cls="card")))])
    b = session("B", [document(el("body", *[el("span", cls="label") for _ in range(5)]))])
    return [a, b]


class TestSelectRepresentatives:
    def test_two_dissimilar_sessions_two_representatives(self):
        run = select_representatives(_two_sessions(), k=2, rng=random.Random(0))

        assert len(run.representatives) == 2
        assert {r.session_id for r in run.representatives} == {"A", "B"}
        a = next(e for e in run.entries if e.session_id == "A")
        b = next(e for e in run.entries if e.session_id == "B")
        assert a.vector[run.dictionary.lookup("div", "card")] == 2
        assert b.vector[run.dictionary.lookup("span", "label")] == 5

    def test_fresh_dictionary_per_run(self):
        first = select_representatives(_two_sessions(), k=2, rng=random.Random(0))
        second = select_representatives(_two_sessions(), k=2, rng=random.Random(0))
        assert first.dictionary is not second.dictionary
        assert first.dictionary.features == second.dictionary.features
        assert [e.vector for e in first.entries] == [e.vector for e in second.entries]

    def test_reproducible_with_seed(self):
        records = []
        for i in range(12):
            n = (i % 3) + 1
            records.append(session(f"s{i}", [document(el("ul", *[el("li", cls=f"item{n}") for _ in range(n * 3)]))]))
        a = select_representatives(records, k=3, rng=random.Random(21))
        b = select_representatives(records, k=3, rng=random.Random(21))
        assert a.result.clusters == b.result.clusters
        assert [r.corpus_index for r in a.representatives] == [r.corpus_index for r in b.representatives]

    def test_small_corpus_gives_fewer_representatives(self):
        run = select_representatives(_two_sessions(), k=5, rng=random.Random(0))
        assert len(run.representatives) == 2

    def test_empty_corpus(self):
        failed = [SessionRecord("x", "https://r/x", None)]
        run = select_representatives(failed, k=5, rng=random.Random(0))
        assert run.entries == []
        assert run.representatives == []

    def test_padding_invariant_holds_before_clustering(self):
        records = _two_sessions() + [session("C", [document(el("table", el("tr")))])]
        run = select_representatives(records, k=2, rng=random.Random(3))
        size = run.dictionary.size()
        assert all(len(e.vector) == size for e in run.entries)
