"""Tests for the corpus-wide longest LCS scan."""

import threading

import pytest

from conftest import BAUM, ESSEN, OBJEKT, VERZEHREN, ZIERAPFEL, small_network

from wordnet_graph import (
    ROOT_PATHS,
    CorpusLcsScanner,
    EntityGraphView,
    LcsFinder,
    ScanCancelledError,
    WordCategory,
    lcs_distance,
)
from wordnet_graph.scanner import hypernym_reach

NOUN = WordCategory.NOUN


class TestScan:
    def test_longest_nouns(self, finder):
        result = CorpusLcsScanner(finder).scan(NOUN)
        assert result.distance == 12
        assert {r.node.id for r in result.records} == {OBJEKT}
        assert len(result.records) == 2
        for record in result.records:
            assert record.path_a.first.id == ZIERAPFEL
            assert record.path_b.first.id == BAUM

    def test_every_pair_counted(self, finder):
        result = CorpusLcsScanner(finder).scan(NOUN)
        assert result.pairs_evaluated + result.pairs_skipped == 16 * 15 // 2

    def test_verbs(self, finder):
        result = CorpusLcsScanner(finder).scan(WordCategory.VERB)
        assert result.distance == 1
        (record,) = result.records
        assert record.path_a.ids == (ESSEN,)
        assert record.path_b.ids == (VERZEHREN, ESSEN)

    def test_category_by_name(self, finder):
        assert CorpusLcsScanner(finder).scan("adjective").distance == 2

    def test_empty_category(self):
        finder = LcsFinder(EntityGraphView(small_network({2: [1]})))
        result = CorpusLcsScanner(finder).scan(WordCategory.VERB)
        assert result.distance is None
        assert result.records == frozenset()

    def test_maximum_over_all_pairs(self, finder, view):
        """No evaluated pair has a larger LCS distance than the result."""
        result = CorpusLcsScanner(finder, prune=False).scan(NOUN)
        synsets = view.synsets(NOUN)
        best = max(
            lcs_distance(finder.find(a, b)) or 0
            for i, a in enumerate(synsets)
            for b in synsets[i + 1:]
        )
        assert result.distance == best


class TestExactness:
    def test_pruning_never_changes_result(self, finder):
        pruned = CorpusLcsScanner(finder, prune=True).scan(NOUN)
        full = CorpusLcsScanner(finder, prune=False).scan(NOUN)
        assert pruned.records == full.records
        assert pruned.distance == full.distance
        assert full.pairs_skipped == 0
        assert pruned.pairs_skipped > 0

    @pytest.mark.parametrize("workers", [2, 3, 8])
    def test_workers_agree(self, finder, workers):
        single = CorpusLcsScanner(finder).scan(NOUN)
        parallel = CorpusLcsScanner(finder, workers=workers).scan(NOUN)
        assert parallel.records == single.records
        assert parallel.distance == single.distance

    def test_strategies_agree(self, finder):
        frontier = CorpusLcsScanner(finder).scan(NOUN)
        root_paths = CorpusLcsScanner(finder, strategy=ROOT_PATHS).scan(NOUN)
        assert frontier.records == root_paths.records

    def test_invalid_workers(self, finder):
        with pytest.raises(ValueError):
            CorpusLcsScanner(finder, workers=0)


class TestCancellation:
    @pytest.mark.parametrize("workers", [1, 3])
    def test_cancelled_scan(self, finder, workers):
        event = threading.Event()
        event.set()
        scanner = CorpusLcsScanner(finder, workers=workers)
        with pytest.raises(ScanCancelledError):
            scanner.scan(NOUN, cancel_event=event)

    def test_cancel_during_scan(self, view):
        event = threading.Event()

        class StoppingFinder(LcsFinder):
            calls = 0

            def find(self, a, b, strategy="frontier"):
                StoppingFinder.calls += 1
                if StoppingFinder.calls == 5:
                    event.set()
                return super().find(a, b, strategy)

        scanner = CorpusLcsScanner(StoppingFinder(view), prune=False)
        with pytest.raises(ScanCancelledError):
            scanner.scan(NOUN, cancel_event=event)
        assert StoppingFinder.calls == 5

    def test_unset_event_completes(self, finder):
        event = threading.Event()
        result = CorpusLcsScanner(finder).scan(NOUN, cancel_event=event)
        assert result.distance == 12


class TestHypernymReach:
    def test_reach(self, view):
        assert hypernym_reach(view, view.synset(ZIERAPFEL)) == 7
        assert hypernym_reach(view, view.root) == 0

    def test_reach_bounds_distance(self, finder, view):
        synsets = view.synsets(NOUN)
        for i, a in enumerate(synsets):
            for b in synsets[i + 1:]:
                distance = lcs_distance(finder.find(a, b))
                assert distance <= hypernym_reach(view, a) + hypernym_reach(view, b)
