"""Tests for the SemanticGraph entry point."""

import threading

import networkx as nx
import pytest

from conftest import (
    APFEL,
    BAUM,
    BIRNE,
    FIXTURES,
    GNROOT,
    KERNOBST,
    OBJEKT,
    ZIERAPFEL,
)

from wordnet_graph import (
    ROOT_PATHS,
    ConceptualRelation,
    IncomparableNodesError,
    ScanCancelledError,
    SemanticGraph,
    WordCategory,
)


class TestConstruction:
    def test_from_yaml(self, semantic):
        assert semantic.root.id == GNROOT
        assert semantic.synset(APFEL).forms == ("Apfel",)
        assert semantic.lexunit(80007).synset_id == APFEL
        assert "SemanticGraph" in repr(semantic)

    def test_from_lmf(self):
        graph = SemanticGraph.from_lmf(FIXTURES / "fruit.xml", "test-fruit-01-n")
        assert graph.root.key == "test-fruit-01-n"
        assert graph.validate_hierarchy()  # adjectives have no hypernym


class TestQueries:
    def test_related(self, semantic):
        assert semantic.related(APFEL, ConceptualRelation.HYPERONYMY) == (
            semantic.synset(KERNOBST),
        )

    def test_all_paths(self, semantic):
        result = semantic.all_paths(ZIERAPFEL, GNROOT)
        assert len(result.paths) == 2
        assert {p.length for p in result.paths} == {7}

    def test_paths_to_root(self, semantic):
        assert semantic.paths_to_root(ZIERAPFEL) == (
            semantic.all_paths(ZIERAPFEL, GNROOT).paths
        )
        assert semantic.root_path_index is semantic.root_path_index

    def test_least_common_subsumers(self, semantic):
        (record,) = semantic.least_common_subsumers(APFEL, BIRNE)
        assert record.node.id == KERNOBST
        assert semantic.least_common_subsumers(
            APFEL, BAUM, strategy=ROOT_PATHS
        ) == semantic.verify_lcs(APFEL, BAUM)

    def test_incomparable(self, semantic):
        with pytest.raises(IncomparableNodesError):
            semantic.least_common_subsumers(APFEL, 60001)

    def test_validate(self, semantic):
        assert semantic.validate() == []


class TestLongestLcs:
    def test_cached_per_category(self, semantic):
        nouns = semantic.longest_least_common_subsumers(WordCategory.NOUN)
        assert nouns.distance == 12
        assert semantic.longest_least_common_subsumers("noun") is nouns
        verbs = semantic.longest_least_common_subsumers(
            WordCategory.VERB, workers=2
        )
        assert verbs.distance == 1

    def test_cancelled_scan_not_cached(self, semantic):
        event = threading.Event()
        event.set()
        with pytest.raises(ScanCancelledError):
            semantic.longest_least_common_subsumers(
                WordCategory.NOUN, cancel_event=event
            )
        result = semantic.longest_least_common_subsumers(WordCategory.NOUN)
        assert {r.node.id for r in result.records} == {OBJEKT}


class TestNetworkx:
    def test_to_networkx(self, semantic):
        graph = semantic.to_networkx("hypernym")
        assert isinstance(graph, nx.MultiDiGraph)
        assert semantic.to_networkx("hypernym") is graph

    def test_unknown_kind(self, semantic):
        with pytest.raises(ValueError):
            semantic.to_networkx("meronym")

    def test_shortest_path(self, semantic):
        path = semantic.shortest_path(APFEL, GNROOT, "hypernym")
        assert len(path) == 7
        assert semantic.shortest_path(GNROOT, APFEL, "hypernym") is None

    def test_shortest_path_between_lexunits(self, semantic):
        assert semantic.shortest_path(80030, 80031, "lexunit") == [
            semantic.lexunit(80030), semantic.lexunit(80031),
        ]

    def test_shortest_path_through_membership(self, semantic):
        path = semantic.shortest_path(
            semantic.lexunit(80007), semantic.lexunit(80008), "full"
        )
        # Apfel -> its synset -> Kernobst -> Birne synset -> Birne
        assert len(path) == 5
