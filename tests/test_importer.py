"""Tests for the WN-LMF import pipeline."""

import logging
import os
import tempfile

import pytest

from conftest import FIXTURES

from wordnet_graph import (
    ConceptualRelation,
    DataImportError,
    EntityGraphView,
    LcsFinder,
    LexicalRelation,
    WordCategory,
    load_lmf,
)

ROOT = "test-fruit-01-n"


@pytest.fixture
def lmf_network():
    return load_lmf(FIXTURES / "fruit.xml", ROOT)


class TestLoadLmf:
    def test_synsets_numbered_in_document_order(self, lmf_network):
        keys = [s.key for s in sorted(lmf_network.synsets(), key=lambda s: s.id)]
        assert keys == [f"test-fruit-0{i}-{p}" for i, p in
                        zip(range(1, 8), "nnnnnas")]
        assert lmf_network.root_id == 1

    def test_categories(self, lmf_network):
        by_key = {s.key: s for s in lmf_network.synsets()}
        assert by_key["test-fruit-03-n"].category == WordCategory.NOUN
        assert by_key["test-fruit-06-a"].category == WordCategory.ADJECTIVE
        assert by_key["test-fruit-07-s"].category == WordCategory.ADJECTIVE

    def test_unmapped_pos_skipped(self, lmf_network):
        keys = {s.key for s in lmf_network.synsets()}
        assert "test-fruit-08-r" not in keys
        unit_keys = {u.key for u in lmf_network.lexunits()}
        assert "test-fruit-quickly-r-01" not in unit_keys

    def test_senses_become_lexunits(self, lmf_network):
        units = {u.key: u for u in lmf_network.lexunits()}
        apple = units["test-fruit-apple-n-01"]
        assert apple.forms == ("apple", "apples")
        assert lmf_network.synset(apple.synset_id).key == "test-fruit-03-n"
        assert lmf_network.synset(apple.synset_id).forms == ("apple",)
        assert min(u.id for u in units.values()) == 8

    def test_relations_mapped(self, lmf_network):
        view = EntityGraphView(lmf_network)
        by_key = {s.key: s for s in lmf_network.synsets()}
        apple = by_key["test-fruit-03-n"]
        tree = by_key["test-fruit-05-n"]
        assert view.related(apple, ConceptualRelation.HYPERONYMY) == (
            by_key["test-fruit-02-n"],
        )
        assert view.related(tree, ConceptualRelation.MERONYMY) == (apple,)
        assert view.related(apple, ConceptualRelation.HOLONYMY) == (tree,)

    def test_sense_relations(self, lmf_network):
        units = {u.key: u for u in lmf_network.lexunits()}
        antonyms = [
            r for r in lmf_network.lexical_relations
            if r.kind == LexicalRelation.ANTONYMY
        ]
        assert len(antonyms) == 2
        assert {r.source_id for r in antonyms} == {
            units["test-fruit-ripe-a-01"].id,
            units["test-fruit-unripe-s-01"].id,
        }

    def test_lcs_over_imported_network(self, lmf_network):
        view = EntityGraphView(lmf_network)
        by_key = {s.key: s for s in lmf_network.synsets()}
        (record,) = LcsFinder(view).cross_check(
            by_key["test-fruit-03-n"], by_key["test-fruit-04-n"]
        )
        assert record.node.key == "test-fruit-02-n"
        assert record.distance == 2

    def test_skipped_relation_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="wordnet_graph.importer"):
            load_lmf(FIXTURES / "fruit.xml", ROOT)
        assert "'similar'" in caplog.text
        assert "test-fruit-08-r" in caplog.text

    def test_lexicon_filter(self):
        network = load_lmf(FIXTURES / "fruit.xml", ROOT, lexicon="test-fruit")
        assert len(network.synsets()) == 7
        with pytest.raises(DataImportError):
            load_lmf(FIXTURES / "fruit.xml", ROOT, lexicon="other")


class TestErrors:
    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_lmf("/nonexistent/path.xml", ROOT)

    def test_invalid_xml(self):
        with tempfile.NamedTemporaryFile(
            suffix=".xml", mode="w", delete=False
        ) as f:
            f.write("<not valid xml")
            tmp_path = f.name
        try:
            with pytest.raises(DataImportError):
                load_lmf(tmp_path, ROOT)
        finally:
            os.unlink(tmp_path)

    def test_unknown_root(self):
        with pytest.raises(DataImportError, match="Root synset not found"):
            load_lmf(FIXTURES / "fruit.xml", "test-fruit-99-n")

    def test_skipped_root(self):
        with pytest.raises(DataImportError):
            load_lmf(FIXTURES / "fruit.xml", "test-fruit-08-r")
