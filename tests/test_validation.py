"""Tests for the validation engine."""

from conftest import small_network

from wordnet_graph import EntityGraphView, load_network
from wordnet_graph.validator import (
    validate_all,
    validate_hierarchy,
    validate_relations,
)


def _rule_ids(results):
    return [r.rule_id for r in results]


class TestCleanNetwork:
    def test_fixture_is_valid(self, view):
        assert validate_all(view) == []


class TestHierarchyRules:
    def test_unreachable_synset(self):
        """VAL-TAX-001."""
        view = EntityGraphView(small_network({2: [1], 3: [4]}))
        results = validate_hierarchy(view)
        assert _rule_ids(results) == ["VAL-TAX-001", "VAL-TAX-001"]
        assert [r.entity_id for r in results] == [3, 4]
        assert results[0].severity == "ERROR"
        assert results[0].details["hypernyms"] == [4]

    def test_cycle(self):
        """VAL-TAX-002."""
        view = EntityGraphView(small_network({2: [1, 3], 3: [2]}))
        results = validate_hierarchy(view)
        assert _rule_ids(results) == ["VAL-TAX-002"]
        assert results[0].details["cycle"] == [2, 3, 2]
        assert "2 -> 3 -> 2" in results[0].message

    def test_cycle_reported_once(self):
        view = EntityGraphView(small_network({2: [1], 3: [2, 4], 4: [3], 5: [4]}))
        results = validate_hierarchy(view)
        assert _rule_ids(results) == ["VAL-TAX-002"]


class TestRelationRules:
    def test_missing_inverse(self):
        """VAL-REL-001."""
        view = EntityGraphView(small_network({2: [1]}))
        results = validate_relations(view)
        assert _rule_ids(results) == ["VAL-REL-001"]
        assert results[0].severity == "WARNING"
        assert results[0].entity_id == 2
        assert "hyponymy" in results[0].message

    def test_missing_antonym_inverse(self):
        network = load_network({
            "root": 1,
            "synsets": [{
                "id": 1,
                "category": "adjective",
                "lexunits": [
                    {"id": 10, "forms": ["hot"],
                     "relations": {"antonymy": [11]}},
                    {"id": 11, "forms": ["cold"]},
                ],
            }],
        }, auto_inverse=False)
        results = validate_relations(EntityGraphView(network))
        assert _rule_ids(results) == ["VAL-REL-001"]
        assert results[0].entity_type == "lexunit"
        assert results[0].entity_id == 10

    def test_duplicate_relation(self):
        """VAL-REL-002."""
        view = EntityGraphView(small_network({2: [1, 1]}))
        results = [r for r in validate_relations(view)
                   if r.rule_id == "VAL-REL-002"]
        assert len(results) == 1
        assert results[0].details["count"] == 2

    def test_synonymy_within_synset_not_duplicate(self):
        network = load_network({
            "root": 1,
            "synsets": [{
                "id": 1,
                "category": "noun",
                "lexunits": [
                    {"id": 10, "forms": ["car"],
                     "relations": {"synonymy": [11]}},
                    {"id": 11, "forms": ["auto"]},
                ],
            }],
        })
        assert validate_all(EntityGraphView(network)) == []

    def test_duplicate_synonymy_counts_stored_relations(self):
        network = load_network({
            "root": 1,
            "synsets": [{
                "id": 1,
                "category": "noun",
                "lexunits": [
                    {"id": 10, "forms": ["car"],
                     "relations": {"synonymy": [11, 11]}},
                    {"id": 11, "forms": ["auto"]},
                ],
            }],
        }, auto_inverse=False)
        results = validate_relations(EntityGraphView(network))
        assert _rule_ids(results) == ["VAL-REL-002"]
        assert results[0].entity_type == "lexunit"
        assert results[0].details["count"] == 2


class TestLexUnitRules:
    def test_category_mismatch(self):
        """VAL-LEX-001."""
        network = load_network({
            "root": 1,
            "synsets": [{
                "id": 1,
                "category": "noun",
                "lexunits": [{"id": 10, "category": "verb", "forms": ["x"]}],
            }],
        })
        results = validate_all(EntityGraphView(network))
        assert _rule_ids(results) == ["VAL-LEX-001"]
        assert results[0].entity_id == 10
