"""Validation engine for wordnet-graph networks."""

from __future__ import annotations

from collections import Counter

from wordnet_graph.graph import EntityGraphView
from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    ValidationResult,
)
from wordnet_graph.relations import get_inverse


def validate_all(view: EntityGraphView) -> list[ValidationResult]:
    """Run all validation rules."""
    results: list[ValidationResult] = []
    results.extend(_val_tax_001(view))
    results.extend(_val_tax_002(view))
    results.extend(_val_rel_001(view))
    results.extend(_val_rel_002(view))
    results.extend(_val_lex_001(view))
    return results


def validate_hierarchy(view: EntityGraphView) -> list[ValidationResult]:
    """Run only the hyperonymy hierarchy rules."""
    return _val_tax_001(view) + _val_tax_002(view)


def validate_relations(view: EntityGraphView) -> list[ValidationResult]:
    """Run only the relation rules."""
    return _val_rel_001(view) + _val_rel_002(view)


# ---------------------------------------------------------------------------
# Taxonomy rules
# ---------------------------------------------------------------------------

def _val_tax_001(view: EntityGraphView) -> list[ValidationResult]:
    """VAL-TAX-001: every synset reaches the root by hyperonymy."""
    reaches_root = {view.root}
    hyponymy = ConceptualRelation.HYPONYMY
    # walk down from the root through the inverse of hyperonymy
    below: dict = {}
    for synset in view.synsets():
        for hypernym in view.hypernyms(synset):
            below.setdefault(hypernym, []).append(synset)
    stack = [view.root]
    while stack:
        node = stack.pop()
        for child in below.get(node, ()):
            if child not in reaches_root:
                reaches_root.add(child)
                stack.append(child)

    results = []
    for synset in view.synsets():
        if synset in reaches_root:
            continue
        results.append(ValidationResult(
            rule_id="VAL-TAX-001",
            severity="ERROR",
            entity_type="synset",
            entity_id=synset.id,
            message=f"Synset has no {ConceptualRelation.HYPERONYMY.value} "
                    f"path to the root {view.root.id}",
            details={
                "hypernyms": [h.id for h in view.hypernyms(synset)],
                "hyponyms": [
                    h.id for h in view.neighbours(synset, hyponymy)
                ],
            },
        ))
    return results


def _val_tax_002(view: EntityGraphView) -> list[ValidationResult]:
    """VAL-TAX-002: the hyperonymy hierarchy has no cycles."""
    results = []
    state: dict = {}  # 1 = on stack, 2 = done
    reported: set[frozenset] = set()

    for start in view.synsets():
        if start in state:
            continue
        state[start] = 1
        trail = [start]
        iters = [iter(view.hypernyms(start))]
        while iters:
            child = next(iters[-1], None)
            if child is None:
                state[trail.pop()] = 2
                iters.pop()
                continue
            mark = state.get(child)
            if mark is None:
                state[child] = 1
                trail.append(child)
                iters.append(iter(view.hypernyms(child)))
            elif mark == 1:
                cycle = trail[trail.index(child):] + [child]
                members = frozenset(cycle)
                if members in reported:
                    continue
                reported.add(members)
                results.append(ValidationResult(
                    rule_id="VAL-TAX-002",
                    severity="ERROR",
                    entity_type="synset",
                    entity_id=child.id,
                    message="Hyperonymy cycle: "
                            + " -> ".join(str(n.id) for n in cycle),
                    details={"cycle": [n.id for n in cycle]},
                ))
    return results


# ---------------------------------------------------------------------------
# Relation rules
# ---------------------------------------------------------------------------

def _val_rel_001(view: EntityGraphView) -> list[ValidationResult]:
    """VAL-REL-001: relations with an inverse kind have it stored too."""
    results = []
    checks = (
        (view.conceptual, "synset"),
        (view.subview(LexicalRelation.ANTONYMY), "lexunit"),
    )
    for sub, entity_type in checks:
        for source, kind, target in sub.edges():
            inverse = get_inverse(kind)
            if inverse is None:
                continue
            if (target, inverse, source) in view.subview(inverse):
                continue
            results.append(ValidationResult(
                rule_id="VAL-REL-001",
                severity="WARNING",
                entity_type=entity_type,
                entity_id=source.id,
                message=f"Missing inverse {inverse.value} from "
                        f"{target.id} to {source.id}",
                details={"relation": kind.value, "target": target.id},
            ))
    return results


def _val_rel_002(view: EntityGraphView) -> list[ValidationResult]:
    """VAL-REL-002: the same relation is not stored twice.

    Counts stored relations only; synonymy derived from synset membership
    is not stored.
    """
    results = []
    collection = view.collection
    for stored, entity_type in ((collection.conceptual_relations, "synset"),
                                (collection.lexical_relations, "lexunit")):
        counts = Counter(
            (rel.source_id, rel.kind, rel.target_id) for rel in stored
        )
        for (source_id, kind, target_id), count in counts.items():
            if count < 2:
                continue
            results.append(ValidationResult(
                rule_id="VAL-REL-002",
                severity="WARNING",
                entity_type=entity_type,
                entity_id=source_id,
                message=f"Relation {kind.value} to {target_id} "
                        f"stored {count} times",
                details={"relation": kind.value, "target": target_id,
                         "count": count},
            ))
    return results


# ---------------------------------------------------------------------------
# Lexical unit rules
# ---------------------------------------------------------------------------

def _val_lex_001(view: EntityGraphView) -> list[ValidationResult]:
    """VAL-LEX-001: lexical units share their synset's word category."""
    results = []
    for lexunit in view.lexunits():
        synset = view.synset_of(lexunit)
        if lexunit.category == synset.category:
            continue
        results.append(ValidationResult(
            rule_id="VAL-LEX-001",
            severity="ERROR",
            entity_type="lexunit",
            entity_id=lexunit.id,
            message=f"Lexical unit is {lexunit.category.value} but its "
                    f"synset {synset.id} is {synset.category.value}",
            details=None,
        ))
    return results
