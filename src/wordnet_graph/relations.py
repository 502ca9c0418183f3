"""Relation kind tables: inverses, transitivity and WN-LMF name mapping."""

from __future__ import annotations

from collections.abc import Iterable

from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    Relation,
    RelationKind,
    WordCategory,
)

# Complete mapping of relation kinds to their inverses.
# Kinds missing from a table have no inverse.

CONCEPTUAL_INVERSES: dict[ConceptualRelation, ConceptualRelation] = {
    # Asymmetric pairs
    ConceptualRelation.HYPERONYMY: ConceptualRelation.HYPONYMY,
    ConceptualRelation.HYPONYMY: ConceptualRelation.HYPERONYMY,
    ConceptualRelation.MERONYMY: ConceptualRelation.HOLONYMY,
    ConceptualRelation.HOLONYMY: ConceptualRelation.MERONYMY,
    ConceptualRelation.ENTAILMENT: ConceptualRelation.ENTAILED,
    ConceptualRelation.ENTAILED: ConceptualRelation.ENTAILMENT,
    ConceptualRelation.CAUSATION: ConceptualRelation.CAUSED,
    ConceptualRelation.CAUSED: ConceptualRelation.CAUSATION,
    # Symmetric (map to themselves)
    ConceptualRelation.ASSOCIATION: ConceptualRelation.ASSOCIATION,
}

LEXICAL_INVERSES: dict[LexicalRelation, LexicalRelation] = {
    LexicalRelation.SYNONYMY: LexicalRelation.SYNONYMY,
    LexicalRelation.ANTONYMY: LexicalRelation.ANTONYMY,
}

TRANSITIVE_RELATIONS: frozenset[ConceptualRelation] = frozenset(
    kind for kind in ConceptualRelation if kind.transitive
)

# WN-LMF relType names understood by the importer. Names that are not
# listed have no counterpart among the enumerated kinds and are skipped.

LMF_SYNSET_RELATIONS: dict[str, ConceptualRelation] = {
    "hypernym": ConceptualRelation.HYPERONYMY,
    "instance_hypernym": ConceptualRelation.HYPERONYMY,
    "hyponym": ConceptualRelation.HYPONYMY,
    "instance_hyponym": ConceptualRelation.HYPONYMY,
    "meronym": ConceptualRelation.MERONYMY,
    "mero_location": ConceptualRelation.MERONYMY,
    "mero_member": ConceptualRelation.MERONYMY,
    "mero_part": ConceptualRelation.MERONYMY,
    "mero_portion": ConceptualRelation.MERONYMY,
    "mero_substance": ConceptualRelation.MERONYMY,
    "holonym": ConceptualRelation.HOLONYMY,
    "holo_location": ConceptualRelation.HOLONYMY,
    "holo_member": ConceptualRelation.HOLONYMY,
    "holo_part": ConceptualRelation.HOLONYMY,
    "holo_portion": ConceptualRelation.HOLONYMY,
    "holo_substance": ConceptualRelation.HOLONYMY,
    "entails": ConceptualRelation.ENTAILMENT,
    "is_entailed_by": ConceptualRelation.ENTAILED,
    "causes": ConceptualRelation.CAUSATION,
    "is_caused_by": ConceptualRelation.CAUSED,
    "also": ConceptualRelation.ASSOCIATION,
    "attribute": ConceptualRelation.ASSOCIATION,
}

LMF_SENSE_RELATIONS: dict[str, LexicalRelation] = {
    "antonym": LexicalRelation.ANTONYMY,
    "pertainym": LexicalRelation.PERTAINYMY,
    "participle": LexicalRelation.PARTICIPLE,
}

LMF_CATEGORIES: dict[str, WordCategory] = {
    "n": WordCategory.NOUN,
    "v": WordCategory.VERB,
    "a": WordCategory.ADJECTIVE,
    "s": WordCategory.ADJECTIVE,
}


def get_inverse(kind: RelationKind) -> RelationKind | None:
    """Get the inverse of a relation kind, or None if it has no inverse."""
    if isinstance(kind, ConceptualRelation):
        return CONCEPTUAL_INVERSES.get(kind)
    return LEXICAL_INVERSES.get(kind)


def is_symmetric(kind: RelationKind) -> bool:
    """Check if a relation kind is its own inverse."""
    return get_inverse(kind) == kind


def is_transitive(kind: RelationKind) -> bool:
    """Check if a relation kind chains transitively."""
    return kind.transitive


def parse_relation(name: str) -> RelationKind:
    """Look up a relation kind by its name (e.g. ``"hyperonymy"``)."""
    for enum in (ConceptualRelation, LexicalRelation):
        try:
            return enum(name)
        except ValueError:
            continue
    raise ValueError(f"Unknown relation kind: {name!r}")


def with_inverses(relations: Iterable[Relation]) -> list[Relation]:
    """Append the missing inverse of every relation that has one.

    Inverses already present are not added a second time.
    """
    completed = list(relations)
    present = set(completed)
    for rel in list(completed):
        inverse = get_inverse(rel.kind)
        if inverse is None:
            continue
        mirrored = Relation(rel.target_id, inverse, rel.source_id)
        if mirrored not in present:
            present.add(mirrored)
            completed.append(mirrored)
    return completed
