"""Immutable container for a loaded lexical-semantic network."""

from __future__ import annotations

from collections.abc import Iterable

from wordnet_graph.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    LexUnit,
    Relation,
    Synset,
)


class EntityCollection:
    """Synsets, lexical units and their typed relations, as loaded.

    The collection is checked once on construction and never changes
    afterwards. Relations keep their input order; duplicate relations of
    the same kind are kept.
    """

    def __init__(
        self,
        synsets: Iterable[Synset],
        lexunits: Iterable[LexUnit],
        relations: Iterable[Relation],
        root_id: int,
    ) -> None:
        self._synsets: dict[int, Synset] = {}
        for synset in synsets:
            if synset.id in self._synsets:
                raise DuplicateEntityError(
                    f"Synset with id={synset.id} already exists"
                )
            self._synsets[synset.id] = synset

        self._lexunits: dict[int, LexUnit] = {}
        self._members: dict[int, list[LexUnit]] = {
            sid: [] for sid in self._synsets
        }
        for lexunit in lexunits:
            if lexunit.id in self._lexunits:
                raise DuplicateEntityError(
                    f"LexUnit with id={lexunit.id} already exists"
                )
            if lexunit.synset_id not in self._synsets:
                raise EntityNotFoundError(
                    f"Synset not found: {lexunit.synset_id} "
                    f"(owner of lexunit {lexunit.id})"
                )
            self._lexunits[lexunit.id] = lexunit
            self._members[lexunit.synset_id].append(lexunit)

        conceptual: list[Relation] = []
        lexical: list[Relation] = []
        for rel in relations:
            if rel.source_id == rel.target_id:
                raise ValidationError(
                    f"Self-loop not allowed: {rel.source_id} "
                    f"{rel.kind.value} {rel.target_id}"
                )
            if isinstance(rel.kind, ConceptualRelation):
                index, bucket = self._synsets, conceptual
            elif isinstance(rel.kind, LexicalRelation):
                index, bucket = self._lexunits, lexical
            else:
                raise ValidationError(f"Invalid relation kind: {rel.kind!r}")
            for end in (rel.source_id, rel.target_id):
                if end not in index:
                    raise EntityNotFoundError(
                        f"Relation {rel.kind.value} refers to unknown "
                        f"node {end}"
                    )
            bucket.append(rel)

        self._conceptual = tuple(conceptual)
        self._lexical = tuple(lexical)
        self._root_id = root_id

    @property
    def root_id(self) -> int:
        return self._root_id

    @property
    def conceptual_relations(self) -> tuple[Relation, ...]:
        return self._conceptual

    @property
    def lexical_relations(self) -> tuple[Relation, ...]:
        return self._lexical

    def synsets(self) -> list[Synset]:
        return list(self._synsets.values())

    def lexunits(self) -> list[LexUnit]:
        return list(self._lexunits.values())

    def synset(self, synset_id: int) -> Synset:
        try:
            return self._synsets[synset_id]
        except KeyError:
            raise EntityNotFoundError(
                f"Synset not found: {synset_id!r}"
            ) from None

    def lexunit(self, lexunit_id: int) -> LexUnit:
        try:
            return self._lexunits[lexunit_id]
        except KeyError:
            raise EntityNotFoundError(
                f"LexUnit not found: {lexunit_id!r}"
            ) from None

    def has_synset(self, synset_id: int) -> bool:
        return synset_id in self._synsets

    def lexunits_of(self, synset: Synset | int) -> tuple[LexUnit, ...]:
        synset_id = synset if isinstance(synset, int) else synset.id
        try:
            return tuple(self._members[synset_id])
        except KeyError:
            raise EntityNotFoundError(
                f"Synset not found: {synset_id!r}"
            ) from None

    def __len__(self) -> int:
        return len(self._synsets) + len(self._lexunits)

    def __repr__(self) -> str:
        return (
            f"EntityCollection({len(self._synsets)} synsets, "
            f"{len(self._lexunits)} lexunits, root={self._root_id})"
        )
