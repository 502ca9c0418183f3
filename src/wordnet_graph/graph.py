"""Read-only adjacency views over an entity collection."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from wordnet_graph.collection import EntityCollection
from wordnet_graph.exceptions import RootNotFoundError, ValidationError
from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    LexUnit,
    Node,
    RelationKind,
    Synset,
    WordCategory,
)

logger = logging.getLogger(__name__)

_Adjacency = dict[int, tuple[Node, ...]]


class EntityGraphView:
    """Adjacency lists per relation kind for synsets and lexical units.

    Built by one pass over the stored relations; every stored relation
    contributes at most one adjacency entry. Lexical-unit synonymy is
    derived from shared synset membership and extended with explicit
    synonymy relations across synsets. Explicit synonymy between members
    of one synset adds nothing.

    Safe for concurrent readers; sub-views are created under a lock.
    """

    def __init__(self, collection: EntityCollection) -> None:
        if not collection.has_synset(collection.root_id):
            raise RootNotFoundError(
                f"Root synset not found: {collection.root_id!r}"
            )
        self._collection = collection
        self._root = collection.synset(collection.root_id)
        self._adjacency: dict[RelationKind, _Adjacency] = {}
        self._subviews: dict[tuple[RelationKind, ...], RelationView] = {}
        self._lock = threading.Lock()

        building: dict[RelationKind, dict[int, list[Node]]] = {
            kind: {} for kind in (*ConceptualRelation, *LexicalRelation)
        }
        for rel in collection.conceptual_relations:
            building[rel.kind].setdefault(rel.source_id, []).append(
                collection.synset(rel.target_id)
            )

        synonyms = building[LexicalRelation.SYNONYMY]
        for synset in collection.synsets():
            members = collection.lexunits_of(synset)
            for lexunit in members:
                others = [m for m in members if m != lexunit]
                if others:
                    synonyms[lexunit.id] = others
        for rel in collection.lexical_relations:
            target = collection.lexunit(rel.target_id)
            if rel.kind == LexicalRelation.SYNONYMY and (
                collection.lexunit(rel.source_id).synset_id == target.synset_id
            ):
                # already present through synset membership
                continue
            building[rel.kind].setdefault(rel.source_id, []).append(target)

        for kind, table in building.items():
            self._adjacency[kind] = {
                source: tuple(targets) for source, targets in table.items()
            }

        self._by_category: dict[WordCategory, tuple[Synset, ...]] = {
            category: tuple(sorted(
                (s for s in collection.synsets() if s.category == category),
                key=lambda s: s.id,
            ))
            for category in WordCategory
        }
        logger.debug(
            f"Built graph view: {len(collection.synsets())} synsets, "
            f"{len(collection.conceptual_relations)} conceptual and "
            f"{len(collection.lexical_relations)} lexical relations"
        )

    @property
    def collection(self) -> EntityCollection:
        return self._collection

    @property
    def root(self) -> Synset:
        return self._root

    # ------------------------------------------------------------------
    # Node lookup
    # ------------------------------------------------------------------

    def synset(self, synset: Synset | int) -> Synset:
        """Resolve a synset or synset id, failing on unknown identifiers."""
        if isinstance(synset, Synset):
            synset_id = synset.id
        elif isinstance(synset, int):
            synset_id = synset
        else:
            raise ValidationError(f"Not a synset: {synset!r}")
        return self._collection.synset(synset_id)

    def lexunit(self, lexunit: LexUnit | int) -> LexUnit:
        """Resolve a lexical unit or lexical unit id."""
        if isinstance(lexunit, LexUnit):
            lexunit_id = lexunit.id
        elif isinstance(lexunit, int):
            lexunit_id = lexunit
        else:
            raise ValidationError(f"Not a lexical unit: {lexunit!r}")
        return self._collection.lexunit(lexunit_id)

    def synsets(self, category: WordCategory | None = None) -> tuple[Synset, ...]:
        """All synsets, or those of one word category, in id order."""
        if category is None:
            return tuple(sorted(self._collection.synsets(), key=lambda s: s.id))
        return self._by_category[WordCategory(category)]

    def lexunits(
        self, category: WordCategory | None = None
    ) -> tuple[LexUnit, ...]:
        units = sorted(self._collection.lexunits(), key=lambda u: u.id)
        if category is not None:
            category = WordCategory(category)
            units = [u for u in units if u.category == category]
        return tuple(units)

    def lexunits_of(self, synset: Synset | int) -> tuple[LexUnit, ...]:
        return self._collection.lexunits_of(self.synset(synset))

    def synset_of(self, lexunit: LexUnit | int) -> Synset:
        return self._collection.synset(self.lexunit(lexunit).synset_id)

    # ------------------------------------------------------------------
    # Relation queries
    # ------------------------------------------------------------------

    def related(self, node: Node | int, kind: RelationKind) -> tuple[Node, ...]:
        """Nodes reached from ``node`` by one edge of ``kind``.

        Returns an empty tuple when there is no such relation.
        """
        if isinstance(kind, ConceptualRelation):
            if isinstance(node, LexUnit):
                raise ValidationError(
                    f"{kind.value} relates synsets, not {node!r}"
                )
            resolved: Node = self.synset(node)
        elif isinstance(kind, LexicalRelation):
            if isinstance(node, Synset):
                raise ValidationError(
                    f"{kind.value} relates lexical units, not {node!r}"
                )
            resolved = self.lexunit(node)
        else:
            raise ValidationError(f"Invalid relation kind: {kind!r}")
        return self._adjacency[kind].get(resolved.id, ())

    def hypernyms(self, synset: Synset) -> tuple[Synset, ...]:
        """Direct hyperonymy targets without id validation."""
        return self._adjacency[ConceptualRelation.HYPERONYMY].get(  # type: ignore[return-value]
            synset.id, ()
        )

    def neighbours(
        self, synset: Synset, kind: ConceptualRelation
    ) -> tuple[Synset, ...]:
        """Like :meth:`related` but without lookups, for traversal loops."""
        return self._adjacency[kind].get(synset.id, ())  # type: ignore[return-value]

    def subview(self, *kinds: RelationKind) -> RelationView:
        """A view restricted to the given relation kinds."""
        if not kinds:
            raise ValidationError("A sub-view needs at least one relation kind")
        key = tuple(kinds)
        with self._lock:
            view = self._subviews.get(key)
            if view is None:
                view = RelationView(self, key)
                self._subviews[key] = view
        return view

    @property
    def hyperonymy(self) -> RelationView:
        return self.subview(ConceptualRelation.HYPERONYMY)

    @property
    def hyponymy(self) -> RelationView:
        return self.subview(ConceptualRelation.HYPONYMY)

    @property
    def conceptual(self) -> RelationView:
        return self.subview(*ConceptualRelation)

    @property
    def lexical(self) -> RelationView:
        return self.subview(*LexicalRelation)

    def adjacency_snapshot(self) -> dict[str, dict[int, list[int]]]:
        """Plain-id copy of every adjacency table, for comparisons."""
        return {
            kind.value: {
                source: [target.id for target in targets]
                for source, targets in sorted(table.items())
            }
            for kind, table in self._adjacency.items()
        }

    def _table(self, kind: RelationKind) -> _Adjacency:
        return self._adjacency[kind]

    def __repr__(self) -> str:
        return f"EntityGraphView({self._collection!r})"


class RelationView:
    """Edges of a fixed set of relation kinds, sharing the parent's data."""

    def __init__(
        self, view: EntityGraphView, kinds: tuple[RelationKind, ...]
    ) -> None:
        families = {type(kind) for kind in kinds}
        if len(families) > 1:
            raise ValidationError(
                "A sub-view cannot mix conceptual and lexical relations"
            )
        self._view = view
        self._kinds = kinds
        self._tables = [view._table(kind) for kind in kinds]

    @property
    def kinds(self) -> tuple[RelationKind, ...]:
        return self._kinds

    @property
    def is_conceptual(self) -> bool:
        return isinstance(self._kinds[0], ConceptualRelation)

    def nodes(self) -> tuple[Node, ...]:
        if self.is_conceptual:
            return self._view.synsets()
        return self._view.lexunits()

    def successors(self, node: Node) -> tuple[Node, ...]:
        """Targets of every edge leaving ``node``, in kind order."""
        found: list[Node] = []
        for table in self._tables:
            found.extend(table.get(node.id, ()))
        return tuple(found)

    def edges(self) -> Iterator[tuple[Node, RelationKind, Node]]:
        resolve = (
            self._view.synset if self.is_conceptual else self._view.lexunit
        )
        for kind, table in zip(self._kinds, self._tables):
            for source_id in sorted(table):
                source = resolve(source_id)
                for target in table[source_id]:
                    yield source, kind, target

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 3:
            return False
        source, kind, target = edge
        if kind not in self._kinds:
            return False
        source_id = getattr(source, "id", None)
        return target in self._view._table(kind).get(source_id, ())

    def __repr__(self) -> str:
        names = ", ".join(kind.value for kind in self._kinds)
        return f"RelationView({names})"
