"""Domain model dataclasses and enums for wordnet-graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class WordCategory(str, Enum):
    """Word category shared by a synset and its lexical units."""

    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"


class ConceptualRelation(str, Enum):
    """Relation kinds between synsets."""

    HYPERONYMY = "hyperonymy"
    HYPONYMY = "hyponymy"
    MERONYMY = "meronymy"
    HOLONYMY = "holonymy"
    ENTAILMENT = "entailment"
    ENTAILED = "entailed"
    CAUSATION = "causation"
    CAUSED = "caused"
    ASSOCIATION = "association"

    @property
    def transitive(self) -> bool:
        return self in _TRANSITIVE


class LexicalRelation(str, Enum):
    """Relation kinds between lexical units. None of them chain."""

    SYNONYMY = "synonymy"
    ANTONYMY = "antonymy"
    PERTAINYMY = "pertainymy"
    PARTICIPLE = "participle"

    @property
    def transitive(self) -> bool:
        return False


_TRANSITIVE = frozenset({
    ConceptualRelation.HYPERONYMY,
    ConceptualRelation.HYPONYMY,
    ConceptualRelation.MERONYMY,
    ConceptualRelation.HOLONYMY,
})

RelationKind = Union[ConceptualRelation, LexicalRelation]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True, eq=False)
class Synset:
    """A word sense: a set of lexical units sharing one concept.

    Equality and hashing use the identifier only, so a synset can be used
    directly as a graph key.
    """

    id: int
    category: WordCategory
    forms: tuple[str, ...] = ()
    key: str | None = None

    def __eq__(self, other: object) -> bool:
        if type(other) is not Synset:
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("synset", self.id))

    def __repr__(self) -> str:
        return f"Synset({self.id}, {list(self.forms)!r})"


@dataclass(frozen=True, slots=True, eq=False)
class LexUnit:
    """A word form belonging to exactly one synset."""

    id: int
    synset_id: int
    category: WordCategory
    forms: tuple[str, ...] = ()
    key: str | None = None

    def __eq__(self, other: object) -> bool:
        if type(other) is not LexUnit:
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("lexunit", self.id))

    def __repr__(self) -> str:
        return f"LexUnit({self.id}, {list(self.forms)!r})"


Node = Union[Synset, LexUnit]


@dataclass(frozen=True, slots=True)
class Relation:
    """A typed, directed relation between two nodes of the same kind."""

    source_id: int
    kind: RelationKind
    target_id: int


# ---------------------------------------------------------------------------
# Paths and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RelationPath:
    """An ordered sequence of synsets joined by edges of one relation kind.

    Two paths are equal when their node sequences are equal.
    """

    nodes: tuple[Synset, ...]
    _positions: dict[Synset, int] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        positions: dict[Synset, int] = {}
        for i, node in enumerate(self.nodes):
            positions.setdefault(node, i)
        object.__setattr__(self, "_positions", positions)

    @property
    def length(self) -> int:
        """Number of edges on the path."""
        return len(self.nodes) - 1

    @property
    def first(self) -> Synset:
        return self.nodes[0]

    @property
    def last(self) -> Synset:
        return self.nodes[-1]

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(node.id for node in self.nodes)

    def index_of(self, node: Synset) -> int:
        """Edge count from the first node to ``node``."""
        try:
            return self._positions[node]
        except KeyError:
            raise ValueError(f"{node!r} is not on this path") from None

    def prefix(self, node: Synset) -> RelationPath:
        """The sub-path from the first node up to and including ``node``."""
        return RelationPath(self.nodes[: self.index_of(node) + 1])

    def node_set(self) -> frozenset[Synset]:
        return frozenset(self._positions)

    def __contains__(self, node: object) -> bool:
        return node in self._positions

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)


@dataclass(frozen=True, slots=True)
class PathSearchResult:
    """All simple paths between two nodes plus the cycles met on the way."""

    paths: frozenset[RelationPath]
    cycles: tuple[tuple[Synset, ...], ...]

    @property
    def shortest(self) -> RelationPath | None:
        if not self.paths:
            return None
        return min(self.paths, key=lambda p: (p.length, p.ids))


@dataclass(frozen=True, slots=True)
class LeastCommonSubsumer:
    """A common ancestor of two synsets with the paths leading to it."""

    node: Synset
    path_a: RelationPath
    path_b: RelationPath
    distance: int

    @property
    def sort_key(self) -> tuple[int, int, tuple[int, ...], tuple[int, ...]]:
        return (self.distance, self.node.id, self.path_a.ids, self.path_b.ids)

    def swapped(self) -> LeastCommonSubsumer:
        return LeastCommonSubsumer(
            self.node, self.path_b, self.path_a, self.distance
        )

    def __str__(self) -> str:
        return (
            f"lcs: {self.node!r} distance: {self.distance} "
            f"path_a: (length {self.path_a.length}) {list(self.path_a.ids)} "
            f"path_b: (length {self.path_b.length}) {list(self.path_b.ids)}"
        )


def sorted_records(
    records: frozenset[LeastCommonSubsumer] | set[LeastCommonSubsumer],
) -> list[LeastCommonSubsumer]:
    """Deterministic ordering of an LCS record set."""
    return sorted(records, key=lambda r: r.sort_key)


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Running or final state of a corpus-wide longest-LCS scan."""

    distance: int | None
    records: frozenset[LeastCommonSubsumer]
    pairs_evaluated: int = 0
    pairs_skipped: int = 0

    @classmethod
    def empty(cls) -> ScanResult:
        return cls(None, frozenset())

    def merge(self, other: ScanResult) -> ScanResult:
        """Combine two partial scans.

        Keeps the records of the larger distance and unions them on a tie,
        so the result does not depend on how pairs were partitioned.
        """
        if other.distance is None or (
            self.distance is not None and self.distance > other.distance
        ):
            distance, records = self.distance, self.records
        elif self.distance is None or other.distance > self.distance:
            distance, records = other.distance, other.records
        else:
            distance, records = self.distance, self.records | other.records
        return ScanResult(
            distance=distance,
            records=records,
            pairs_evaluated=self.pairs_evaluated + other.pairs_evaluated,
            pairs_skipped=self.pairs_skipped + other.pairs_skipped,
        )


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """A single validation finding (error or warning)."""

    rule_id: str
    severity: str
    entity_type: str
    entity_id: int
    message: str
    details: dict[str, Any] | None
