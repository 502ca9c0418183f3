"""Exhaustive simple-path search and the per-synset root-path index."""

from __future__ import annotations

import logging
import time

from wordnet_graph.exceptions import ValidationError
from wordnet_graph.graph import EntityGraphView
from wordnet_graph.models import (
    ConceptualRelation,
    PathSearchResult,
    RelationPath,
    Synset,
)

logger = logging.getLogger(__name__)


def find_all_paths(
    view: EntityGraphView,
    start: Synset | int,
    target: Synset | int,
    kind: ConceptualRelation = ConceptualRelation.HYPERONYMY,
) -> PathSearchResult:
    """Every simple path from ``start`` to ``target`` along ``kind`` edges.

    Partial paths are kept on a work stack. Popping one, each neighbour of
    its last node either closes a cycle (recorded, branch dropped), reaches
    the target (path completed) or extends the partial path, which goes
    back on the stack. A path never repeats a node, so the search ends
    after at most ``len(view.synsets())`` steps along any branch.

    The result may be exponential in size. Callers that only need one path
    should use a breadth-first search instead.
    """
    if not kind.transitive:
        raise ValidationError(
            f"Path search needs a transitive relation, got {kind.value}"
        )
    start = view.synset(start)
    target = view.synset(target)

    if start == target:
        return PathSearchResult(
            paths=frozenset({RelationPath((start,))}), cycles=()
        )

    found: set[RelationPath] = set()
    cycles: list[tuple[Synset, ...]] = []
    stack: list[tuple[tuple[Synset, ...], frozenset[Synset]]] = [
        ((start,), frozenset((start,)))
    ]

    while stack:
        nodes, on_path = stack.pop()
        for v in view.neighbours(nodes[-1], kind):
            if v in on_path:
                cycles.append(nodes[nodes.index(v):] + (v,))
            elif v == target:
                found.add(RelationPath(nodes + (v,)))
            else:
                stack.append((nodes + (v,), on_path | {v}))

    if cycles:
        logger.debug(f"Cycles found between {start!r} and {target!r}: {cycles}")
    return PathSearchResult(paths=frozenset(found), cycles=tuple(cycles))


class RootPathIndex:
    """All simple paths from every synset to the root, computed up front.

    Trades memory for query speed: the exponential path enumeration runs
    once per synset instead of once per queried pair.
    """

    def __init__(
        self,
        view: EntityGraphView,
        *,
        kind: ConceptualRelation = ConceptualRelation.HYPERONYMY,
    ) -> None:
        self._view = view
        self._kind = kind
        self._paths: dict[Synset, frozenset[RelationPath]] = {}
        cycles: set[tuple[Synset, ...]] = set()

        logger.info("Loading paths to root...")
        start_time = time.time()
        root = view.root
        for synset in view.synsets():
            result = find_all_paths(view, synset, root, kind)
            self._paths[synset] = result.paths
            cycles.update(result.cycles)

        self._cycles = tuple(sorted(cycles, key=lambda c: [n.id for n in c]))
        self._unreachable = tuple(
            s for s, paths in self._paths.items() if not paths
        )
        duration = time.time() - start_time
        logger.info(
            f"Done loading paths to root ({duration:.2f} seconds, "
            f"{len(self._unreachable)} unreachable synsets)."
        )

    @property
    def root(self) -> Synset:
        return self._view.root

    @property
    def kind(self) -> ConceptualRelation:
        return self._kind

    @property
    def unreachable(self) -> tuple[Synset, ...]:
        """Synsets with no path to the root."""
        return self._unreachable

    @property
    def cycles(self) -> tuple[tuple[Synset, ...], ...]:
        return self._cycles

    def paths_to_root(self, synset: Synset | int) -> frozenset[RelationPath]:
        return self._paths[self._view.synset(synset)]

    def __contains__(self, synset: object) -> bool:
        return synset in self._paths

    def __len__(self) -> int:
        return len(self._paths)
