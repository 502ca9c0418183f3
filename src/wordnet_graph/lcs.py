"""Least common subsumers of two synsets.

Two strategies compute the same record set:

* frontier expansion (``find``, the default) walks up the hyperonymy
  hierarchy from both synsets one hop per round and needs no index;
* root-path intersection (``find_by_root_paths``) compares every pair of
  precomputed paths to the root.

``cross_check`` runs both and fails loudly if they disagree.
"""

from __future__ import annotations

import logging
import threading

from wordnet_graph.exceptions import ConsistencyError, IncomparableNodesError
from wordnet_graph.graph import EntityGraphView
from wordnet_graph.models import (
    LeastCommonSubsumer,
    RelationPath,
    Synset,
    sorted_records,
)
from wordnet_graph.paths import RootPathIndex

logger = logging.getLogger(__name__)

FRONTIER = "frontier"
ROOT_PATHS = "root-paths"
STRATEGIES = (FRONTIER, ROOT_PATHS)


class _Frontier:
    """Breadth-first expansion over hypernyms from one synset.

    ``depth`` holds the hop count of every synset reached so far and
    ``via`` every synset of the previous round it was reached from, so all
    shortest paths can be rebuilt. Edges back to a synset reached at least
    two rounds earlier are kept in ``back_edges``; :meth:`cycles` tells
    which of them close a loop.
    """

    __slots__ = ("origin", "depth", "via", "frontier", "radius", "back_edges")

    def __init__(self, origin: Synset) -> None:
        self.origin = origin
        self.depth: dict[Synset, int] = {origin: 0}
        self.via: dict[Synset, list[Synset]] = {origin: []}
        self.frontier: list[Synset] = [origin]
        self.radius = 0
        self.back_edges: list[tuple[Synset, Synset]] = []

    def expand(self, view: EntityGraphView) -> list[Synset]:
        """Advance one hop; return the newly reached synsets."""
        radius = self.radius + 1
        added: list[Synset] = []
        for node in self.frontier:
            for hypernym in view.hypernyms(node):
                seen = self.depth.get(hypernym)
                if seen is None:
                    self.depth[hypernym] = radius
                    self.via[hypernym] = [node]
                    added.append(hypernym)
                elif seen == radius:
                    if node not in self.via[hypernym]:
                        self.via[hypernym].append(node)
                elif seen < self.radius:
                    # a synset of the previous round cannot lie on a path
                    # to another synset of that round
                    self.back_edges.append((node, hypernym))
        self.frontier = added
        self.radius = radius
        return added

    def cycles(self) -> list[tuple[Synset, Synset]]:
        """Back edges whose target lies on a recorded path to their source."""
        return [
            (node, hypernym) for node, hypernym in self.back_edges
            if self._leads_to(hypernym, node)
        ]

    def _leads_to(self, ancestor: Synset, node: Synset) -> bool:
        """Whether ``ancestor`` lies on a recorded path to ``node``."""
        stack = [node]
        seen = {node}
        while stack:
            current = stack.pop()
            if current == ancestor:
                return True
            for prev in self.via[current]:
                if prev not in seen:
                    seen.add(prev)
                    stack.append(prev)
        return False

    def paths_to(self, node: Synset) -> list[tuple[Synset, ...]]:
        """Every shortest path from the origin to ``node``."""
        previous = self.via[node]
        if not previous:
            return [(node,)]
        return [
            path + (node,)
            for prev in previous
            for path in self.paths_to(prev)
        ]


class LcsFinder:
    """Computes least-common-subsumer sets over a graph view.

    Results are ``frozenset``s of :class:`LeastCommonSubsumer`; every
    record with the minimal distance is kept. Synsets of different word
    categories raise :class:`IncomparableNodesError`; comparable synsets
    without any common ancestor give an empty set.
    """

    def __init__(
        self,
        view: EntityGraphView,
        root_paths: RootPathIndex | None = None,
    ) -> None:
        self._view = view
        self._root_paths = root_paths
        self._lock = threading.Lock()

    @property
    def view(self) -> EntityGraphView:
        return self._view

    @property
    def root_paths(self) -> RootPathIndex:
        """The root-path index, built on first use."""
        if self._root_paths is None:
            with self._lock:
                if self._root_paths is None:
                    self._root_paths = RootPathIndex(self._view)
        return self._root_paths

    def _resolve(
        self, a: Synset | int, b: Synset | int
    ) -> tuple[Synset, Synset]:
        a = self._view.synset(a)
        b = self._view.synset(b)
        if a.category != b.category:
            raise IncomparableNodesError(
                f"Cannot compare {a!r} ({a.category.value}) with "
                f"{b!r} ({b.category.value})"
            )
        return a, b

    def find(
        self,
        a: Synset | int,
        b: Synset | int,
        strategy: str = FRONTIER,
    ) -> frozenset[LeastCommonSubsumer]:
        if strategy == FRONTIER:
            return self.find_by_frontier(a, b)
        if strategy == ROOT_PATHS:
            return self.find_by_root_paths(a, b)
        raise ValueError(
            f"Unknown strategy {strategy!r}, expected one of {STRATEGIES}"
        )

    # ------------------------------------------------------------------
    # Frontier expansion
    # ------------------------------------------------------------------

    def find_by_frontier(
        self, a: Synset | int, b: Synset | int
    ) -> frozenset[LeastCommonSubsumer]:
        """Expand both hypernym frontiers until the minimum is settled.

        After round ``r`` every synset not yet reached from one side is more
        than ``r`` hops away from it, so the best combined distance found so
        far is final once it is no larger than ``r``.
        """
        a, b = self._resolve(a, b)
        side_a = _Frontier(a)
        side_b = _Frontier(b)
        meeting: dict[Synset, int] = {}
        if a == b:
            meeting[a] = 0
        best = 0 if meeting else None

        while best is None or best > side_a.radius:
            if not side_a.frontier and not side_b.frontier:
                break
            for node in side_a.expand(self._view):
                if node in side_b.depth:
                    meeting[node] = side_a.depth[node] + side_b.depth[node]
            for node in side_b.expand(self._view):
                if node in side_a.depth:
                    meeting[node] = side_a.depth[node] + side_b.depth[node]
            if meeting:
                best = min(meeting.values())

        if logger.isEnabledFor(logging.DEBUG):
            for side in (side_a, side_b):
                cycles = side.cycles()
                if cycles:
                    logger.debug(
                        f"Cycles found above {side.origin!r}: {cycles}"
                    )
        if best is None:
            return frozenset()

        records: set[LeastCommonSubsumer] = set()
        for node, distance in meeting.items():
            if distance != best:
                continue
            for path_a in side_a.paths_to(node):
                for path_b in side_b.paths_to(node):
                    records.add(LeastCommonSubsumer(
                        node, RelationPath(path_a), RelationPath(path_b),
                        distance,
                    ))
        return frozenset(records)

    # ------------------------------------------------------------------
    # Root-path intersection
    # ------------------------------------------------------------------

    def find_by_root_paths(
        self, a: Synset | int, b: Synset | int
    ) -> frozenset[LeastCommonSubsumer]:
        """Intersect every path to the root of ``a`` with every one of ``b``.

        The distance through a shared node is its index on the path from
        ``a`` plus its index on the path from ``b``.
        """
        a, b = self._resolve(a, b)
        index = self.root_paths
        records: set[LeastCommonSubsumer] = set()
        shortest: int | None = None

        for path_a in index.paths_to_root(a):
            nodes_a = path_a.node_set()
            for path_b in index.paths_to_root(b):
                for node in nodes_a.intersection(path_b.nodes):
                    dist_a = path_a.index_of(node)
                    dist_b = path_b.index_of(node)
                    distance = dist_a + dist_b
                    if shortest is not None and distance > shortest:
                        continue
                    if shortest is None or distance < shortest:
                        records.clear()
                        shortest = distance
                    records.add(LeastCommonSubsumer(
                        node,
                        RelationPath(path_a.nodes[: dist_a + 1]),
                        RelationPath(path_b.nodes[: dist_b + 1]),
                        distance,
                    ))
        return frozenset(records)

    # ------------------------------------------------------------------
    # Cross-check
    # ------------------------------------------------------------------

    def cross_check(
        self, a: Synset | int, b: Synset | int
    ) -> frozenset[LeastCommonSubsumer]:
        """Run both strategies and return their common result.

        Raises:
            ConsistencyError: if the two record sets differ.
        """
        by_frontier = self.find_by_frontier(a, b)
        by_root_paths = self.find_by_root_paths(a, b)
        if by_frontier != by_root_paths:
            only_frontier = [str(r) for r in sorted_records(
                by_frontier - by_root_paths)]
            only_root = [str(r) for r in sorted_records(
                by_root_paths - by_frontier)]
            raise ConsistencyError(
                f"LCS strategies disagree for {a!r} and {b!r}: "
                f"frontier only {only_frontier}, root paths only {only_root}"
            )
        return by_frontier


def lcs_distance(records: frozenset[LeastCommonSubsumer]) -> int | None:
    """The shared distance of an LCS record set, None when it is empty."""
    for record in records:
        return record.distance
    return None
