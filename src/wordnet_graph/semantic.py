"""SemanticGraph: main entry point for the wordnet-graph library."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import networkx as nx

from wordnet_graph import nxgraph
from wordnet_graph.collection import EntityCollection
from wordnet_graph.graph import EntityGraphView
from wordnet_graph.lcs import FRONTIER, LcsFinder
from wordnet_graph.models import (
    ConceptualRelation,
    LeastCommonSubsumer,
    LexUnit,
    Node,
    PathSearchResult,
    RelationKind,
    RelationPath,
    ScanResult,
    Synset,
    ValidationResult,
    WordCategory,
)
from wordnet_graph.paths import RootPathIndex, find_all_paths
from wordnet_graph.scanner import CorpusLcsScanner

_GRAPH_BUILDERS: dict[str, Callable[[EntityGraphView], nx.MultiDiGraph]] = {
    "synset": nxgraph.synset_graph,
    "hypernym": nxgraph.hypernym_graph,
    "hyponym": nxgraph.hyponym_graph,
    "lexunit": nxgraph.lexunit_graph,
    "full": nxgraph.full_graph,
}


class SemanticGraph:
    """Read-only queries over a loaded lexical-semantic network.

    The graph view is built on construction; the root-path index, the
    networkx exports and the per-category scan results are built on first
    use and cached.
    """

    def __init__(self, collection: EntityCollection) -> None:
        self._view = EntityGraphView(collection)
        self._finder = LcsFinder(self._view)
        self._lock = threading.Lock()
        self._longest: dict[WordCategory, ScanResult] = {}
        self._nx_graphs: dict[str, nx.MultiDiGraph] = {}

    @classmethod
    def from_yaml(
        cls,
        source: str | Path | dict[str, Any],
        *,
        auto_inverse: bool = True,
    ) -> SemanticGraph:
        from wordnet_graph.parser import load_network

        return cls(load_network(source, auto_inverse=auto_inverse))

    @classmethod
    def from_lmf(
        cls,
        source: str | Path,
        root: str,
        *,
        lexicon: str | None = None,
        auto_inverse: bool = True,
    ) -> SemanticGraph:
        from wordnet_graph.importer import load_lmf

        return cls(load_lmf(
            source, root, lexicon=lexicon, auto_inverse=auto_inverse,
        ))

    @property
    def view(self) -> EntityGraphView:
        return self._view

    @property
    def root(self) -> Synset:
        return self._view.root

    def __repr__(self) -> str:
        return f"SemanticGraph({self._view.collection!r})"

    # ------------------------------------------------------------------
    # Nodes and relations
    # ------------------------------------------------------------------

    def synset(self, synset_id: int) -> Synset:
        return self._view.synset(synset_id)

    def lexunit(self, lexunit_id: int) -> LexUnit:
        return self._view.lexunit(lexunit_id)

    def related(self, node: Node | int, kind: RelationKind) -> tuple[Node, ...]:
        return self._view.related(node, kind)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def all_paths(
        self,
        start: Synset | int,
        target: Synset | int,
        kind: ConceptualRelation = ConceptualRelation.HYPERONYMY,
    ) -> PathSearchResult:
        return find_all_paths(self._view, start, target, kind)

    @property
    def root_path_index(self) -> RootPathIndex:
        return self._finder.root_paths

    def paths_to_root(self, synset: Synset | int) -> frozenset[RelationPath]:
        return self.root_path_index.paths_to_root(synset)

    # ------------------------------------------------------------------
    # Least common subsumers
    # ------------------------------------------------------------------

    def least_common_subsumers(
        self,
        a: Synset | int,
        b: Synset | int,
        strategy: str = FRONTIER,
    ) -> frozenset[LeastCommonSubsumer]:
        return self._finder.find(a, b, strategy)

    def verify_lcs(
        self, a: Synset | int, b: Synset | int
    ) -> frozenset[LeastCommonSubsumer]:
        """LCS records confirmed by both strategies (ConsistencyError if not)."""
        return self._finder.cross_check(a, b)

    def longest_least_common_subsumers(
        self,
        category: WordCategory,
        *,
        workers: int = 1,
        prune: bool = True,
        cancel_event: threading.Event | None = None,
    ) -> ScanResult:
        """The most distant LCS records among all synsets of ``category``.

        Completed scans are cached per category; a cancelled scan leaves
        nothing behind.
        """
        category = WordCategory(category)
        with self._lock:
            cached = self._longest.get(category)
        if cached is not None:
            return cached
        scanner = CorpusLcsScanner(self._finder, workers=workers, prune=prune)
        result = scanner.scan(category, cancel_event=cancel_event)
        with self._lock:
            return self._longest.setdefault(category, result)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> list[ValidationResult]:
        from wordnet_graph.validator import validate_all
        return validate_all(self._view)

    def validate_hierarchy(self) -> list[ValidationResult]:
        from wordnet_graph.validator import validate_hierarchy
        return validate_hierarchy(self._view)

    # ------------------------------------------------------------------
    # networkx
    # ------------------------------------------------------------------

    def to_networkx(self, kind: str = "synset") -> nx.MultiDiGraph:
        """One of the ``synset``, ``hypernym``, ``hyponym``, ``lexunit`` or
        ``full`` multigraphs, built once and shared.
        """
        try:
            builder = _GRAPH_BUILDERS[kind]
        except KeyError:
            raise ValueError(
                f"Unknown graph kind {kind!r}, expected one of "
                f"{sorted(_GRAPH_BUILDERS)}"
            ) from None
        with self._lock:
            graph = self._nx_graphs.get(kind)
            if graph is None:
                graph = builder(self._view)
                self._nx_graphs[kind] = graph
        return graph

    def shortest_path(
        self,
        a: Node | int,
        b: Node | int,
        kind: str = "synset",
    ) -> list[Node] | None:
        """Unweighted shortest path in a networkx export.

        Integer identifiers denote lexical units in the ``lexunit`` graph
        and synsets everywhere else.
        """
        graph = self.to_networkx(kind)
        resolve = self._view.lexunit if kind == "lexunit" else self._view.synset
        source = a if isinstance(a, (Synset, LexUnit)) else resolve(a)
        target = b if isinstance(b, (Synset, LexUnit)) else resolve(b)
        return nxgraph.shortest_path(graph, source, target)
