"""networkx multigraphs built from a graph view, for generic graph queries.

The engine's own path and LCS code never uses these graphs; they serve
diagnostics, export and independent cross-validation of distances.
"""

from __future__ import annotations

from enum import Enum

import networkx as nx

from wordnet_graph.exceptions import EntityNotFoundError, ValidationError
from wordnet_graph.graph import EntityGraphView
from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    Node,
    RelationKind,
    Synset,
)


class MembershipRelation(str, Enum):
    """Edges linking a synset and its lexical units in the full graph."""

    HAS_LEXUNIT = "has_lexunit"
    IS_LEXUNIT_OF = "is_lexunit_of"


def node_label(node: Node) -> str:
    """Identifier plus orthographic forms, for display."""
    return f"{node.id} {list(node.forms)}"


def _add_nodes(graph: nx.MultiDiGraph, nodes) -> None:
    for node in nodes:
        graph.add_node(
            node,
            id=node.id,
            category=node.category.value,
            forms=node.forms,
            label=node_label(node),
        )


def relation_graph(
    view: EntityGraphView, *kinds: RelationKind
) -> nx.MultiDiGraph:
    """A directed multigraph of the given relation kinds.

    Vertices are all synsets (or all lexical units for lexical kinds);
    duplicate relations become parallel edges.
    """
    sub = view.subview(*kinds)
    graph = nx.MultiDiGraph()
    _add_nodes(graph, sub.nodes())
    for source, kind, target in sub.edges():
        graph.add_edge(source, target, relation=kind)
    return graph


def synset_graph(view: EntityGraphView) -> nx.MultiDiGraph:
    return relation_graph(view, *ConceptualRelation)


def hypernym_graph(view: EntityGraphView) -> nx.MultiDiGraph:
    return relation_graph(view, ConceptualRelation.HYPERONYMY)


def hyponym_graph(view: EntityGraphView) -> nx.MultiDiGraph:
    return relation_graph(view, ConceptualRelation.HYPONYMY)


def lexunit_graph(view: EntityGraphView) -> nx.MultiDiGraph:
    return relation_graph(view, *LexicalRelation)


def full_graph(view: EntityGraphView) -> nx.MultiDiGraph:
    """Synsets and lexical units with every relation plus membership edges."""
    graph = synset_graph(view)
    graph.add_edges_from(lexunit_graph(view).edges(data=True))
    _add_nodes(graph, view.lexunits())
    for synset in view.synsets():
        for lexunit in view.lexunits_of(synset):
            graph.add_edge(
                synset, lexunit, relation=MembershipRelation.HAS_LEXUNIT
            )
            graph.add_edge(
                lexunit, synset, relation=MembershipRelation.IS_LEXUNIT_OF
            )
    return graph


def shortest_path(
    graph: nx.MultiDiGraph, source: Node, target: Node
) -> list[Node] | None:
    """Unweighted shortest path, or None when ``target`` is unreachable."""
    try:
        return nx.shortest_path(graph, source, target)
    except nx.NodeNotFound as e:
        raise EntityNotFoundError(str(e)) from e
    except nx.NetworkXNoPath:
        return None


def lowest_common_ancestor(
    graph: nx.MultiDiGraph, a: Synset, b: Synset
) -> Synset | None:
    """Lowest common ancestor in a graph whose edges point downwards.

    Use the hyponymy graph, where every edge runs from a synset to one of
    its hyponyms. The graph must be acyclic.
    """
    for node in (a, b):
        if node not in graph:
            raise EntityNotFoundError(f"Node not in graph: {node!r}")
    try:
        return nx.lowest_common_ancestor(nx.DiGraph(graph), a, b)
    except nx.NetworkXError as e:
        raise ValidationError(f"Cannot compute LCA: {e}") from e


def common_ancestor_distance(
    graph: nx.MultiDiGraph, a: Synset, b: Synset
) -> int | None:
    """Minimal hop sum from ``a`` and ``b`` to a shared ancestor.

    ``graph`` must have edges pointing upwards (the hyperonymy graph).
    """
    for node in (a, b):
        if node not in graph:
            raise EntityNotFoundError(f"Node not in graph: {node!r}")
    from_a = nx.single_source_shortest_path_length(graph, a)
    from_b = nx.single_source_shortest_path_length(graph, b)
    shared = from_a.keys() & from_b.keys()
    if not shared:
        return None
    return min(from_a[n] + from_b[n] for n in shared)
