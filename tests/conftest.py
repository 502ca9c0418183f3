"""Shared test fixtures for wordnet-graph."""

from pathlib import Path

import pytest

from wordnet_graph import (
    EntityGraphView,
    LcsFinder,
    SemanticGraph,
    load_network,
)

FIXTURES = Path(__file__).parent / "fixtures"

APFEL = 39494
BIRNE = 39495
ZIERAPFEL = 39497
KERNOBST = 39491
OBJEKT = 50981
BAUM = 46042
AST = 46100
GNROOT = 51001
ESSEN = 60001
VERZEHREN = 60002


@pytest.fixture
def network():
    """The GermaNet-style fixture network."""
    return load_network(FIXTURES / "germanet.yaml")


@pytest.fixture
def view(network):
    return EntityGraphView(network)


@pytest.fixture
def finder(view):
    return LcsFinder(view)


@pytest.fixture
def semantic():
    return SemanticGraph.from_yaml(FIXTURES / "germanet.yaml")


def small_network(hypernyms, *, root=1, category="noun"):
    """Build a tiny network from ``{synset_id: [hypernym ids]}``.

    Inverses are not completed, so the stored relations are exactly the
    listed ones.
    """
    ids = set(hypernyms) | {root}
    for targets in hypernyms.values():
        ids.update(targets)
    synsets = []
    for sid in sorted(ids):
        entry = {"id": sid, "category": category}
        if hypernyms.get(sid):
            entry["relations"] = {"hyperonymy": list(hypernyms[sid])}
        synsets.append(entry)
    return load_network({"root": root, "synsets": synsets}, auto_inverse=False)
