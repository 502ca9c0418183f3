"""Custom exception hierarchy for wordnet-graph."""


class WordnetGraphError(Exception):
    """Base exception for all wordnet-graph errors."""


class ValidationError(WordnetGraphError):
    """Invalid data (self-loop, wrong relation kind for a node)."""


class EntityNotFoundError(WordnetGraphError):
    """Node identifier does not resolve to a synset or lexical unit."""


class RootNotFoundError(EntityNotFoundError):
    """The designated root identifier does not resolve to a synset."""


class DuplicateEntityError(WordnetGraphError):
    """Entity with same ID already exists."""


class IncomparableNodesError(WordnetGraphError):
    """The two nodes belong to different word categories."""


class ConsistencyError(WordnetGraphError):
    """Two LCS strategies disagree on the same input pair."""


class ScanCancelledError(WordnetGraphError):
    """A corpus scan was cancelled before it completed."""


class DataImportError(WordnetGraphError):
    """Failed to import data (malformed XML, etc.)."""
