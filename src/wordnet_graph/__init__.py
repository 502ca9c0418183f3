__version__ = "0.1.0"

from .semantic import SemanticGraph as SemanticGraph

from .collection import EntityCollection as EntityCollection
from .graph import (
    EntityGraphView as EntityGraphView,
    RelationView as RelationView,
)
from .paths import (
    RootPathIndex as RootPathIndex,
    find_all_paths as find_all_paths,
)
from .lcs import (
    FRONTIER as FRONTIER,
    ROOT_PATHS as ROOT_PATHS,
    LcsFinder as LcsFinder,
    lcs_distance as lcs_distance,
)
from .scanner import CorpusLcsScanner as CorpusLcsScanner

from .models import (
    WordCategory as WordCategory,
    ConceptualRelation as ConceptualRelation,
    LexicalRelation as LexicalRelation,
    Synset as Synset,
    LexUnit as LexUnit,
    Relation as Relation,
    RelationPath as RelationPath,
    PathSearchResult as PathSearchResult,
    LeastCommonSubsumer as LeastCommonSubsumer,
    ScanResult as ScanResult,
    ValidationResult as ValidationResult,
    sorted_records as sorted_records,
)

from .exceptions import (
    WordnetGraphError as WordnetGraphError,
    ValidationError as ValidationError,
    EntityNotFoundError as EntityNotFoundError,
    RootNotFoundError as RootNotFoundError,
    DuplicateEntityError as DuplicateEntityError,
    IncomparableNodesError as IncomparableNodesError,
    ConsistencyError as ConsistencyError,
    ScanCancelledError as ScanCancelledError,
    DataImportError as DataImportError,
)

from .parser import (
    ParseError as ParseError,
    load_network as load_network,
)
from .importer import load_lmf as load_lmf

__all__ = [
    # Entry point
    "SemanticGraph",
    # Engine
    "EntityCollection",
    "EntityGraphView",
    "RelationView",
    "RootPathIndex",
    "find_all_paths",
    "FRONTIER",
    "ROOT_PATHS",
    "LcsFinder",
    "lcs_distance",
    "CorpusLcsScanner",
    # Models
    "WordCategory",
    "ConceptualRelation",
    "LexicalRelation",
    "Synset",
    "LexUnit",
    "Relation",
    "RelationPath",
    "PathSearchResult",
    "LeastCommonSubsumer",
    "ScanResult",
    "ValidationResult",
    "sorted_records",
    # Exceptions
    "WordnetGraphError",
    "ValidationError",
    "EntityNotFoundError",
    "RootNotFoundError",
    "DuplicateEntityError",
    "IncomparableNodesError",
    "ConsistencyError",
    "ScanCancelledError",
    "DataImportError",
    "ParseError",
    # Loaders
    "load_network",
    "load_lmf",
]
