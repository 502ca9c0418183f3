"""Import pipeline for WN-LMF XML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from wordnet_graph.collection import EntityCollection
from wordnet_graph.exceptions import DataImportError, WordnetGraphError
from wordnet_graph.models import LexUnit, Relation, Synset, WordCategory
from wordnet_graph.relations import (
    LMF_CATEGORIES,
    LMF_SENSE_RELATIONS,
    LMF_SYNSET_RELATIONS,
    with_inverses,
)

logger = logging.getLogger(__name__)


def load_lmf(
    source: str | Path,
    root: str,
    *,
    lexicon: str | None = None,
    auto_inverse: bool = True,
) -> EntityCollection:
    """Load a WN-LMF XML file into an EntityCollection.

    Synsets and senses get integer identifiers in document order; the
    original string identifiers are kept as ``key``. Senses become
    lexical units. Relation types and parts of speech without a
    counterpart are skipped with a warning.

    Args:
        source: Path to the WN-LMF file
        root: Identifier of the synset to use as the hierarchy root
        lexicon: Only import the lexicon with this id (default: all)
        auto_inverse: If True, add missing inverse relations

    Raises:
        FileNotFoundError: If the file does not exist
        DataImportError: If the XML cannot be parsed or has no usable root
    """
    import wn.lmf

    source = Path(source)
    if not source.exists():
        raise FileNotFoundError(f"File not found: {source}")

    try:
        resource = wn.lmf.load(str(source))
    except Exception as e:
        raise DataImportError(f"Failed to parse XML: {e}") from e

    lexicons = list(resource.get("lexicons", []))
    if lexicon is not None:
        lexicons = [lex for lex in lexicons if lex.get("id") == lexicon]
        if not lexicons:
            raise DataImportError(f"Lexicon not found in {source}: {lexicon!r}")

    importer = _LmfImporter()
    for lex in lexicons:
        importer.add_lexicon(lex)
    logger.info(
        f"Imported {len(importer.synsets)} synsets and "
        f"{len(importer.lexunits)} lexical units from {source}"
    )
    return importer.build(root, auto_inverse=auto_inverse)


class _LmfImporter:
    """Helper class collecting nodes and relations across lexicons."""

    def __init__(self) -> None:
        self.synsets: list[Synset] = []
        self.lexunits: list[LexUnit] = []
        self.synset_ids: dict[str, int] = {}
        self.sense_ids: dict[str, int] = {}
        self._synset_forms: dict[str, list[str]] = {}
        self._categories: dict[int, WordCategory] = {}
        self._pending: list[tuple[str, Any, str, dict[str, int]]] = []

    def _next_id(self) -> int:
        return len(self.synset_ids) + len(self.sense_ids) + 1

    def add_lexicon(self, lex: dict) -> None:
        lex_id = lex.get("id", "")
        entries = lex.get("entries", [])

        for entry in entries:
            lemma = entry.get("lemma", {}).get("writtenForm", "")
            for sense in entry.get("senses", []):
                forms = self._synset_forms.setdefault(sense.get("synset", ""), [])
                if lemma and lemma not in forms:
                    forms.append(lemma)

        for syn in lex.get("synsets", []):
            pos = syn.get("partOfSpeech") or ""
            category = LMF_CATEGORIES.get(pos)
            if category is None:
                logger.warning(
                    f"{lex_id}: skipping synset {syn['id']} with part of "
                    f"speech {pos!r}"
                )
                continue
            synset_id = self._next_id()
            self.synset_ids[syn["id"]] = synset_id
            self._categories[synset_id] = category
            self.synsets.append(Synset(
                id=synset_id,
                category=category,
                forms=tuple(self._synset_forms.get(syn["id"], ())),
                key=syn["id"],
            ))
            for rel in syn.get("relations", []):
                kind = LMF_SYNSET_RELATIONS.get(rel["relType"])
                if kind is None:
                    logger.warning(
                        f"{lex_id}: skipping synset relation "
                        f"{rel['relType']!r} of {syn['id']}"
                    )
                    continue
                self._pending.append(
                    (syn["id"], kind, rel["target"], self.synset_ids)
                )

        for entry in entries:
            lemma = entry.get("lemma", {})
            forms = [lemma.get("writtenForm", "")]
            for form in entry.get("forms", []):
                text = form.get("writtenForm", "")
                if text and text not in forms:
                    forms.append(text)
            for sense in entry.get("senses", []):
                owner = self.synset_ids.get(sense.get("synset", ""))
                if owner is None:
                    logger.warning(
                        f"{lex_id}: skipping sense {sense['id']} of "
                        f"unknown synset {sense.get('synset')!r}"
                    )
                    continue
                unit_id = self._next_id()
                self.sense_ids[sense["id"]] = unit_id
                category = LMF_CATEGORIES.get(
                    lemma.get("partOfSpeech", ""), self._categories[owner]
                )
                self.lexunits.append(LexUnit(
                    id=unit_id,
                    synset_id=owner,
                    category=category,
                    forms=tuple(f for f in forms if f),
                    key=sense["id"],
                ))
                for rel in sense.get("relations", []):
                    kind = LMF_SENSE_RELATIONS.get(rel["relType"])
                    if kind is None:
                        logger.warning(
                            f"{lex_id}: skipping sense relation "
                            f"{rel['relType']!r} of {sense['id']}"
                        )
                        continue
                    self._pending.append(
                        (sense["id"], kind, rel["target"], self.sense_ids)
                    )

    def _relations(self) -> list[Relation]:
        relations = []
        for source, kind, target, ids in self._pending:
            if target not in ids:
                logger.warning(
                    f"Skipping {kind.value} from {source} to unknown "
                    f"target {target!r}"
                )
                continue
            if target == source:
                logger.warning(f"Skipping {kind.value} self-loop on {source}")
                continue
            relations.append(Relation(ids[source], kind, ids[target]))
        return relations

    def build(self, root: str, *, auto_inverse: bool) -> EntityCollection:
        if root not in self.synset_ids:
            raise DataImportError(f"Root synset not found: {root!r}")
        relations = self._relations()
        if auto_inverse:
            relations = with_inverses(relations)
        try:
            return EntityCollection(
                self.synsets, self.lexunits, relations, self.synset_ids[root]
            )
        except WordnetGraphError as e:
            raise DataImportError(f"Inconsistent LMF data: {e}") from e
