"""
YAML parser for small lexical-semantic networks.

A network file looks like::

    root: 1
    synsets:
      - id: 1
        category: noun
        forms: [entity]
      - id: 2
        category: noun
        relations:
          hyperonymy: [1]
        lexunits:
          - id: 20
            forms: [fruit]
            relations:
              antonymy: [21]

Synset forms default to the forms of their lexical units and lexical
units inherit their synset's category.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from wordnet_graph.collection import EntityCollection
from wordnet_graph.exceptions import DataImportError, WordnetGraphError
from wordnet_graph.models import (
    ConceptualRelation,
    LexicalRelation,
    LexUnit,
    Relation,
    Synset,
    WordCategory,
)
from wordnet_graph.relations import with_inverses


class ParseError(DataImportError):
    """Error parsing a network file."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(message)


def load_network(
    source: str | Path | dict[str, Any],
    *,
    auto_inverse: bool = True,
) -> EntityCollection:
    """Load a network from a YAML file, a YAML string or a dictionary.

    Args:
        source: Path to YAML file, YAML string, or parsed dictionary
        auto_inverse: If True, add the inverse of every relation that has
            one, unless the inverse is already listed

    Returns:
        EntityCollection holding the network

    Raises:
        ParseError: If the content cannot be parsed or is invalid
        FileNotFoundError: If the file does not exist
    """
    if isinstance(source, dict):
        data = source
    elif isinstance(source, Path) or (
        isinstance(source, str) and _is_file_path(source)
    ):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        data = _load_yaml_file(path)
    else:
        data = _load_yaml_string(source)

    return _parse_network(data, auto_inverse=auto_inverse)


def _is_file_path(s: str) -> bool:
    """Check if a string looks like a file path."""
    if "\n" in s:
        return False
    if "/" in s or "\\" in s:
        return True
    return s.endswith((".yaml", ".yml"))


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load YAML from a file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        line = getattr(e, "problem_mark", None)
        line_num = line.line + 1 if line else None
        raise ParseError(f"Invalid YAML: {e}", line=line_num) from e
    return _check_root(data, "Empty YAML file")


def _load_yaml_string(s: str) -> dict[str, Any]:
    """Load YAML from a string."""
    try:
        data = yaml.safe_load(s)
    except yaml.YAMLError as e:
        line = getattr(e, "problem_mark", None)
        line_num = line.line + 1 if line else None
        raise ParseError(f"Invalid YAML: {e}", line=line_num) from e
    return _check_root(data, "Empty YAML content")


def _check_root(data: Any, empty_message: str) -> dict[str, Any]:
    if data is None:
        raise ParseError(empty_message)
    if not isinstance(data, dict):
        raise ParseError("YAML root must be a mapping (dictionary)")
    return data


def _parse_network(
    data: dict[str, Any], *, auto_inverse: bool
) -> EntityCollection:
    """Parse a dictionary into an EntityCollection."""
    root = data.get("root")
    if root is None:
        raise ParseError("Missing required field: 'root'")
    if not isinstance(root, int):
        raise ParseError("Field 'root' must be an integer")

    synsets_data = data.get("synsets")
    if synsets_data is None:
        raise ParseError("Missing required field: 'synsets'")
    if not isinstance(synsets_data, list):
        raise ParseError("Field 'synsets' must be a list")

    synsets: list[Synset] = []
    lexunits: list[LexUnit] = []
    relations: list[Relation] = []

    for i, synset_data in enumerate(synsets_data):
        where = f"Synset #{i + 1}"
        if not isinstance(synset_data, dict):
            raise ParseError(f"{where} must be a mapping (dictionary)")
        synset_id = _require_int(synset_data, "id", where)
        category = _parse_category(synset_data.get("category"), where)

        member_forms: list[str] = []
        for j, unit_data in enumerate(synset_data.get("lexunits") or []):
            unit_where = f"{where}, lexunit #{j + 1}"
            if not isinstance(unit_data, dict):
                raise ParseError(f"{unit_where} must be a mapping (dictionary)")
            unit_id = _require_int(unit_data, "id", unit_where)
            forms = _parse_forms(unit_data.get("forms"), unit_where)
            unit_category = category
            if "category" in unit_data:
                unit_category = _parse_category(unit_data["category"], unit_where)
            lexunits.append(LexUnit(
                id=unit_id,
                synset_id=synset_id,
                category=unit_category,
                forms=forms,
                key=unit_data.get("key"),
            ))
            member_forms.extend(f for f in forms if f not in member_forms)
            relations.extend(_parse_relations(
                unit_id, unit_data.get("relations"), LexicalRelation,
                unit_where,
            ))

        if "forms" in synset_data:
            synset_forms = _parse_forms(synset_data["forms"], where)
        else:
            synset_forms = tuple(member_forms)
        synsets.append(Synset(
            id=synset_id,
            category=category,
            forms=synset_forms,
            key=synset_data.get("key"),
        ))
        relations.extend(_parse_relations(
            synset_id, synset_data.get("relations"), ConceptualRelation, where,
        ))

    if auto_inverse:
        relations = with_inverses(relations)

    try:
        return EntityCollection(synsets, lexunits, relations, root)
    except WordnetGraphError as e:
        if isinstance(e, DataImportError):
            raise
        raise ParseError(str(e)) from e


def _require_int(data: dict[str, Any], field: str, where: str) -> int:
    value = data.get(field)
    if value is None:
        raise ParseError(f"{where}: Missing required field '{field}'")
    if not isinstance(value, int) or isinstance(value, bool):
        raise ParseError(f"{where}: Field '{field}' must be an integer")
    return value


def _parse_category(value: Any, where: str) -> WordCategory:
    if value is None:
        raise ParseError(f"{where}: Missing required field 'category'")
    try:
        return WordCategory(value)
    except ValueError:
        valid = ", ".join(c.value for c in WordCategory)
        raise ParseError(
            f"{where}: Invalid category {value!r} (expected one of {valid})"
        ) from None


def _parse_forms(value: Any, where: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(f"{where}: Field 'forms' must be a list of strings")
    return tuple(value)


def _parse_relations(
    source_id: int,
    value: Any,
    kinds: type[ConceptualRelation] | type[LexicalRelation],
    where: str,
) -> list[Relation]:
    if value is None:
        return []
    if not isinstance(value, dict):
        raise ParseError(f"{where}: Field 'relations' must be a mapping")
    parsed = []
    for name, targets in value.items():
        try:
            kind = kinds(name)
        except ValueError:
            valid = ", ".join(k.value for k in kinds)
            raise ParseError(
                f"{where}: Unknown relation {name!r} (expected one of {valid})"
            ) from None
        if isinstance(targets, int):
            targets = [targets]
        if not isinstance(targets, list) or not all(
            isinstance(t, int) for t in targets
        ):
            raise ParseError(
                f"{where}: Targets of {name!r} must be a list of integers"
            )
        parsed.extend(Relation(source_id, kind, t) for t in targets)
    return parsed

