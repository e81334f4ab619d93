"""Entity vocabulary: closed lists of phrases accepted by typed slots."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_VOCABULARY_RESOURCE = "entity_types.yaml"
ENTITY_TYPES_KEY = "entity_types"

_IDENT_RE = re.compile(r"\w+")


class VocabularyError(Exception):
    """Raised when an entity vocabulary cannot be loaded or is invalid."""


class EntityVocabulary:
    """Read-only mapping from entity-type name to its ordered phrases.

    Phrase order is kept exactly as supplied; it decides which alternative
    the compiled pattern prefers when several could match.
    """

    def __init__(self, entity_types: Mapping[str, Sequence[str]]) -> None:
        self._entity_types: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {name: tuple(phrases) for name, phrases in entity_types.items()}
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> EntityVocabulary:
        """Build a vocabulary from a plain mapping, validating its shape."""
        for name, phrases in mapping.items():
            _validate_entry(name, phrases, "mapping")
        return cls(mapping)

    def lookup(self, entity_type: str) -> tuple[str, ...] | None:
        """Return the phrases for ``entity_type``, or None when it is unknown."""
        return self._entity_types.get(entity_type)

    @property
    def entity_types(self) -> list[str]:
        return list(self._entity_types)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._entity_types

    def __len__(self) -> int:
        return len(self._entity_types)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entity_types)

    def __repr__(self) -> str:
        return f"EntityVocabulary({self.entity_types!r})"


def load_vocabulary(path: Path) -> EntityVocabulary:
    """Load an entity vocabulary from a YAML file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VocabularyError(f"Cannot read {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise VocabularyError(f"Invalid YAML in {path}: {exc}") from exc
    vocabulary = _from_document(raw, str(path))
    logger.debug("Loaded %d entity type(s) from %s", len(vocabulary), path)
    return vocabulary


def default_vocabulary() -> EntityVocabulary:
    """Load the entity vocabulary bundled with the package."""
    text = (
        resources.files("voice_templates.data")
        .joinpath(DEFAULT_VOCABULARY_RESOURCE)
        .read_text(encoding="utf-8")
    )
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise VocabularyError(f"Invalid bundled vocabulary: {exc}") from exc
    return _from_document(raw, DEFAULT_VOCABULARY_RESOURCE)


def _from_document(raw: Any, source: str) -> EntityVocabulary:
    if not isinstance(raw, dict):
        raise VocabularyError(f"Invalid vocabulary format in {source}: expected mapping")
    if ENTITY_TYPES_KEY not in raw:
        raise VocabularyError(f"Missing required key '{ENTITY_TYPES_KEY}' in {source}")
    entity_types = raw[ENTITY_TYPES_KEY]
    if not isinstance(entity_types, dict):
        raise VocabularyError(f"'{ENTITY_TYPES_KEY}' must be a mapping in {source}")
    for name, phrases in entity_types.items():
        _validate_entry(name, phrases, source)
    return EntityVocabulary(entity_types)


def _validate_entry(name: Any, phrases: Any, source: str) -> None:
    if not isinstance(name, str) or not _IDENT_RE.fullmatch(name):
        raise VocabularyError(f"Invalid entity type name {name!r} in {source}")
    if isinstance(phrases, str) or not isinstance(phrases, Sequence):
        raise VocabularyError(f"Entity type '{name}' must be a list of phrases in {source}")
    for phrase in phrases:
        if not isinstance(phrase, str):
            raise VocabularyError(
                f"Entity type '{name}' has non-string phrase {phrase!r} in {source}"
            )
