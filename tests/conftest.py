"""Shared test fixtures for voice-templates."""

from pathlib import Path

import pytest

from voice_templates.vocabulary import EntityVocabulary


@pytest.fixture
def vocab() -> EntityVocabulary:
    """A small vocabulary with a subset of services and an elidable entity."""
    return EntityVocabulary.from_mapping({
        "serviceName": ["gmail", "google drive"],
        "musicServiceName": ["youtube", "spotify"],
        "article": ["", "the", "a"],
        "site": ["dictionary.com"],
    })


@pytest.fixture
def vocab_yaml() -> str:
    return """\
entity_types:
  serviceName:
    - gmail
    - google drive
  lang: [english, french]
"""


@pytest.fixture
def vocab_file(tmp_path: Path, vocab_yaml: str) -> Path:
    """Write a vocabulary YAML file and return its path."""
    path = tmp_path / "vocab.yaml"
    path.write_text(vocab_yaml)
    return path
