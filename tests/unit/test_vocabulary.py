"""Unit tests for voice_templates.vocabulary."""

from pathlib import Path

import pytest

from voice_templates.vocabulary import (
    EntityVocabulary,
    VocabularyError,
    default_vocabulary,
    load_vocabulary,
)


class TestEntityVocabulary:
    def test_lookup_known(self, vocab: EntityVocabulary) -> None:
        assert vocab.lookup("serviceName") == ("gmail", "google drive")

    def test_lookup_unknown(self, vocab: EntityVocabulary) -> None:
        assert vocab.lookup("nope") is None

    def test_order_preserved(self) -> None:
        v = EntityVocabulary.from_mapping({"b": ["z", "a"], "a": ["y", "b"]})
        assert v.entity_types == ["b", "a"]
        assert v.lookup("b") == ("z", "a")

    def test_contains_and_len(self, vocab: EntityVocabulary) -> None:
        assert "serviceName" in vocab
        assert "nope" not in vocab
        assert len(vocab) == 4

    def test_source_mapping_changes_not_seen(self) -> None:
        source = {"app": ["gmail"]}
        v = EntityVocabulary.from_mapping(source)
        source["app"].append("maps")
        source["other"] = ["x"]
        assert v.lookup("app") == ("gmail",)
        assert "other" not in v

    def test_read_only(self, vocab: EntityVocabulary) -> None:
        with pytest.raises(TypeError):
            vocab._entity_types["new"] = ("x",)  # type: ignore[index]

    def test_from_mapping_rejects_bad_name(self) -> None:
        with pytest.raises(VocabularyError, match="Invalid entity type name"):
            EntityVocabulary.from_mapping({"bad-name": ["x"]})

    def test_from_mapping_rejects_string_entry(self) -> None:
        with pytest.raises(VocabularyError, match="must be a list"):
            EntityVocabulary.from_mapping({"app": "gmail"})


class TestLoadVocabulary:
    def test_load(self, vocab_file: Path) -> None:
        v = load_vocabulary(vocab_file)
        assert v.entity_types == ["serviceName", "lang"]
        assert v.lookup("lang") == ("english", "french")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("entity_types: [unterminated")
        with pytest.raises(VocabularyError, match="Invalid YAML"):
            load_vocabulary(path)

    def test_root_not_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(VocabularyError, match="expected mapping"):
            load_vocabulary(path)

    def test_missing_entity_types(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("types: {}\n")
        with pytest.raises(VocabularyError, match="Missing required key 'entity_types'"):
            load_vocabulary(path)

    def test_entry_not_list(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("entity_types:\n  app: {gmail: 1}\n")
        with pytest.raises(VocabularyError, match="must be a list"):
            load_vocabulary(path)

    def test_non_string_phrase(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("entity_types:\n  number: [1, 2]\n")
        with pytest.raises(VocabularyError, match="non-string phrase"):
            load_vocabulary(path)

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(VocabularyError, match="Cannot read"):
            load_vocabulary(tmp_path)

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_bytes(b"\xff\xfeentity_types: {}\n")
        with pytest.raises(VocabularyError, match="Cannot read"):
            load_vocabulary(path)

    def test_empty_phrase_allowed(self, tmp_path: Path) -> None:
        path = tmp_path / "vocab.yaml"
        path.write_text("entity_types:\n  article: ['', the]\n")
        assert load_vocabulary(path).lookup("article") == ("", "the")


class TestDefaultVocabulary:
    def test_bundled_entity_types(self) -> None:
        v = default_vocabulary()
        assert v.entity_types == ["serviceName", "musicServiceName", "lang", "smallNumber"]

    def test_bundled_phrases(self) -> None:
        v = default_vocabulary()
        assert v.lookup("musicServiceName") == ("youtube", "spotify", "video")
        assert v.lookup("serviceName")[0] == "google slides"
        assert "dictionary.com" in v.lookup("serviceName")
        assert v.lookup("smallNumber")[:2] == ("1", "2")
