"""Tests for catalog loading."""

import json
import logging

import pytest
import yaml

from bookscout.catalog import CatalogError, load_catalog, load_stop_words
from bookscout.models import BookRecord
from bookscout.similarity import GenreNormalizer


@pytest.fixture
def records():
    """Raw catalog records."""
    return [
        {"id": "b1", "title": "Dragon Quest", "author": "Ann Lee",
         "description": "A dragon hunt.", "genres": ["sci-fi", "Fantasy"], "rating": 4.2, "year": 2019},
        {"id": "b2", "title": "Love Letters", "author": "Bo Park",
         "description": "A romance.", "genre": [{"id": "g6", "name": "Romance"}], "rating": 3.9, "year": 2011},
    ]


def test_load_json_list(tmp_path, records):
    """Test a JSON list of records."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(records))

    books = load_catalog(path)
    assert [b.id for b in books] == ["b1", "b2"]
    assert all(isinstance(b, BookRecord) for b in books)
    assert books[1].genres == ("Romance",)


def test_load_json_object_with_books_key(tmp_path, records):
    """Test a JSON object wrapping the list."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"books": records, "source": "test"}))
    assert len(load_catalog(str(path))) == 2


def test_load_jsonl(tmp_path, records):
    """Test JSON Lines, blank lines ignored."""
    path = tmp_path / "catalog.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n\n")
    assert [b.id for b in load_catalog(path)] == ["b1", "b2"]


def test_load_yaml(tmp_path, records):
    """Test YAML catalogs."""
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump(records))
    books = load_catalog(path)
    assert books[0].title == "Dragon Quest"
    assert books[0].rating == 4.2


def test_load_empty_yaml(tmp_path):
    """Test an empty YAML document."""
    path = tmp_path / "catalog.yml"
    path.write_text("")
    assert load_catalog(path) == []


def test_malformed_records_are_skipped(tmp_path, records, caplog):
    """Test records without an id are skipped with a warning."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"title": "No id"}, "not a record"] + records))

    with caplog.at_level(logging.WARNING, logger="bookscout.catalog"):
        books = load_catalog(path)

    assert [b.id for b in books] == ["b1", "b2"]
    assert "Skipping record 0" in caplog.text
    assert "Skipping record 1" in caplog.text


def test_duplicate_ids_keep_first(tmp_path, records):
    """Test the first record of a repeated id wins."""
    duplicate = dict(records[0], title="Second Copy")
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(records + [duplicate]))

    books = load_catalog(path)
    assert len(books) == 2
    assert books[0].title == "Dragon Quest"


def test_genre_normalizer_applied(tmp_path, records):
    """Test genre normalization while loading."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(records))

    books = load_catalog(path, normalizer=GenreNormalizer())
    assert books[0].genres == ("Science Fiction", "Fantasy")


def test_missing_catalog(tmp_path):
    """Test a missing file."""
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "missing.json")


def test_unsupported_format(tmp_path):
    """Test unknown suffixes."""
    path = tmp_path / "catalog.csv"
    path.write_text("id,title\n1,x\n")
    with pytest.raises(CatalogError, match="Unsupported"):
        load_catalog(path)


def test_invalid_json(tmp_path):
    """Test undecodable content."""
    path = tmp_path / "catalog.json"
    path.write_text("{not json")
    with pytest.raises(CatalogError):
        load_catalog(path)


@pytest.mark.parametrize("name", ["catalog.json", "catalog.jsonl", "catalog.yaml"])
def test_catalog_not_utf8(tmp_path, name):
    """Test bytes that do not decode are reported as catalog errors."""
    path = tmp_path / name
    path.write_bytes(b"\xff\xfe[]")
    with pytest.raises(CatalogError, match="Invalid catalog"):
        load_catalog(path)


def test_non_list_catalog(tmp_path):
    """Test a JSON scalar is rejected."""
    path = tmp_path / "catalog.json"
    path.write_text("42")
    with pytest.raises(CatalogError, match="list of books"):
        load_catalog(path)


def test_catalog_error_is_value_error():
    """Test the exception hierarchy used by the CLI."""
    assert issubclass(CatalogError, ValueError)


# ============================================================================
# Stop Words
# ============================================================================


def test_load_stop_words_text(tmp_path):
    """Test plain text stop-word files with comments."""
    path = tmp_path / "stop_words.txt"
    path.write_text("# publishing noise\nNovel\nbook  # trailing comment\n\nedition\n")
    assert load_stop_words(path) == frozenset({"novel", "book", "edition"})


def test_load_stop_words_yaml(tmp_path):
    """Test YAML stop-word lists."""
    path = tmp_path / "stop_words.yaml"
    path.write_text(yaml.safe_dump(["Novel", "book"]))
    assert load_stop_words(path) == frozenset({"novel", "book"})


def test_load_stop_words_yaml_requires_list(tmp_path):
    """Test YAML mappings are rejected."""
    path = tmp_path / "stop_words.yaml"
    path.write_text("novel: true\n")
    with pytest.raises(CatalogError):
        load_stop_words(path)


def test_load_stop_words_not_utf8(tmp_path):
    """Test undecodable stop-word files."""
    path = tmp_path / "stop_words.txt"
    path.write_bytes(b"novel\n\xff\n")
    with pytest.raises(CatalogError, match="UTF-8"):
        load_stop_words(path)


def test_load_stop_words_missing(tmp_path):
    """Test a missing stop-word file."""
    with pytest.raises(FileNotFoundError):
        load_stop_words(tmp_path / "nope.txt")
