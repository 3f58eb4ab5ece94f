"""Tests for BookRecord."""

import dataclasses

import pytest

from bookscout.models import BookRecord


def test_from_dict_full_record():
    """Test a well-formed mapping."""
    book = BookRecord.from_dict({
        "id": "b1",
        "title": "The Midnight Library",
        "author": "Matt Haig",
        "description": "Between life and death there is a library.",
        "genres": ["Fiction", "Fantasy"],
        "rating": 4.5,
        "year": 2020,
    })

    assert book.id == "b1"
    assert book.title == "The Midnight Library"
    assert book.author == "Matt Haig"
    assert book.genres == ("Fiction", "Fantasy")
    assert book.rating == 4.5
    assert book.year == 2020


def test_from_dict_genre_objects_and_alias():
    """Test the ``genre`` key with {id, name} entries."""
    book = BookRecord.from_dict({
        "id": 7,
        "genre": [{"id": "g1", "name": "Fiction"}, {"id": "g3", "name": "Fantasy"}],
    })
    assert book.id == "7"
    assert book.genres == ("Fiction", "Fantasy")


def test_from_dict_defaults():
    """Test missing and null fields."""
    book = BookRecord.from_dict({"id": "x", "title": None, "rating": None})
    assert book.title == ""
    assert book.author == ""
    assert book.description == ""
    assert book.genres == ()
    assert book.rating == 0.0
    assert book.year == 0


def test_from_dict_single_genre_string():
    """Test a bare string genre."""
    assert BookRecord.from_dict({"id": "x", "genres": "Horror"}).genres == ("Horror",)


def test_from_dict_skips_null_genres():
    """Test null, blank and nameless genre entries are dropped."""
    book = BookRecord.from_dict({
        "id": "x",
        "genres": [None, "Fantasy", "  ", {"id": "g2"}, {"id": "g3", "name": None}, {"name": "Epic"}],
    })
    assert book.genres == ("Fantasy", "Epic")
    assert "none" not in " ".join(book.genres).lower()


def test_from_dict_requires_id():
    """Test records without an id are rejected."""
    with pytest.raises(ValueError):
        BookRecord.from_dict({"title": "No id"})
    with pytest.raises(ValueError):
        BookRecord.from_dict({"id": "  "})
    with pytest.raises(TypeError):
        BookRecord.from_dict(["not", "a", "mapping"])


def test_from_dict_bad_number():
    """Test non-numeric ratings are rejected."""
    with pytest.raises(ValueError):
        BookRecord.from_dict({"id": "x", "rating": "great"})


def test_to_dict():
    """Test conversion back to plain data."""
    book = BookRecord(id="b1", title="T", genres=("Fantasy",), rating=4.0, year=2001)
    assert book.to_dict() == {
        "id": "b1",
        "title": "T",
        "author": "",
        "description": "",
        "genres": ["Fantasy"],
        "rating": 4.0,
        "year": 2001,
    }


def test_genres_stored_as_tuple():
    """Test list input is frozen."""
    book = BookRecord(id="b1", genres=["Fantasy", "Epic"])
    assert book.genres == ("Fantasy", "Epic")


def test_record_is_immutable():
    """Test records cannot be changed in place."""
    book = BookRecord(id="b1", title="Original")
    with pytest.raises(dataclasses.FrozenInstanceError):
        book.title = "Changed"


def test_with_genres_returns_copy():
    """Test genre replacement leaves the original alone."""
    book = BookRecord(id="b1", genres=("sci-fi",))
    updated = book.with_genres(["Science Fiction"])
    assert updated.genres == ("Science Fiction",)
    assert book.genres == ("sci-fi",)
    assert updated.id == "b1"
