"""Tests for genre normalization."""

import pytest

from bookscout.similarity.genres import (
    GENERAL,
    STANDARD_GENRES,
    GenreNormalizer,
    normalize_genre,
    normalize_genres,
)


@pytest.mark.parametrize("label, expected", [
    ("sci-fi", "Science Fiction"),
    ("SF", "Science Fiction"),
    ("  Memoir ", "Biography"),
    ("FANTASY", "Fantasy"),
    ("Mystery", "Mystery"),
    ("young adult fiction", "Young Adult"),
    ("Fantasy & Magic", "Fantasy"),
    ("Cyberpunk noir", "Cyberpunk Noir"),
])
def test_normalize_genre(label, expected):
    """Test variant lookup, standard matching, partial matching and fallback."""
    assert normalize_genre(label) == expected


def test_normalize_genre_empty():
    """Test blank labels map to General."""
    assert normalize_genre("") == GENERAL
    assert normalize_genre("   ") == GENERAL


def test_normalize_genres_deduplicates():
    """Test duplicates and blanks are removed, order kept."""
    result = normalize_genres(["sci-fi", "Science Fiction", "", "fantasy"])
    assert result == ["Science Fiction", "Fantasy"]


def test_normalize_genres_empty():
    """Test empty input falls back to General."""
    assert normalize_genres([]) == [GENERAL]
    assert normalize_genres([""]) == [GENERAL]


def test_normalize_genres_caps_at_six():
    """Test at most six genres are kept."""
    labels = list(STANDARD_GENRES[:9])
    assert normalize_genres(labels) == labels[:6]


def test_custom_mappings_replace_defaults():
    """Test injected mapping tables."""
    normalizer = GenreNormalizer(mappings={"whodunit": "Mystery"})
    assert normalizer.normalize("Whodunit") == "Mystery"
    assert normalizer.normalize("sci-fi") == "Sci-fi"
    assert normalizer.normalize("fantasy") == "Fantasy"


def test_custom_standard_genres():
    """Test injected standard genre list."""
    normalizer = GenreNormalizer(mappings={}, standard_genres=["Solarpunk"])
    assert normalizer.normalize("solarpunk") == "Solarpunk"
    assert normalizer.normalize("Solarpunk Stories") == "Solarpunk"
    assert normalizer.normalize("fantasy") == "Fantasy"
