"""
bookscout - content-based book similarity.

Main API:
    from bookscout import BookRecord, Corpus, SimilarityRanker, load_catalog

    # Load records from a catalog file
    books = load_catalog("catalog.json")

    # Build the corpus once, then query it
    ranker = SimilarityRanker(Corpus.build(books))
    for result in ranker.find_similar("b1", books, limit=5):
        print(result.book.title, round(result.similarity, 3))

    # One-off query without keeping the corpus around
    results = find_similar("b1", books)
"""

from .catalog import CatalogError, load_catalog, load_stop_words
from .models import BookRecord
from .similarity import (
    Corpus,
    GenreNormalizer,
    SimilarityRanker,
    SimilarityResult,
    Tokenizer,
    explain,
    find_similar,
)

__version__ = "0.1.0"
__all__ = [
    "BookRecord",
    "CatalogError",
    "Corpus",
    "GenreNormalizer",
    "SimilarityRanker",
    "SimilarityResult",
    "Tokenizer",
    "explain",
    "find_similar",
    "load_catalog",
    "load_stop_words",
]
