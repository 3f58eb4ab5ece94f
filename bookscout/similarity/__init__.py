"""Content-based book similarity.

This module builds a TF-IDF corpus from book records and ranks books by
cosine similarity of their vectors.

Basic usage:
    >>> from bookscout.similarity import Corpus, SimilarityRanker
    >>>
    >>> # Build an immutable corpus once per candidate set
    >>> corpus = Corpus.build(books)
    >>>
    >>> # Find similar books
    >>> ranker = SimilarityRanker(corpus)
    >>> results = ranker.find_similar("b1", books, limit=5)
    >>> reasons = ranker.explain(target, results[0].book)

Custom stop words and genre normalization:
    >>> tokenizer = Tokenizer(stop_words={"novel", "book"}, min_length=3)
    >>> normalizer = GenreNormalizer(mappings={"sf": "Science Fiction"})
    >>> books = [b.with_genres(normalizer.normalize_all(b.genres)) for b in books]
    >>> corpus = Corpus.build(books, tokenizer)
"""

from bookscout.similarity.corpus import Corpus, Document, build_corpus, compute_idf
from bookscout.similarity.genres import (
    GenreNormalizer,
    normalize_genre,
    normalize_genres,
)
from bookscout.similarity.ranker import (
    SimilarityRanker,
    SimilarityResult,
    explain,
    find_similar,
)
from bookscout.similarity.text import DEFAULT_STOP_WORDS, Tokenizer
from bookscout.similarity.vectors import cosine_similarity, tfidf_vector

__all__ = [
    # Pipeline
    "Tokenizer",
    "DEFAULT_STOP_WORDS",
    "Document",
    "build_corpus",
    "compute_idf",
    "Corpus",
    "tfidf_vector",
    "cosine_similarity",
    # Ranking
    "SimilarityRanker",
    "SimilarityResult",
    "find_similar",
    "explain",
    # Genres
    "GenreNormalizer",
    "normalize_genre",
    "normalize_genres",
]
