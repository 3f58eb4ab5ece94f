"""Rank indexed books by content similarity to a target book."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import numpy as np

from bookscout.models import BookRecord
from bookscout.similarity.corpus import Corpus
from bookscout.similarity.text import Tokenizer
from bookscout.similarity.vectors import cosine_similarity

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_RATING_TOLERANCE = 0.5
DEFAULT_YEAR_WINDOW = 5

FALLBACK_REASON = "Similar content and themes"


@dataclass(frozen=True)
class SimilarityResult:
    """One ranked candidate."""

    book: BookRecord
    similarity: float


class SimilarityRanker:
    """Find the books of a corpus most similar to a target book.

    Scores are cosine similarities of the precomputed TF-IDF vectors.
    Candidates with equal scores keep their corpus order (the order in
    which the records were passed to ``Corpus.build``).

    Example:
        >>> ranker = SimilarityRanker(Corpus.build(books))
        >>> for result in ranker.find_similar("b1", books, limit=3):
        ...     print(result.book.title, ranker.explain(target, result.book))
    """

    def __init__(
        self,
        corpus: Corpus,
        rating_tolerance: float = DEFAULT_RATING_TOLERANCE,
        year_window: int = DEFAULT_YEAR_WINDOW,
    ):
        """Initialize ranker.

        Args:
            corpus: Built corpus to rank within
            rating_tolerance: Max rating gap reported as "Similar ratings"
            year_window: Max year gap reported as "Similar publication period"
        """
        self.corpus = corpus
        self.rating_tolerance = rating_tolerance
        self.year_window = year_window

    def find_similar(
        self,
        target_id: str,
        candidates: Iterable[BookRecord],
        limit: int = DEFAULT_LIMIT,
    ) -> List[SimilarityResult]:
        """Top-``limit`` books most similar to ``target_id``.

        Args:
            target_id: Id of the query book
            candidates: Records to attach to results, matched by id
            limit: Maximum number of results (default 5)

        Returns:
            Results with similarity > 0, sorted by similarity descending.
            Empty when the target is not indexed or ``limit`` <= 0.
        """
        if limit <= 0:
            return []

        target = self.corpus.get_document(target_id)
        if target is None:
            logger.debug(f"Book {target_id} is not in the corpus")
            return []

        books_by_id: Dict[str, BookRecord] = {}
        for book in candidates:
            books_by_id.setdefault(book.id, book)

        vocabulary = self.corpus.vocabulary
        results = []
        for doc in self.corpus:
            if doc.id == target_id:
                continue

            sim = cosine_similarity(target.vector, doc.vector, vocabulary)
            if sim <= 0.0:
                continue

            book = books_by_id.get(doc.id)
            if book is None:
                # Corpus and candidate list out of sync
                continue

            results.append(SimilarityResult(book=book, similarity=sim))

        # list.sort is stable, so ties keep corpus order
        results.sort(key=lambda r: r.similarity, reverse=True)
        return results[:limit]

    def explain(self, book_a: BookRecord, book_b: BookRecord) -> List[str]:
        """Reasons two books are similar, using this ranker's tolerances."""
        return explain(
            book_a,
            book_b,
            rating_tolerance=self.rating_tolerance,
            year_window=self.year_window,
        )

    def similarity_matrix(self) -> np.ndarray:
        """Compute the pairwise similarity matrix of the whole corpus.

        Returns NxN matrix where matrix[i][j] is the similarity of the i-th
        and j-th documents in corpus order. The diagonal is 1.0, except for
        documents with an all-zero vector, which score 0.0 against
        everything including themselves.

        Returns:
            NxN numpy array of similarities
        """
        documents = self.corpus.documents
        vocabulary = self.corpus.vocabulary
        n = len(documents)
        matrix = np.zeros((n, n))

        for i in range(n):
            for j in range(i, n):
                sim = cosine_similarity(documents[i].vector, documents[j].vector, vocabulary)
                matrix[i][j] = sim
                matrix[j][i] = sim  # Symmetric

        return matrix


def explain(
    book_a: BookRecord,
    book_b: BookRecord,
    rating_tolerance: float = DEFAULT_RATING_TOLERANCE,
    year_window: int = DEFAULT_YEAR_WINDOW,
) -> List[str]:
    """Human-readable reasons for a match, independent of the vector math.

    Checks, in order: shared genre labels (exact, case-sensitive), same
    author, ratings within ``rating_tolerance``, publication years within
    ``year_window``. All applicable reasons are returned.

    Args:
        book_a: Query book
        book_b: Matched book
        rating_tolerance: Max rating difference (default 0.5)
        year_window: Max year difference (default 5)

    Returns:
        List of reasons; ["Similar content and themes"] if none apply
    """
    reasons = []

    b_genres = set(book_b.genres)
    common_genres = [g for g in book_a.genres if g in b_genres]
    if common_genres:
        reasons.append(f"Similar genres: {', '.join(common_genres)}")

    if book_a.author == book_b.author:
        reasons.append(f"Same author: {book_a.author}")

    if abs(book_a.rating - book_b.rating) <= rating_tolerance:
        reasons.append("Similar ratings")

    if abs(book_a.year - book_b.year) <= year_window:
        reasons.append("Similar publication period")

    return reasons or [FALLBACK_REASON]


def find_similar(
    target_id: str,
    candidates: List[BookRecord],
    limit: int = DEFAULT_LIMIT,
    tokenizer: Optional[Tokenizer] = None,
) -> List[SimilarityResult]:
    """Build a corpus from ``candidates`` and rank it against ``target_id``.

    Convenience for one-off queries; reuse a SimilarityRanker when querying
    the same candidate set repeatedly.
    """
    corpus = Corpus.build(candidates, tokenizer)
    return SimilarityRanker(corpus).find_similar(target_id, candidates, limit)
