"""Document corpus: term frequencies, vocabulary and IDF weights.

A Corpus is an immutable snapshot built from a fixed list of book records.
There is no incremental insertion; when the candidate set changes, build a
new Corpus and swap it in.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

from bookscout.models import BookRecord
from bookscout.similarity.text import Tokenizer
from bookscout.similarity.vectors import cosine_similarity, tfidf_vector

logger = logging.getLogger(__name__)


def _empty_mapping() -> Mapping[str, float]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Document:
    """Tokenized form of one book record.

    Attributes:
        id: Id of the source BookRecord
        raw_text: Lower-cased title, author, description and genres
        term_frequencies: Token to normalized frequency in (0, 1]
        vector: TF-IDF weights, filled in when the corpus is built
    """

    id: str
    raw_text: str
    term_frequencies: Mapping[str, float] = field(default_factory=_empty_mapping)
    vector: Mapping[str, float] = field(default_factory=_empty_mapping)


def document_text(book: BookRecord) -> str:
    """Join the searchable fields of a book into one lower-cased string."""
    parts = [book.title, book.author, book.description, *book.genres]
    return " ".join(parts).lower()


def build_corpus(
    books: Iterable[BookRecord], tokenizer: Optional[Tokenizer] = None
) -> List[Document]:
    """Turn book records into documents, one per record, in input order.

    Args:
        books: Records to index
        tokenizer: Tokenizer to use (default stop words, min length 3)

    Returns:
        List of Documents without TF-IDF vectors
    """
    tokenizer = tokenizer or Tokenizer()
    documents = []
    for book in books:
        text = document_text(book)
        documents.append(Document(
            id=book.id,
            raw_text=text,
            term_frequencies=MappingProxyType(tokenizer.term_frequencies(text)),
        ))
    return documents


def compute_idf(documents: List[Document]) -> Tuple[FrozenSet[str], Dict[str, float]]:
    """Derive the vocabulary and smoothed IDF weights.

    idf(t) = ln(N / (df(t) + 1)). A term present in every document gets a
    small negative weight; its sign is the same in every vector, so it still
    adds a non-negative amount to each dot product.

    Args:
        documents: All documents of the corpus

    Returns:
        Tuple of (vocabulary, idf table); both empty for an empty corpus
    """
    n = len(documents)
    df: Dict[str, int] = {}
    for doc in documents:
        for term in doc.term_frequencies:
            df[term] = df.get(term, 0) + 1

    idf = {term: math.log(n / (count + 1)) for term, count in df.items()}
    return frozenset(df), idf


class Corpus:
    """Immutable set of documents with their shared IDF statistics.

    Example:
        >>> corpus = Corpus.build(books)
        >>> corpus.similarity("b1", "b2")
        0.42
    """

    def __init__(
        self,
        documents: Iterable[Document],
        vocabulary: FrozenSet[str],
        idf: Mapping[str, float],
    ):
        self._documents = tuple(documents)
        self._vocabulary = frozenset(vocabulary)
        self._idf = MappingProxyType(dict(idf))
        self._by_id = {doc.id: doc for doc in self._documents}

    @classmethod
    def build(
        cls, books: Iterable[BookRecord], tokenizer: Optional[Tokenizer] = None
    ) -> "Corpus":
        """Build a corpus and precompute every document's TF-IDF vector.

        Records repeating an id already seen are ignored, so each id maps to
        exactly one document.

        Args:
            books: Records to index
            tokenizer: Optional tokenizer (stop words, minimum length)

        Returns:
            New Corpus instance
        """
        unique = []
        seen = set()
        for book in books:
            if book.id in seen:
                logger.debug(f"Skipping duplicate book id in corpus: {book.id}")
                continue
            seen.add(book.id)
            unique.append(book)

        documents = build_corpus(unique, tokenizer)
        vocabulary, idf = compute_idf(documents)
        documents = [
            replace(doc, vector=MappingProxyType(tfidf_vector(doc, vocabulary, idf)))
            for doc in documents
        ]
        logger.debug(
            f"Built corpus with {len(documents)} documents, "
            f"{len(vocabulary)} vocabulary terms"
        )
        return cls(documents, vocabulary, idf)

    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._documents

    @property
    def vocabulary(self) -> FrozenSet[str]:
        return self._vocabulary

    @property
    def idf(self) -> Mapping[str, float]:
        return self._idf

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, book_id) -> bool:
        return book_id in self._by_id

    def get_document(self, book_id: str) -> Optional[Document]:
        """Look up a document by book id, or None if it was never indexed."""
        return self._by_id.get(book_id)

    def similarity(self, book_id_a: str, book_id_b: str) -> float:
        """Cosine similarity of two indexed books (0.0 if either is unknown)."""
        doc_a = self._by_id.get(book_id_a)
        doc_b = self._by_id.get(book_id_b)
        if doc_a is None or doc_b is None:
            return 0.0
        return cosine_similarity(doc_a.vector, doc_b.vector, self._vocabulary)

    def top_terms(self, book_id: str, n: int = 10) -> List[Tuple[str, float]]:
        """Heaviest TF-IDF terms of a book, highest weight first.

        Args:
            book_id: Indexed book id
            n: Maximum number of terms

        Returns:
            List of (term, weight) tuples; empty if the id is unknown
        """
        doc = self._by_id.get(book_id)
        if doc is None or n <= 0:
            return []
        ranked = sorted(doc.vector.items(), key=lambda item: (-item[1], item[0]))
        return ranked[:n]
