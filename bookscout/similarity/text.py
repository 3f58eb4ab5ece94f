"""Tokenization and term-frequency extraction for book text."""

import re
from collections import Counter
from typing import Dict, Iterable, List, Optional

# Closed list of English function words: articles, pronouns, common
# prepositions, conjunctions and auxiliary verbs.
DEFAULT_STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "been", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "this", "that", "these", "those", "i", "you", "he", "she", "it", "we",
    "they", "me", "him", "her", "us", "them", "my", "your", "his", "its",
    "our", "their", "about", "into", "through", "during", "before", "after",
    "above", "below", "up", "down", "out", "off", "over", "under", "again",
    "further", "then", "once",
])


class Tokenizer:
    """Lowercase, strip punctuation, split on whitespace and filter.

    Tokens no longer than ``min_length - 1`` characters and tokens in the
    stop-word set are discarded. Word characters are Unicode-aware, so
    accented letters stay part of their token ("café" stays "café").

    Attributes:
        stop_words: Words to discard (compared after lower-casing)
        min_length: Shortest token length that is kept (default 3)
    """

    _STRIP_PATTERN = re.compile(r"[^\w\s]")

    def __init__(self, stop_words: Optional[Iterable[str]] = None, min_length: int = 3):
        if stop_words is None:
            self.stop_words = DEFAULT_STOP_WORDS
        else:
            self.stop_words = frozenset(word.lower() for word in stop_words)
        self.min_length = min_length

    def tokenize(self, text: str) -> List[str]:
        """Return the kept tokens of ``text`` in order of appearance."""
        cleaned = self._STRIP_PATTERN.sub("", text.lower())
        return [
            token for token in cleaned.split()
            if len(token) >= self.min_length and token not in self.stop_words
        ]

    def term_frequencies(self, text: str) -> Dict[str, float]:
        """Count kept tokens and normalize by the kept-token total.

        Args:
            text: Raw document text

        Returns:
            Mapping of token to count / total, empty if nothing was kept
        """
        tokens = self.tokenize(text)
        if not tokens:
            return {}

        total = len(tokens)
        return {token: count / total for token, count in Counter(tokens).items()}
