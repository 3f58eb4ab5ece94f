"""Genre label normalization.

Catalog sources spell genres inconsistently ("sci-fi", "Science-Fiction",
"SF"). Normalizing labels before indexing makes the exact genre comparison
used by ``explain`` meaningful across sources. The tables are plain data
and can be replaced per normalizer.
"""

from typing import Iterable, List, Mapping, Optional, Sequence

GENERAL = "General"
MAX_GENRES = 6

STANDARD_GENRES = (
    # Fiction
    "Fiction",
    "Science Fiction",
    "Fantasy",
    "Mystery",
    "Thriller",
    "Romance",
    "Horror",
    "Adventure",
    "Historical Fiction",
    "Literary Fiction",
    "Contemporary Fiction",
    "Crime",
    "Western",
    "Dystopian",
    # Non-fiction
    "Non-Fiction",
    "Biography",
    "Autobiography",
    "History",
    "Science",
    "Technology",
    "Business",
    "Self-Help",
    "Health",
    "Travel",
    "Cooking",
    "Art",
    "Philosophy",
    "Religion",
    "Politics",
    "Psychology",
    "Education",
    "Sports",
    # Special categories
    "Young Adult",
    "Children",
    "Poetry",
    "Drama",
    "Essays",
    "Reference",
    "Textbook",
    "Graphic Novel",
    "Comics",
)

# Lower-cased variant -> standard genre. Order matters for partial matching.
GENRE_MAPPINGS = {
    "sci-fi": "Science Fiction",
    "science-fiction": "Science Fiction",
    "scifi": "Science Fiction",
    "sf": "Science Fiction",
    "speculative fiction": "Science Fiction",
    "epic fantasy": "Fantasy",
    "urban fantasy": "Fantasy",
    "high fantasy": "Fantasy",
    "dark fantasy": "Fantasy",
    "detective": "Mystery",
    "crime fiction": "Crime",
    "police procedural": "Crime",
    "cozy mystery": "Mystery",
    "hard-boiled": "Crime",
    "romantic fiction": "Romance",
    "love story": "Romance",
    "romantic suspense": "Romance",
    "supernatural": "Horror",
    "gothic": "Horror",
    "paranormal": "Horror",
    "suspense": "Thriller",
    "psychological thriller": "Thriller",
    "action thriller": "Thriller",
    "nonfiction": "Non-Fiction",
    "memoir": "Biography",
    "memoirs": "Biography",
    "life story": "Biography",
    "true story": "Non-Fiction",
    "true crime": "Crime",
    "historical": "History",
    "world history": "History",
    "american history": "History",
    "self help": "Self-Help",
    "personal development": "Self-Help",
    "motivational": "Self-Help",
    "lifestyle": "Self-Help",
    "ya": "Young Adult",
    "teen": "Young Adult",
    "teenage": "Young Adult",
    "young adult fiction": "Young Adult",
    "kids": "Children",
    "juvenile": "Children",
    "picture book": "Children",
    "early reader": "Children",
    "textbooks": "Textbook",
    "educational": "Education",
    "academic": "Reference",
    "essays": "Essays",
    "philosophy": "Philosophy",
    "religion": "Religion",
    "spiritual": "Religion",
    "cooking": "Cooking",
    "recipes": "Cooking",
    "travel": "Travel",
    "guidebook": "Travel",
    "art": "Art",
    "design": "Art",
    "photography": "Art",
    "music": "Art",
    "sports": "Sports",
    "fitness": "Health",
    "health": "Health",
    "medical": "Health",
    "psychology": "Psychology",
    "business": "Business",
    "economics": "Business",
    "finance": "Business",
    "technology": "Technology",
    "computer": "Technology",
    "programming": "Technology",
    "science": "Science",
    "nature": "Science",
    "environment": "Science",
    "politics": "Politics",
    "political science": "Politics",
    "sociology": "Politics",
    "graphic novel": "Graphic Novel",
    "comic": "Comics",
    "manga": "Comics",
}


class GenreNormalizer:
    """Map free-form genre labels onto a standard set.

    Attributes:
        mappings: Lower-cased variant to standard genre
        standard_genres: Canonical genre names
    """

    def __init__(
        self,
        mappings: Optional[Mapping[str, str]] = None,
        standard_genres: Optional[Sequence[str]] = None,
    ):
        self.mappings = dict(GENRE_MAPPINGS if mappings is None else mappings)
        self.standard_genres = tuple(
            STANDARD_GENRES if standard_genres is None else standard_genres
        )

    def normalize(self, label: str) -> str:
        """Normalize a single genre label.

        Tries, in order: exact variant lookup, case-insensitive standard
        genre, partial match against variants, partial match against
        standard genres. Unknown labels are title-cased.
        """
        if not label or not label.strip():
            return GENERAL

        normalized = label.lower().strip()

        if normalized in self.mappings:
            return self.mappings[normalized]

        for genre in self.standard_genres:
            if genre.lower() == normalized:
                return genre

        # Partial matching for compound labels like "Fantasy & Magic"
        for key, value in self.mappings.items():
            if key in normalized or normalized in key:
                return value

        for genre in self.standard_genres:
            lowered = genre.lower()
            if lowered in normalized or normalized in lowered:
                return genre

        return _capitalize(label)

    def normalize_all(self, labels: Iterable[str]) -> List[str]:
        """Normalize a list of labels, dropping duplicates.

        Returns at most six genres, or ["General"] when nothing specific
        remains.
        """
        result = []
        for label in labels or ():
            genre = self.normalize(label)
            if genre == GENERAL or genre in result:
                continue
            result.append(genre)

        return result[:MAX_GENRES] or [GENERAL]


def _capitalize(label: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in label.split(" "))


_default_normalizer = GenreNormalizer()


def normalize_genre(label: str) -> str:
    """Normalize one label with the default tables."""
    return _default_normalizer.normalize(label)


def normalize_genres(labels: Iterable[str]) -> List[str]:
    """Normalize a list of labels with the default tables."""
    return _default_normalizer.normalize_all(labels)
