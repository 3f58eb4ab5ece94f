"""Book records consumed by the similarity engine.

A BookRecord is owned by whatever application fetched it (a catalog file,
an API client, a database row). The engine only reads records; it never
mutates them.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class BookRecord:
    """A single book as supplied by the calling application.

    Attributes:
        id: Unique identifier within a catalog
        title: Book title
        author: Author name as displayed
        description: Free-text blurb or summary
        genres: Ordered genre labels
        rating: Average reader rating
        year: Publication year (0 when unknown)
    """

    id: str
    title: str = ""
    author: str = ""
    description: str = ""
    genres: Tuple[str, ...] = field(default_factory=tuple)
    rating: float = 0.0
    year: int = 0

    def __post_init__(self):
        # Lists are accepted for convenience but stored as tuples
        if not isinstance(self.genres, tuple):
            object.__setattr__(self, "genres", tuple(self.genres))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BookRecord":
        """Create a record from a loosely shaped mapping.

        Accepts either ``genre`` or ``genres`` for the genre list, and genre
        entries given as plain strings or as ``{"id": ..., "name": ...}``
        objects. Null, blank and nameless genre entries are dropped. Missing text
        fields default to empty strings.

        Args:
            data: Mapping with at least an ``id`` key

        Returns:
            BookRecord instance

        Raises:
            ValueError: If the mapping has no usable id
            TypeError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")

        book_id = data.get("id")
        if book_id is None or str(book_id).strip() == "":
            raise ValueError("Book record has no id")

        raw_genres = data.get("genres", data.get("genre")) or []
        if isinstance(raw_genres, str):
            raw_genres = [raw_genres]

        return cls(
            id=str(book_id),
            title=data.get("title") or "",
            author=data.get("author") or "",
            description=data.get("description") or "",
            genres=tuple(label for label in map(_genre_label, raw_genres) if label),
            rating=float(data.get("rating") or 0.0),
            year=int(data.get("year") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["genres"] = list(self.genres)
        return data

    def with_genres(self, genres: Iterable[str]) -> "BookRecord":
        """Return a copy of this record with its genre labels replaced."""
        return replace(self, genres=tuple(genres))


def _genre_label(entry: Any) -> str:
    # null entries and nameless objects yield "" and are dropped
    if entry is None:
        return ""
    if isinstance(entry, Mapping):
        entry = entry.get("name")
        return "" if entry is None else str(entry).strip()
    return str(entry).strip()
