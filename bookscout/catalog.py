"""Load book records from catalog files.

Supported formats:
- JSON: a list of records, or an object with a ``books`` list
- JSON Lines (.jsonl): one record per line
- YAML (.yaml, .yml): same shapes as JSON
"""

import json
import logging
from pathlib import Path
from typing import Any, FrozenSet, List, Optional, Union

import yaml

from bookscout.models import BookRecord
from bookscout.similarity.genres import GenreNormalizer

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
JSONL_SUFFIXES = {".jsonl", ".ndjson"}
YAML_SUFFIXES = {".yaml", ".yml"}


class CatalogError(ValueError):
    """Raised when a catalog file cannot be read as book records."""


def load_catalog(
    path: Union[str, Path], normalizer: Optional[GenreNormalizer] = None
) -> List[BookRecord]:
    """Read book records from a catalog file.

    Malformed records are skipped with a warning. When several records share
    an id, the first one wins.

    Args:
        path: Catalog file
        normalizer: Optional genre normalizer applied to every record

    Returns:
        List of BookRecords in file order

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the format is unsupported or the content is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    raw_records = _read_records(path)

    books = []
    seen = set()
    for index, raw in enumerate(raw_records):
        try:
            book = BookRecord.from_dict(raw)
        except (ValueError, TypeError) as e:
            logger.warning(f"Skipping record {index} in {path.name}: {e}")
            continue

        if book.id in seen:
            logger.debug(f"Duplicate book id {book.id} in {path.name}, keeping first")
            continue
        seen.add(book.id)

        if normalizer is not None:
            book = book.with_genres(normalizer.normalize_all(book.genres))
        books.append(book)

    logger.debug(f"Loaded {len(books)} books from {path}")
    return books


def _read_records(path: Path) -> List[Any]:
    suffix = path.suffix.lower()

    try:
        text = path.read_text(encoding="utf-8")
        if suffix in JSONL_SUFFIXES:
            return [json.loads(line) for line in text.splitlines() if line.strip()]
        if suffix in JSON_SUFFIXES:
            data = json.loads(text)
        elif suffix in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            raise CatalogError(f"Unsupported catalog format: {path.suffix or path.name}")
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("books", [])
    if not isinstance(data, list):
        raise CatalogError(f"Catalog {path} must contain a list of books")
    return data


def load_stop_words(path: Union[str, Path]) -> FrozenSet[str]:
    """Read a stop-word list.

    YAML files hold a list of words; any other file is plain text with one
    word per line, blank lines and ``#`` comments ignored.

    Args:
        path: Stop-word file

    Returns:
        Lower-cased stop words

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the file is not UTF-8 or a YAML file does not contain a list
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stop-word file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CatalogError(f"Stop-word file {path} is not valid UTF-8: {e}") from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            words = yaml.safe_load(text) or []
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid stop-word file {path}: {e}") from e
        if not isinstance(words, list):
            raise CatalogError(f"Stop-word file {path} must contain a list")
    else:
        words = [line.split("#", 1)[0] for line in text.splitlines()]

    return frozenset(str(w).strip().lower() for w in words if str(w).strip())
