"""
JSON-file store for the backend.

The whole dataset is one document, ``{"users": [...], "books": [...]}``,
mirrored in memory for the lifetime of the process. Every mutation is
followed by ``save()``, which rewrites the full document. There is no
locking and no partial write; the in-memory copy is authoritative.
"""
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List

from domain.errors import StorageError
from domain.models import Book, User

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Owns the ``users`` and ``books`` collections and their backing file.

    Collections are dicts keyed by id; insertion order doubles as the order
    of the persisted lists.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.users: Dict[str, User] = {}
        self.books: Dict[str, Book] = {}
        # Raw records that failed to convert on load, per collection
        self.unreadable: Dict[str, List[Any]] = {"users": [], "books": []}

    def load(self) -> "JsonFileStore":
        """Read the document from disk.

        A missing or unparseable file leaves the store empty. The failure is
        logged, never raised. A single record that does not convert to a
        User or Book is logged and kept verbatim, so ``save()`` writes it back.
        """
        self.users = {}
        self.books = {}
        self.unreadable = {"users": [], "books": []}
        if not self.path.exists():
            logger.info("No database file at %s, starting with an empty store", self.path)
            return self
        try:
            document = self._read()
            if not isinstance(document, dict):
                raise StorageError(f"{self.path} does not hold a JSON object")
        except StorageError:
            logger.exception("Error reading database %s, falling back to an empty store", self.path)
            return self
        for user in self._records(document, "users", User.from_dict):
            self.users[user.id] = user
        for book in self._records(document, "books", Book.from_dict):
            self.books[book.id] = book
        logger.info("Loaded %d users and %d books from %s", len(self.users), len(self.books), self.path)
        return self

    def _records(self, document: Dict[str, Any], collection: str, convert: Callable[[Any], Any]) -> List[Any]:
        raw = document.get(collection) or []
        if not isinstance(raw, list):
            logger.error("Collection %r in %s is not a list, keeping it as one record", collection, self.path)
            self.unreadable[collection].append(raw)
            return []
        records = []
        for position, data in enumerate(raw):
            try:
                records.append(convert(data))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.exception("Skipping unreadable %s record #%d in %s", collection, position, self.path)
                self.unreadable[collection].append(data)
        return records

    def save(self) -> bool:
        """Rewrite the whole document. Returns False if the write failed."""
        try:
            self._write(self.to_document())
        except StorageError:
            logger.exception("Error writing database %s", self.path)
            return False
        return True

    def to_document(self) -> Dict[str, Any]:
        return {
            "users": [u.to_dict() for u in self.users.values()] + self.unreadable["users"],
            "books": [b.to_dict() for b in self.books.values()] + self.unreadable["books"],
        }

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

    def _write(self, document: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e


def init_db(path: str | Path) -> JsonFileStore:
    """Create a store for ``path`` and load whatever is on disk."""
    return JsonFileStore(path).load()
