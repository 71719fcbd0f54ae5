"""Audit a book exchange database file without modifying it.

Usage (from backend/):
    python -m scripts.inspect_store [--db path/to/database.json] [--uploads path/to/uploads]

Reports counts, books whose owner is missing or is not an Owner, and cover
paths whose file is gone. Exits 1 when any problem is found.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from db import JsonFileStore
from domain.models import Role
from settings import settings
from storage.file_storage import FileStorage

logger = logging.getLogger("inspect_store")


@dataclass
class StoreReport:
    users: int = 0
    books: int = 0
    dangling_owners: List[str] = field(default_factory=list)
    non_owner_books: List[str] = field(default_factory=list)
    missing_covers: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.dangling_owners or self.non_owner_books or self.missing_covers)


def audit(store: JsonFileStore, storage: FileStorage) -> StoreReport:
    report = StoreReport(users=len(store.users), books=len(store.books))
    for book in store.books.values():
        owner = store.users.get(book.owner_id)
        if owner is None:
            report.dangling_owners.append(book.id)
        elif owner.role != Role.OWNER:
            report.non_owner_books.append(book.id)
        if book.cover_image_url:
            path = storage.resolve_url(book.cover_image_url)
            if path is None or not path.exists():
                report.missing_covers.append(book.id)
    return report


def main(argv: List[str] | None = None) -> int:
    if not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    parser = argparse.ArgumentParser(description="Audit a book exchange database file.")
    parser.add_argument("--db", default=str(settings.DB_PATH), help="JSON document to read.")
    parser.add_argument("--uploads", default=str(settings.UPLOADS_DIR), help="Cover image directory.")
    parser.add_argument("--uploads-url", default=settings.UPLOADS_URL)
    args = parser.parse_args(argv)

    store = JsonFileStore(Path(args.db)).load()
    storage = FileStorage(args.uploads, args.uploads_url)
    report = audit(store, storage)

    logger.info("users=%s books=%s", report.users, report.books)
    for book_id in report.dangling_owners:
        logger.info("  book %s: owner not found", book_id)
    for book_id in report.non_owner_books:
        logger.info("  book %s: owner does not have the Owner role", book_id)
    for book_id in report.missing_covers:
        logger.info("  book %s: cover file missing", book_id)
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
