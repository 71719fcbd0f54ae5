"""
Book repository backed by the JSON-file store.
"""
from typing import List, Optional

from db import JsonFileStore
from domain.models import Book


class BooksRepository:
    """CRUD operations for books. Every mutation rewrites the document."""

    def list_books(self, store: JsonFileStore) -> List[Book]:
        return list(store.books.values())

    def get_book(self, store: JsonFileStore, book_id: str) -> Optional[Book]:
        return store.books.get(book_id)

    def create_book(self, store: JsonFileStore, book: Book) -> Book:
        store.books[book.id] = book
        store.save()
        return book

    def update_book(self, store: JsonFileStore, book: Book) -> Book:
        if book.id not in store.books:
            raise ValueError("Book not found")
        # Assigning to an existing key keeps the book's position in the list.
        store.books[book.id] = book
        store.save()
        return book

    def delete_book(self, store: JsonFileStore, book_id: str) -> Optional[Book]:
        removed = store.books.pop(book_id, None)
        if removed is not None:
            store.save()
        return removed
