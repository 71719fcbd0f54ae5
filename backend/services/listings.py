"""
Listing service: browsing, filtering and owner-only edits of books.

Ownership is decided by comparing the acting id with ``Book.owner_id``.
Referential integrity is only checked when a book is created; a listing
whose owner disappeared is still returned, with ``owner_info`` set to None.
"""
import logging
from typing import List, Optional, Tuple

from db import JsonFileStore
from domain.errors import ForbiddenError, NotFoundError, ValidationError
from domain.models import Book, BookListing, BookStatus, OwnerInfo, Role
from repositories import BooksRepository, UsersRepository
from services.fields import require_text
from services.identity import ActingIdentity

logger = logging.getLogger(__name__)

books_repo = BooksRepository()
users_repo = UsersRepository()

NOT_OWNER_MESSAGE = "Forbidden: You do not own this book or user ID is missing."
CREATE_MISSING_MESSAGE = "Missing required fields: title, author, location, contact, or missing x-user-id header."
UPDATE_MISSING_MESSAGE = "Missing required fields: title, author, location, contact."


def _owner_info(store: JsonFileStore, owner_id: str) -> Optional[OwnerInfo]:
    owner = users_repo.get_user(store, owner_id)
    return OwnerInfo.from_user(owner) if owner else None


def _require_book(store: JsonFileStore, book_id: str) -> Book:
    book = books_repo.get_book(store, book_id)
    if book is None:
        raise NotFoundError("Book not found.")
    return book


def _require_owned_book(store: JsonFileStore, actor: ActingIdentity, book_id: str) -> Book:
    book = _require_book(store, book_id)
    if not actor.owns(book.owner_id):
        raise ForbiddenError(NOT_OWNER_MESSAGE)
    return book


def search_books(
    store: JsonFileStore,
    title: Optional[str] = None,
    location: Optional[str] = None,
    genre: Optional[str] = None,
) -> List[BookListing]:
    """
    List books matching every given filter.

    ``title`` and ``location`` are case-insensitive substring matches,
    ``genre`` is a case-insensitive exact match. Empty filters are ignored.
    """
    books = books_repo.list_books(store)
    if title:
        needle = title.lower()
        books = [b for b in books if needle in b.title.lower()]
    if location:
        needle = location.lower()
        books = [b for b in books if needle in b.location.lower()]
    if genre:
        wanted = genre.lower()
        books = [b for b in books if b.genre and b.genre.lower() == wanted]
    return [BookListing(book=b, owner_info=_owner_info(store, b.owner_id)) for b in books]


def get_listing(store: JsonFileStore, book_id: str) -> BookListing:
    book = _require_book(store, book_id)
    try:
        owner_info = _owner_info(store, book.owner_id)
    except Exception:
        logger.exception("Error finding owner %s of book %s", book.owner_id, book.id)
        owner_info = None
    return BookListing(book=book, owner_info=owner_info)


def _check_book_fields(title, author, location, contact, genre, missing_message: str) -> None:
    if not title or not author or not location or not contact:
        raise ValidationError(missing_message)
    require_text(title=title, author=author, location=location, contact=contact, genre=genre)


def create_book(
    store: JsonFileStore,
    actor: ActingIdentity,
    title: Optional[str],
    author: Optional[str],
    location: Optional[str],
    contact: Optional[str],
    genre: Optional[str] = None,
) -> Book:
    """Create a listing owned by the acting user, who must have the Owner role."""
    if actor.is_anonymous:
        raise ValidationError(CREATE_MISSING_MESSAGE)
    _check_book_fields(title, author, location, contact, genre, CREATE_MISSING_MESSAGE)

    owner = actor.resolve(store)
    if owner is None or owner.role != Role.OWNER:
        logger.warning("Attempt to add book by non-owner or invalid ownerId: %s", actor.user_id)
        raise ForbiddenError("Forbidden: User is not authorized to add books or owner ID is invalid.")

    book = Book(
        id=Book.generate_id(),
        title=title,
        author=author,
        genre=genre or "",
        location=location,
        contact=contact,
        owner_id=owner.id,
        status=BookStatus.AVAILABLE,
        cover_image_url=None,
    )
    return books_repo.create_book(store, book)


def replace_book_details(
    store: JsonFileStore,
    actor: ActingIdentity,
    book_id: str,
    title: Optional[str],
    author: Optional[str],
    location: Optional[str],
    contact: Optional[str],
    genre: Optional[str] = None,
) -> Book:
    """Overwrite the editable fields; id, owner, status and cover are kept.

    An omitted genre keeps the current one.
    """
    _check_book_fields(title, author, location, contact, genre, UPDATE_MISSING_MESSAGE)
    book = _require_owned_book(store, actor, book_id)

    book.title = title
    book.author = author
    book.location = location
    book.contact = contact
    if genre is not None:
        book.genre = genre
    return books_repo.update_book(store, book)


def change_status(store: JsonFileStore, actor: ActingIdentity, book_id: str, status: Optional[str]) -> Book:
    try:
        new_status = BookStatus(status)
    except ValueError:
        raise ValidationError('Invalid status value. Must be the string "Available" or "Rented/Exchanged".')

    book = _require_owned_book(store, actor, book_id)
    book.status = new_status
    return books_repo.update_book(store, book)


def delete_book(store: JsonFileStore, actor: ActingIdentity, book_id: str) -> Book:
    """Remove a listing and return it so the caller can clean up its cover."""
    book = _require_owned_book(store, actor, book_id)
    books_repo.delete_book(store, book.id)
    return book


def assign_cover(
    store: JsonFileStore,
    actor: ActingIdentity,
    book_id: str,
    cover_url: str,
) -> Tuple[Book, Optional[str]]:
    """Point the book at a new cover. Returns the book and the replaced cover path."""
    book = _require_owned_book(store, actor, book_id)
    previous = book.cover_image_url
    book.cover_image_url = cover_url
    return books_repo.update_book(store, book), previous
