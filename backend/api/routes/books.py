"""
Books API routes.

Mutations require the ``x-user-id`` header to name the book's owner.
Cover files that become unused are removed in background tasks after the
response is sent; their failures are only logged.
"""
import logging
from io import BytesIO
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from pydantic import StrictStr

from api.dependencies import (
    CoverUpload,
    get_acting_identity,
    get_storage,
    get_store,
    read_cover_upload,
)
from api.schemas import (
    BookFields,
    BookListingResponse,
    BookResponse,
    CamelModel,
    book_to_response,
    listing_to_response,
)
from db import JsonFileStore
from services import listings
from services.identity import ActingIdentity
from storage.file_storage import FileStorage

router = APIRouter()
logger = logging.getLogger(__name__)


class StatusUpdate(CamelModel):
    status: Optional[StrictStr] = None  # "Available" or "Rented/Exchanged"


@router.get("", response_model=List[BookListingResponse])
async def list_books(
    title: Optional[str] = None,
    location: Optional[str] = None,
    genre: Optional[str] = None,
    store: JsonFileStore = Depends(get_store),
):
    """List all books, optionally filtered, with owner contact info."""
    found = listings.search_books(store, title=title, location=location, genre=genre)
    return [listing_to_response(listing) for listing in found]


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(
    data: BookFields,
    actor: ActingIdentity = Depends(get_acting_identity),
    store: JsonFileStore = Depends(get_store),
):
    """Create a new listing owned by the acting user."""
    book = listings.create_book(
        store,
        actor,
        title=data.title,
        author=data.author,
        location=data.location,
        contact=data.contact,
        genre=data.genre,
    )
    return book_to_response(book)


@router.get("/{book_id}", response_model=BookListingResponse)
async def get_book(book_id: str, store: JsonFileStore = Depends(get_store)):
    """Get a book by ID."""
    return listing_to_response(listings.get_listing(store, book_id))


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(
    book_id: str,
    data: BookFields,
    actor: ActingIdentity = Depends(get_acting_identity),
    store: JsonFileStore = Depends(get_store),
):
    """Replace title, author, genre, location and contact."""
    book = listings.replace_book_details(
        store,
        actor,
        book_id,
        title=data.title,
        author=data.author,
        location=data.location,
        contact=data.contact,
        genre=data.genre,
    )
    return book_to_response(book)


@router.patch("/{book_id}/status", response_model=BookResponse)
async def update_book_status(
    book_id: str,
    data: StatusUpdate,
    actor: ActingIdentity = Depends(get_acting_identity),
    store: JsonFileStore = Depends(get_store),
):
    """Mark a book as available or rented/exchanged."""
    book = listings.change_status(store, actor, book_id, data.status)
    return book_to_response(book)


@router.delete("/{book_id}", status_code=204)
async def delete_book(
    book_id: str,
    background_tasks: BackgroundTasks,
    actor: ActingIdentity = Depends(get_acting_identity),
    store: JsonFileStore = Depends(get_store),
    storage: FileStorage = Depends(get_storage),
):
    """Delete a book. Its cover file is removed best-effort."""
    book = listings.delete_book(store, actor, book_id)
    if book.cover_image_url:
        background_tasks.add_task(storage.discard_url, book.cover_image_url, missing_ok=False)
    return Response(status_code=204)


@router.post("/{book_id}/cover", response_model=BookResponse)
async def upload_cover(
    book_id: str,
    background_tasks: BackgroundTasks,
    upload: CoverUpload = Depends(read_cover_upload),
    actor: ActingIdentity = Depends(get_acting_identity),
    store: JsonFileStore = Depends(get_store),
    storage: FileStorage = Depends(get_storage),
):
    """Store a new cover image and point the book at it."""
    stored_name = storage.save_cover(
        BytesIO(upload.data),
        upload.filename,
        default_ext=upload.default_ext,
    )
    try:
        book, previous = listings.assign_cover(store, actor, book_id, storage.public_url(stored_name))
    except Exception:
        # Nothing references the new file yet.
        storage.discard(stored_name)
        raise

    if previous and previous != book.cover_image_url:
        background_tasks.add_task(storage.discard_url, previous)
    logger.info("Book %s cover set to %s", book.id, book.cover_image_url)
    return book_to_response(book)
