"""
Pydantic models shared by the API routes.

Wire names are camelCase (``ownerId``, ``coverImageUrl``); attributes are
snake_case and mapped through an alias generator.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from domain.models import Book, BookListing, OwnerInfo, User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str


class LoginResponse(UserResponse):
    token: str


class OwnerInfoResponse(CamelModel):
    name: str
    email: str
    mobile: str = ""


class BookResponse(CamelModel):
    id: str
    title: str
    author: str
    genre: str = ""
    location: str
    contact: str
    owner_id: str
    status: str
    cover_image_url: Optional[str] = None


class BookListingResponse(BookResponse):
    owner_info: Optional[OwnerInfoResponse] = None


class BookFields(CamelModel):
    """Body of create and full-update requests. Presence and types are checked by the service."""
    title: Optional[Any] = None
    author: Optional[Any] = None
    genre: Optional[Any] = None
    location: Optional[Any] = None
    contact: Optional[Any] = None


def user_to_response(user: User) -> UserResponse:
    """Convert domain User to API response (password omitted)."""
    return UserResponse(id=user.id, name=user.name, email=user.email, role=user.role.value)


def book_to_response(book: Book) -> BookResponse:
    """Convert domain Book to API response."""
    return BookResponse(
        id=book.id,
        title=book.title,
        author=book.author,
        genre=book.genre,
        location=book.location,
        contact=book.contact,
        owner_id=book.owner_id,
        status=book.status.value,
        cover_image_url=book.cover_image_url,
    )


def _owner_to_response(owner: Optional[OwnerInfo]) -> Optional[OwnerInfoResponse]:
    if owner is None:
        return None
    return OwnerInfoResponse(name=owner.name, email=owner.email, mobile=owner.mobile)


def listing_to_response(listing: BookListing) -> BookListingResponse:
    base = book_to_response(listing.book)
    return BookListingResponse(
        **base.model_dump(),
        owner_info=_owner_to_response(listing.owner_info),
    )
