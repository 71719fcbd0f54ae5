"""
Core domain models for the book exchange.
These are framework-agnostic and can be used across all services.

Persisted field names are camelCase because the JSON document on disk is
shared with the web frontend; Python attributes stay snake_case.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import uuid


class Role(str, Enum):
    """Role chosen at registration. Never changes afterwards."""
    OWNER = "Owner"
    SEEKER = "Seeker"


class BookStatus(str, Enum):
    """Availability of a listed book."""
    AVAILABLE = "Available"
    RENTED_EXCHANGED = "Rented/Exchanged"


@dataclass
class User:
    """
    A registered user.

    The password is kept exactly as submitted; login compares it verbatim.
    """
    id: str
    name: str
    email: str
    password: str
    role: Role
    mobile_number: str = ""

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mobileNumber": self.mobile_number,
            "email": self.email,
            "password": self.password,
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data["email"],
            password=data.get("password", ""),
            role=Role(data["role"]),
            mobile_number=data.get("mobileNumber") or "",
        )


@dataclass
class OwnerInfo:
    """Public contact details of a book's owner, attached to listings."""
    name: str
    email: str
    mobile: str = ""

    @classmethod
    def from_user(cls, user: User) -> "OwnerInfo":
        return cls(name=user.name, email=user.email, mobile=user.mobile_number or "")


@dataclass
class Book:
    """
    A book offered for exchange.

    ``owner_id`` is fixed at creation. ``cover_image_url`` is the public path
    of the single active cover file, or None.
    """
    id: str
    title: str
    author: str
    location: str
    contact: str
    owner_id: str
    genre: str = ""
    status: BookStatus = BookStatus.AVAILABLE
    cover_image_url: Optional[str] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "genre": self.genre,
            "location": self.location,
            "contact": self.contact,
            "ownerId": self.owner_id,
            "status": self.status.value,
            "coverImageUrl": self.cover_image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            author=data.get("author", ""),
            location=data.get("location", ""),
            contact=data.get("contact", ""),
            owner_id=data.get("ownerId", ""),
            genre=data.get("genre") or "",
            status=BookStatus(data.get("status") or BookStatus.AVAILABLE.value),
            cover_image_url=data.get("coverImageUrl"),
        )


@dataclass
class BookListing:
    """A book as returned to browsers: the record plus its owner's contact info."""
    book: Book
    owner_info: Optional[OwnerInfo] = None
