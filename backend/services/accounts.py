"""
Account service: registration and login.

Passwords are stored and compared as plain text.
"""
import re
from typing import Optional

from db import JsonFileStore
from domain.errors import AuthError, ConflictError, ValidationError
from domain.models import Role, User
from repositories import UsersRepository
from services.fields import require_text

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

users_repo = UsersRepository()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def register_user(
    store: JsonFileStore,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str],
    mobile_number: Optional[str] = None,
) -> User:
    """
    Create a user.

    Checks run in order and the first failure wins: required fields, email
    format, password length, role, then email uniqueness.

    Raises:
        ValidationError: bad or missing input
        ConflictError: a user with this exact email already exists
    """
    if not name or not email or not password or not role:
        raise ValidationError("Missing required fields: name, email, password, role.")
    require_text(name=name, email=email, password=password, role=role, mobileNumber=mobile_number)
    if not is_valid_email(email):
        raise ValidationError("Invalid email format.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    try:
        role_enum = Role(role)
    except ValueError:
        raise ValidationError('Role must be either "Owner" or "Seeker".')

    if users_repo.find_by_email(store, email):
        raise ConflictError("User with this email already exists.")

    user = User(
        id=User.generate_id(),
        name=name,
        email=email,
        password=password,
        role=role_enum,
        mobile_number=mobile_number or "",
    )
    return users_repo.create_user(store, user)


def authenticate(store: JsonFileStore, email: Optional[str], password: Optional[str]) -> User:
    """Return the user whose email and password match exactly.

    The same AuthError is raised for an unknown email and a wrong password.
    """
    if not email or not password:
        raise ValidationError("Missing required fields: email, password.")
    require_text(email=email, password=password)
    if not is_valid_email(email):
        raise ValidationError("Invalid email format.")

    user = users_repo.find_by_email(store, email)
    if user is None or user.password != password:
        raise AuthError("Invalid email or password.")
    return user
