from .books import BooksRepository
from .users import UsersRepository

__all__ = ["BooksRepository", "UsersRepository"]
