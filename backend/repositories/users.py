"""
User repository backed by the JSON-file store.
"""
from typing import Optional

from db import JsonFileStore
from domain.models import User


class UsersRepository:
    """Lookups and inserts for users. There is no delete path."""

    def get_user(self, store: JsonFileStore, user_id: str) -> Optional[User]:
        return store.users.get(user_id)

    def find_by_email(self, store: JsonFileStore, email: str) -> Optional[User]:
        """Exact, case-sensitive match."""
        for user in store.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, store: JsonFileStore, user: User) -> User:
        store.users[user.id] = user
        store.save()
        return user
