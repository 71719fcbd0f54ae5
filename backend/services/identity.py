"""
Acting identity for requests.

The caller asserts who it is through the ``x-user-id`` header; nothing is
verified. Services only see an ``ActingIdentity`` so a signed credential can
replace the header later without touching them.
"""
from dataclasses import dataclass
from typing import Optional

from db import JsonFileStore
from domain.models import User
from repositories import UsersRepository

SESSION_TOKEN_PREFIX = "mock-token-for-"

users_repo = UsersRepository()


@dataclass(frozen=True)
class ActingIdentity:
    user_id: Optional[str] = None

    @property
    def is_anonymous(self) -> bool:
        return not self.user_id

    def owns(self, owner_id: str) -> bool:
        """Exact id match. No role elevation."""
        return not self.is_anonymous and self.user_id == owner_id

    def resolve(self, store: JsonFileStore) -> Optional[User]:
        if self.is_anonymous:
            return None
        return users_repo.get_user(store, self.user_id)


def session_token_for(user_id: str) -> str:
    """Token handed out at login. Derived from the id, not a credential."""
    return f"{SESSION_TOKEN_PREFIX}{user_id}"
