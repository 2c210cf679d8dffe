from typing import List

from ..models.user import User
from .base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Author lookups. Accounts themselves are managed elsewhere."""

    def __init__(self, db):
        super().__init__(db, User)

    def suggest(self, text: str, limit: int) -> List[User]:
        """Users whose display name contains ``text``."""
        return self._containment_lookup([User.name], text, limit)
