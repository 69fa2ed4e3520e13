# backend/studiosync/repositories/user_repository.py
"""User data access."""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email.lower()).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting user by email: {str(e)}")
            raise RepositoryException(f"Failed to retrieve user: {str(e)}")

    def bump_token_version(self, user: User) -> int:
        """Invalidate every token issued so far for ``user``."""
        user.token_version = (user.token_version or 0) + 1
        self.db.flush()
        return user.token_version
