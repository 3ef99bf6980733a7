"""Credential store: lookups and inserts for user accounts."""

from typing import Optional

from sqlalchemy.orm import Session

from smartmenu.models.user import User


class UserStore:
    """Thin persistence wrapper around the ``users`` table.

    The unique indexes on ``username`` and ``email`` are the only guard
    against two concurrent inserts of the same account.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def add(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user
