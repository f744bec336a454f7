import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from student_auth.core.errors import DuplicateEmail, StoreUnavailable
from student_auth.models.user import Role, User, normalize_email

logger = logging.getLogger(__name__)

# Largest value a 64-bit INTEGER column can hold.
MAX_USER_ID = 2**63 - 1


def is_storable_id(user_id: int) -> bool:
    return 1 <= user_id <= MAX_USER_ID


class UserStore:
    """Persistence of user records over a SQLAlchemy session.

    Store failures never leave this class unmapped: a unique-email violation
    becomes ``DuplicateEmail`` and any other database error, including
    timeouts, becomes ``StoreUnavailable``.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _store_call(self, operation: str):
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmail() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("User store %s failed", operation)
            raise StoreUnavailable() from exc

    def find_by_email(self, email: str, exclude_id: int | None = None) -> User | None:
        with self._store_call("find_by_email"):
            query = self.db.query(User).filter(User.email == normalize_email(email))
            if exclude_id is not None:
                query = query.filter(User.id != exclude_id)
            return query.first()

    def find_by_id(self, user_id: int) -> User | None:
        if not is_storable_id(user_id):
            return None
        with self._store_call("find_by_id"):
            return self.db.query(User).filter(User.id == user_id).first()

    def find_student(self, user_id: int) -> User | None:
        if not is_storable_id(user_id):
            return None
        with self._store_call("find_student"):
            return self.db.query(User).filter(
                User.id == user_id,
                User.role == Role.STUDENT,
            ).first()

    def list_students(self) -> list[User]:
        with self._store_call("list_students"):
            return self.db.query(User).filter(
                User.role == Role.STUDENT,
            ).order_by(User.created_at.desc(), User.id.desc()).all()

    def create(self, *, name: str, email: str, password_hash: str, role: Role = Role.STUDENT) -> User:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        with self._store_call("create"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        with self._store_call("save"):
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def delete(self, user: User) -> None:
        with self._store_call("delete"):
            self.db.delete(user)
            self.db.commit()
