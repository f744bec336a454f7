"""Student record management behind the role/ownership gate."""
import logging

from student_auth.auth import passwords
from student_auth.auth.authorization import Action, require_access
from student_auth.auth.jwt_handler import TokenClaims
from student_auth.core.errors import DuplicateEmail, NotFound
from student_auth.models.user import User, normalize_email
from student_auth.services.authenticator import validate_email_format
from student_auth.services.user_store import UserStore

logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND_MESSAGE = "Étudiant non trouvé"
STUDENT_DELETED_MESSAGE = "Étudiant supprimé avec succès"


def _get_student_or_404(store: UserStore, student_id: int) -> User:
    student = store.find_student(student_id)
    if student is None:
        raise NotFound(STUDENT_NOT_FOUND_MESSAGE)
    return student


def list_students(store: UserStore, caller: TokenClaims) -> list[User]:
    require_access(caller, Action.LIST_STUDENTS)
    return store.list_students()


def get_student(store: UserStore, caller: TokenClaims, student_id: int) -> User:
    require_access(caller, Action.VIEW_STUDENT, student_id)
    return _get_student_or_404(store, student_id)


def update_student(
    store: UserStore,
    caller: TokenClaims,
    student_id: int,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> User:
    require_access(caller, Action.UPDATE_STUDENT, student_id)
    student = _get_student_or_404(store, student_id)

    normalized_email = normalize_email(email)
    email_changed = bool(normalized_email) and normalized_email != student.email
    if email_changed:
        validate_email_format(normalized_email)
        if store.find_by_email(normalized_email, exclude_id=student.id) is not None:
            raise DuplicateEmail()
    password_hash = passwords.hash_new_password(password) if password else None

    if name and name.strip():
        student.name = name.strip()
    if email_changed:
        student.email = normalized_email
    if password_hash:
        student.password_hash = password_hash

    student = store.save(student)
    logger.info("Student updated | user_id=%s by=%s", student.id, caller.id)
    return student


def delete_student(store: UserStore, caller: TokenClaims, student_id: int) -> dict:
    require_access(caller, Action.DELETE_STUDENT, student_id)
    student = _get_student_or_404(store, student_id)
    store.delete(student)
    logger.info("Student deleted | user_id=%s by=%s", student_id, caller.id)
    return {"message": STUDENT_DELETED_MESSAGE}
