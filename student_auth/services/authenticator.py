"""Login, registration and self-lookup."""
import logging
import re
from dataclasses import dataclass

from student_auth.auth import jwt_handler, passwords
from student_auth.core.errors import (
    DuplicateEmail,
    Forbidden,
    InvalidCredentials,
    InvalidRequest,
    NotFound,
    RoleMismatch,
)
from student_auth.models.user import ROLE_VALUES, Role, User, normalize_email
from student_auth.services.user_store import UserStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class LoginResult:
    user: User
    token: str


def validate_email_format(email: str) -> None:
    if not EMAIL_PATTERN.match(email):
        raise InvalidRequest("Email invalide")


def login(
    store: UserStore,
    email: str | None,
    password: str | None,
    requested_role: str | None = None,
) -> LoginResult:
    normalized_email = normalize_email(email)
    if not normalized_email or not password:
        raise InvalidRequest("Email et mot de passe requis")

    user = store.find_by_email(normalized_email)
    if user is None:
        passwords.dummy_verify()
        logger.info("Login rejected | reason=unknown_email")
        raise InvalidCredentials()

    if not passwords.verify_password(password, user.password_hash):
        logger.info("Login rejected | user_id=%s reason=bad_password", user.id)
        raise InvalidCredentials()

    if requested_role and requested_role != user.role.value:
        logger.info("Login rejected | user_id=%s reason=role_mismatch", user.id)
        raise RoleMismatch()

    token = jwt_handler.create_access_token(
        jwt_handler.TokenClaims(id=user.id, email=user.email, role=user.role.value)
    )
    logger.info("Login succeeded | user_id=%s role=%s", user.id, user.role.value)
    return LoginResult(user=user, token=token)


def register(
    store: UserStore,
    caller: jwt_handler.TokenClaims,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str | None = None,
) -> User:
    name = (name or "").strip()
    normalized_email = normalize_email(email)
    if not name or not normalized_email or not password:
        raise InvalidRequest("Nom, email et mot de passe requis")

    if caller.role != Role.ADMIN.value:
        raise Forbidden()

    validate_email_format(normalized_email)
    if role and role not in ROLE_VALUES:
        raise InvalidRequest("Rôle invalide")
    passwords.validate_password_policy(password)

    if store.find_by_email(normalized_email) is not None:
        raise DuplicateEmail()

    user = store.create(
        name=name,
        email=normalized_email,
        password_hash=passwords.hash_new_password(password),
        role=Role(role) if role else Role.STUDENT,
    )
    logger.info("User registered | user_id=%s role=%s by=%s", user.id, user.role.value, caller.id)
    return user


def get_self(store: UserStore, caller_id: int) -> User:
    user = store.find_by_id(caller_id)
    if user is None:
        raise NotFound("Utilisateur non trouvé")
    return user
