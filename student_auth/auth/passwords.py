"""Password hashing for user accounts.

Hashing is explicit: every code path that persists a password calls
``hash_new_password`` first. The model layer never hashes on its own.
"""
from passlib.context import CryptContext

from student_auth.core import config
from student_auth.core.errors import InvalidRequest

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)

PASSWORD_LENGTH_MESSAGE = (
    f"Le mot de passe doit contenir entre {config.PASSWORD_MIN_LENGTH} "
    f"et {config.PASSWORD_MAX_LENGTH} caractères"
)
PASSWORD_CHARACTERS_MESSAGE = "Le mot de passe contient des caractères non autorisés"


def validate_password_policy(plain: str) -> None:
    if not config.PASSWORD_MIN_LENGTH <= len(plain or "") <= config.PASSWORD_MAX_LENGTH:
        raise InvalidRequest(PASSWORD_LENGTH_MESSAGE)
    # bcrypt cannot hash NUL bytes.
    if "\x00" in plain:
        raise InvalidRequest(PASSWORD_CHARACTERS_MESSAGE)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def hash_new_password(plain: str) -> str:
    validate_password_policy(plain)
    return hash_password(plain)


def verify_password(plain: str | None, hashed: str | None) -> bool:
    if not plain or not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # Unknown or malformed hash.
        return False


def dummy_verify() -> None:
    pwd_context.dummy_verify()
