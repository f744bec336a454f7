import logging
from threading import Lock

from sqlalchemy.orm import Session, sessionmaker

from student_auth.auth import passwords
from student_auth.core import config
from student_auth.models.user import Role, User, normalize_email
from student_auth.services.user_store import UserStore

logger = logging.getLogger(__name__)

_seed_lock = Lock()
_admin_seeded = False


def seed_admin(db: Session) -> User | None:
    """Create the configured administrator, or bring an existing one back to admin.

    An existing account keeps its stored password unless
    ADMIN_SEED_RESET_PASSWORD is enabled.
    """
    email = normalize_email(config.ADMIN_SEED_EMAIL)
    if not email or not config.ADMIN_SEED_PASSWORD:
        logger.info("Admin seeding skipped: ADMIN_SEED_EMAIL or ADMIN_SEED_PASSWORD is empty.")
        return None

    store = UserStore(db)
    admin = store.find_by_email(email)
    if admin is None:
        admin = store.create(
            name=config.ADMIN_SEED_NAME,
            email=email,
            password_hash=passwords.hash_new_password(config.ADMIN_SEED_PASSWORD),
            role=Role.ADMIN,
        )
        logger.info("Seeded admin account | user_id=%s email=%s", admin.id, admin.email)
        return admin

    changed = False
    if admin.role != Role.ADMIN:
        logger.warning("Seed account %s had role %s; restoring admin role.", admin.email, admin.role.value)
        admin.role = Role.ADMIN
        changed = True
    if config.ADMIN_SEED_RESET_PASSWORD:
        admin.password_hash = passwords.hash_new_password(config.ADMIN_SEED_PASSWORD)
        logger.warning("Admin password reset from configuration | user_id=%s", admin.id)
        changed = True

    if changed:
        admin = store.save(admin)
    else:
        logger.info("Admin account already present | user_id=%s", admin.id)
    return admin


def ensure_admin_seeded(session_factory: sessionmaker) -> None:
    global _admin_seeded

    if _admin_seeded:
        return

    with _seed_lock:
        if _admin_seeded:
            return

        db = session_factory()
        try:
            seed_admin(db)
        finally:
            db.close()

        _admin_seeded = True
