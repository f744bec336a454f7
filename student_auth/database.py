from threading import Lock

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from student_auth.core import config


def build_engine_options(url: str, timeout: float) -> dict:
    """Return engine keyword arguments that bound every wait on the store."""
    if url.startswith('sqlite'):
        options = {'connect_args': {'timeout': timeout, 'check_same_thread': False}}
        if url in ('sqlite://', 'sqlite:///:memory:'):
            options['poolclass'] = StaticPool
        return options

    options = {
        'pool_pre_ping': True,
        'pool_timeout': timeout,
    }
    if url.startswith('postgresql'):
        options['connect_args'] = {
            'connect_timeout': max(1, int(timeout)),
            'options': f'-c statement_timeout={int(timeout * 1000)}',
        }
    return options


engine = create_engine(config.DATABASE_URL, **build_engine_options(config.DATABASE_URL, config.DB_TIMEOUT_SECONDS))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_schema_checked = False


def ensure_schema() -> None:
    global _schema_checked

    if _schema_checked:
        return

    with _schema_lock:
        if _schema_checked:
            return

        # Registers the users table on Base.metadata.
        from student_auth.models import user  # noqa: F401

        Base.metadata.create_all(bind=engine)
        _schema_checked = True


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
