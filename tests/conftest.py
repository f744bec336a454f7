import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'test-secret')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ['APP_ENV'] = 'test'

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from student_auth.auth import passwords  # noqa: E402
from student_auth.auth.jwt_handler import TokenClaims, create_access_token  # noqa: E402
from student_auth.database import Base, get_db  # noqa: E402
from student_auth.main import app  # noqa: E402
from student_auth.models.user import Role, User  # noqa: E402


@pytest.fixture
def db_session():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[User.__table__])

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=[User.__table__])
        engine.dispose()


@pytest.fixture
def client(db_session):
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(
        email: str = 'student@iset.tn',
        password: str = 'student123',
        role: Role = Role.STUDENT,
        name: str = 'Student',
    ) -> User:
        user = User(name=name, email=email, password_hash=passwords.hash_password(password), role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


def claims_for(user: User) -> TokenClaims:
    return TokenClaims(id=user.id, email=user.email, role=user.role.value)


@pytest.fixture
def caller_for():
    return claims_for


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(claims_for(user))
        return {'Authorization': f'Bearer {token}'}

    return _auth_headers
