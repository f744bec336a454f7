import pytest
from sqlalchemy.exc import OperationalError

from student_auth.core.errors import DuplicateEmail, StoreUnavailable
from student_auth.models.user import Role
from student_auth.services.user_store import UserStore


def test_create_normalizes_email_and_defaults_role(db_session) -> None:
    user = UserStore(db_session).create(name='Amira', email='  AMIRA@iset.tn ', password_hash='hashed')

    assert user.email == 'amira@iset.tn'
    assert user.role == Role.STUDENT
    assert user.created_at is not None
    assert user.updated_at is not None


def test_find_by_email_is_case_insensitive_and_honours_exclusion(db_session) -> None:
    store = UserStore(db_session)
    user = store.create(name='Amira', email='amira@iset.tn', password_hash='hashed')

    assert store.find_by_email('AMIRA@ISET.TN ').id == user.id
    assert store.find_by_email('amira@iset.tn', exclude_id=user.id) is None


def test_create_maps_unique_violation_to_duplicate_email(db_session) -> None:
    store = UserStore(db_session)
    store.create(name='Amira', email='amira@iset.tn', password_hash='hashed')

    with pytest.raises(DuplicateEmail):
        store.create(name='Other', email='Amira@iset.tn', password_hash='hashed')

    assert store.find_by_email('amira@iset.tn').name == 'Amira'


def test_find_student_skips_admin_records(db_session) -> None:
    store = UserStore(db_session)
    admin = store.create(name='Admin', email='admin@iset.tn', password_hash='hashed', role=Role.ADMIN)

    assert store.find_student(admin.id) is None
    assert store.find_by_id(admin.id).id == admin.id


def test_store_failure_surfaces_as_store_unavailable(db_session, monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise_timeout(*_args, **_kwargs):
        raise OperationalError('SELECT users', {}, Exception('statement timeout'))

    monkeypatch.setattr(db_session, 'query', _raise_timeout)

    with pytest.raises(StoreUnavailable) as exception_info:
        UserStore(db_session).find_by_email('amira@iset.tn')

    assert exception_info.value.status_code == 500
    assert exception_info.value.message == 'Erreur serveur'


@pytest.mark.parametrize('user_id', [0, 2**63, 99999999999999999999])
def test_lookups_by_id_outside_integer_range_find_nothing(db_session, user_id: int) -> None:
    store = UserStore(db_session)

    assert store.find_by_id(user_id) is None
    assert store.find_student(user_id) is None
