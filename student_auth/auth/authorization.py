"""Role and ownership checks for the student-management surface."""
import enum

from student_auth.auth.jwt_handler import TokenClaims
from student_auth.core.errors import Forbidden
from student_auth.models.user import Role


class Action(str, enum.Enum):
    LIST_STUDENTS = "list_students"
    VIEW_STUDENT = "view_student"
    UPDATE_STUDENT = "update_student"
    DELETE_STUDENT = "delete_student"


ADMIN_ONLY_ACTIONS = frozenset({Action.LIST_STUDENTS, Action.DELETE_STUDENT})
OWNER_OR_ADMIN_ACTIONS = frozenset({Action.VIEW_STUDENT, Action.UPDATE_STUDENT})


def can_access(caller: TokenClaims, action: Action, target_id: int | None = None) -> bool:
    """Decide whether ``caller`` may perform ``action`` on ``target_id``.

    Admins may do everything. Any other caller may only view or update the
    record whose id matches their own.
    """
    if caller.role == Role.ADMIN.value:
        return True
    if action in ADMIN_ONLY_ACTIONS:
        return False
    if action in OWNER_OR_ADMIN_ACTIONS:
        return target_id is not None and caller.id == target_id
    return False


def require_access(caller: TokenClaims, action: Action, target_id: int | None = None) -> None:
    if not can_access(caller, action, target_id):
        raise Forbidden()
