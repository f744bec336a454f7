from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from student_auth.auth.dependencies import get_current_caller
from student_auth.auth.jwt_handler import TokenClaims
from student_auth.database import get_db
from student_auth.routes.auth_routes import UserResponse, UserSummaryResponse
from student_auth.services import students
from student_auth.services.user_store import UserStore

router = APIRouter(prefix='/students', tags=['students'])


class UpdateStudentRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    message: str


@router.get('', response_model=list[UserResponse])
def list_students(caller: TokenClaims = Depends(get_current_caller), db: Session = Depends(get_db)):
    return students.list_students(UserStore(db), caller)


@router.get('/{student_id}', response_model=UserResponse)
def get_student(
    student_id: int,
    caller: TokenClaims = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return students.get_student(UserStore(db), caller, student_id)


@router.put('/{student_id}', response_model=UserSummaryResponse)
def update_student(
    student_id: int,
    data: UpdateStudentRequest,
    caller: TokenClaims = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return students.update_student(
        UserStore(db),
        caller,
        student_id,
        name=data.name,
        email=data.email,
        password=data.password,
    )


@router.delete('/{student_id}', response_model=MessageResponse)
def delete_student(
    student_id: int,
    caller: TokenClaims = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return students.delete_student(UserStore(db), caller, student_id)
