from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from student_auth.auth.dependencies import get_current_caller
from student_auth.auth.jwt_handler import TokenClaims
from student_auth.database import get_db
from student_auth.models.user import Role
from student_auth.services import authenticator
from student_auth.services.user_store import UserStore

router = APIRouter(tags=['auth'])


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginResponse(BaseModel):
    id: int
    email: str
    role: Role
    token: str


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class UserSummaryResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class UserResponse(UserSummaryResponse):
    created_at: datetime
    updated_at: datetime


@router.post('/login', response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    result = authenticator.login(UserStore(db), data.email, data.password, data.role)

    return LoginResponse(
        id=result.user.id,
        email=result.user.email,
        role=result.user.role,
        token=result.token,
    )


@router.post('/register', response_model=UserSummaryResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    caller: TokenClaims = Depends(get_current_caller),
    db: Session = Depends(get_db),
):
    return authenticator.register(
        UserStore(db),
        caller,
        name=data.name,
        email=data.email,
        password=data.password,
        role=data.role,
    )


@router.get('/me', response_model=UserResponse)
def me(caller: TokenClaims = Depends(get_current_caller), db: Session = Depends(get_db)):
    return authenticator.get_self(UserStore(db), caller.id)
