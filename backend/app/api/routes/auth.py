"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import UserCreate, UserLogin, UserResponse, AuthResponse
from app.core.security import create_access_token
from app.services.auth_service import register_user, authenticate_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user and return a token."""
    user = await run_in_threadpool(
        register_user, user_data.email, user_data.password, user_data.full_name, db=db
    )
    return AuthResponse(
        token=create_access_token(user.user_id, user.email),
        user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get a JWT token."""
    user = await run_in_threadpool(authenticate_user, credentials.email, credentials.password, db)
    return AuthResponse(
        token=create_access_token(user.user_id, user.email),
        user=UserResponse.model_validate(user)
    )
