"""User management endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.crud.crud_user import user_crud
from backend.app.db.session import get_db
from backend.app.models.user import User
from backend.app.schemas.user import MessageResponse, UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

logger = get_logger(__name__)


def _get_user(db: Session, user_id: str) -> User:
    user = user_crud.get(db, user_id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User with ID {user_id} not found")
    return user


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(user_in: UserCreate, db: Session = Depends(get_db)):
    if user_crud.get_by_email(db, email=user_in.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    user = user_crud.create(db, obj_in=user_in)
    logger.info("Created user %s", user.id)
    return user


@router.get("", response_model=List[UserRead])
def list_users(db: Session = Depends(get_db)):
    return user_crud.get_multi_active(db)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return _get_user(db, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: str, user_in: UserUpdate, db: Session = Depends(get_db)):
    user = _get_user(db, user_id)
    if user_in.email is not None and user_in.email != user.email:
        if user_crud.get_by_email(db, email=user_in.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")
    user = user_crud.update(db, db_obj=user, obj_in=user_in)
    logger.info("Updated user %s", user.id)
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
def soft_delete_user(user_id: str, db: Session = Depends(get_db)):
    user = _get_user(db, user_id)
    user_crud.soft_delete(db, db_obj=user)
    logger.info("Soft deleted user %s", user_id)
    return {"message": "User soft deleted successfully"}
