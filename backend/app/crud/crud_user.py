"""CRUD operations for users."""

from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.core.security import get_password_hash
from backend.app.core.time import utc_now
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserUpdate


class CRUDUser:
    def create(self, db: Session, *, obj_in: UserCreate) -> User:
        data = obj_in.model_dump(exclude={"password"})
        obj = User(**data, hashed_password=get_password_hash(obj_in.password))
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_multi_active(self, db: Session) -> List[User]:
        return (
            db.query(User)
            .filter(User.is_active.is_(True))
            .order_by(User.created_at.desc(), User.id.asc())
            .all()
        )

    def update(self, db: Session, *, db_obj: User, obj_in: UserUpdate) -> User:
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)
        password = update_data.pop("password", None)
        if password:
            db_obj.hashed_password = get_password_hash(password)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def soft_delete(self, db: Session, *, db_obj: User) -> User:
        db_obj.is_active = False
        db_obj.deleted_at = utc_now()
        db.commit()
        db.refresh(db_obj)
        return db_obj


user_crud = CRUDUser()
