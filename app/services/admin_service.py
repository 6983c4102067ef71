"""
User and role administration
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import InvalidOperationError
from app.models import Role, User
from app.models.role import ADMIN_ROLE, USER_ROLE
from app.utils.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ROLES = {
    ADMIN_ROLE: "Full administrative access to the system",
    USER_ROLE: "Standard user access",
}


class AdminService:
    """CRUD over users and roles for the admin panel"""

    # -------- Users --------

    @staticmethod
    def get_all_users(db: Session) -> List[User]:
        return (
            db.query(User)
            .options(joinedload(User.role))
            .order_by(User.username)
            .all()
        )

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        return (
            db.query(User)
            .options(joinedload(User.role))
            .filter(User.id == user_id)
            .first()
        )

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return (
            db.query(User)
            .options(joinedload(User.role))
            .filter(User.username == username)
            .first()
        )

    @staticmethod
    def create_user(
        db: Session,
        username: str,
        email: str,
        password: str,
        full_name: str,
        role_id: Optional[str] = None
    ) -> User:
        """Create a user; uniqueness is left to the database constraints"""
        if not all(value and value.strip() for value in (username, email, password, full_name)):
            raise ValueError("Username, email, password, and full name are required")

        if not role_id:
            default_role = AdminService.get_role_by_name(db, USER_ROLE)
            if default_role is None:
                raise InvalidOperationError("Default User role not found")
            role_id = default_role.id

        user = User(
            username=username,
            email=email,
            password=hash_password(password),
            full_name=full_name,
            role_id=role_id
        )
        db.add(user)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)

        logger.info(f"Created user {user.username} ({user.id})")
        return user

    @staticmethod
    def update_user(
        db: Session,
        user_id: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        role_id: Optional[str] = None
    ) -> Optional[User]:
        user = AdminService.get_user_by_id(db, user_id)
        if user is None:
            return None

        if username:
            user.username = username
        if email:
            user.email = email
        if full_name:
            user.full_name = full_name
        if role_id:
            user.role_id = role_id

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(user)

        logger.info(f"Updated user {user_id}")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: str) -> bool:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            return False

        db.delete(user)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Deleted user {user_id}")
        return True

    @staticmethod
    def change_user_role(db: Session, user_id: str, role_id: str) -> Optional[User]:
        user = AdminService.get_user_by_id(db, user_id)
        role = AdminService.get_role_by_id(db, role_id) if role_id else None
        if user is None or role is None:
            return None

        user.role_id = role.id
        db.commit()
        db.refresh(user)

        logger.info(f"User {user_id} assigned role {role.name}")
        return user

    @staticmethod
    def promote_to_admin(db: Session, user_id: str) -> Optional[User]:
        admin_role = AdminService.get_role_by_name(db, ADMIN_ROLE)
        if admin_role is None:
            logger.warning("Admin role not found; cannot promote user")
            return None
        return AdminService.change_user_role(db, user_id, admin_role.id)

    # -------- Roles --------

    @staticmethod
    def get_all_roles(db: Session) -> List[Tuple[Role, int]]:
        """Roles ordered by name, each with the number of users holding it"""
        user_count = (
            db.query(func.count(User.id))
            .filter(User.role_id == Role.id)
            .correlate(Role)
            .scalar_subquery()
        )
        return db.query(Role, user_count).order_by(Role.name).all()

    @staticmethod
    def get_role_by_id(db: Session, role_id: str) -> Optional[Role]:
        return db.query(Role).filter(Role.id == role_id).first()

    @staticmethod
    def get_role_by_name(db: Session, name: str) -> Optional[Role]:
        return db.query(Role).filter(Role.name == name).first()

    @staticmethod
    def count_role_users(db: Session, role_id: str) -> int:
        return db.query(func.count(User.id)).filter(User.role_id == role_id).scalar() or 0

    @staticmethod
    def create_role(db: Session, name: str, description: Optional[str] = None) -> Role:
        if not name or not name.strip():
            raise ValueError("Role name is required")

        role = Role(name=name, description=description)
        db.add(role)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(role)

        logger.info(f"Created role {role.name}")
        return role

    @staticmethod
    def update_role(
        db: Session,
        role_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None
    ) -> Optional[Role]:
        role = AdminService.get_role_by_id(db, role_id)
        if role is None:
            return None

        if name:
            role.name = name
        if description is not None:
            role.description = description

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(role)
        return role

    @staticmethod
    def delete_role(db: Session, role_id: str) -> bool:
        """Delete a role; users holding it are left without a role"""
        role = AdminService.get_role_by_id(db, role_id)
        if role is None:
            return False

        db.delete(role)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Deleted role {role_id}")
        return True

    @staticmethod
    def ensure_default_roles(db: Session) -> None:
        """Create the Admin and User roles when they are missing"""
        created = False
        for name, description in DEFAULT_ROLES.items():
            if AdminService.get_role_by_name(db, name) is None:
                db.add(Role(name=name, description=description))
                created = True
        if created:
            db.commit()
            logger.info("Default roles created")
