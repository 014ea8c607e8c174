"""
用户服务 - 系统用户与认证
"""
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hoteldesk.errors import ConflictError, NotFoundError
from hoteldesk.models.hotel import User, UserRole, new_id
from hoteldesk.models.schemas import UserCreate
from hoteldesk.security.auth import get_password_hash, verify_password, create_access_token

logger = logging.getLogger(__name__)


class UserService:
    """用户服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at).all()

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """用户名密码登录，失败返回 None"""
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for '{username}'")
            return None

        return {
            'access_token': create_access_token(user.id, user.role),
            'token_type': 'bearer',
            'user': user,
        }

    def create_user(self, data: UserCreate) -> User:
        """创建用户"""
        if self.get_user_by_username(data.username):
            raise ConflictError(f"Username '{data.username}' already exists")

        user = User(
            id=new_id(),
            username=data.username,
            password_hash=get_password_hash(data.password),
            role=data.role,
            created_at=datetime.now(),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Username '{data.username}' already exists") from e
        self.db.refresh(user)
        logger.info(f"User {user.username} created with role {user.role.value}")
        return user

    def delete_user(self, user_id: str, operator: User) -> None:
        """删除用户，不能删除自己"""
        if user_id == operator.id:
            raise ConflictError("You cannot delete your own account")

        user = self.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")

        self.db.delete(user)
        self.db.commit()
        logger.info(f"User {user.username} deleted by {operator.username}")

    def ensure_default_admin(self, username: str, password: str) -> Optional[User]:
        """系统中没有任何用户时创建默认管理员"""
        if self.db.query(User).count() > 0:
            return None
        return self.create_user(UserCreate(username=username, password=password, role=UserRole.ADMIN))
