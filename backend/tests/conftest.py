"""
Pytest 配置和共享 fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hoteldesk.database import Base, get_db, enable_sqlite_foreign_keys
from hoteldesk.models import hotel  # noqa
from hoteldesk.models.hotel import (
    Room, RoomType, RoomStatus, Guest, User, UserRole, new_id
)
from hoteldesk.repositories import SqlHotelRepository, InMemoryHotelRepository
from hoteldesk.security.auth import get_password_hash, create_access_token
from hoteldesk.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(params=["sql", "memory"])
def repo(request, db_session):
    """两种仓储实现各跑一遍服务层测试"""
    if request.param == "sql":
        return SqlHotelRepository(db_session)
    return InMemoryHotelRepository()


@pytest.fixture
def published():
    """收集服务发布的事件"""
    return []


# ============== 认证相关 Fixtures ==============

def _create_user(db_session, username: str, role: UserRole) -> User:
    user = User(
        id=new_id(),
        username=username,
        password_hash=get_password_hash("123456"),
        role=role,
        created_at=datetime.now(),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session):
    """创建管理员"""
    return _create_user(db_session, "manager", UserRole.ADMIN)


@pytest.fixture
def staff_user(db_session):
    """创建前台员工"""
    return _create_user(db_session, "front1", UserRole.STAFF)


@pytest.fixture
def admin_token(admin_user):
    return create_access_token(admin_user.id, admin_user.role)


@pytest.fixture
def staff_token(staff_user):
    return create_access_token(staff_user.id, staff_user.role)


@pytest.fixture
def admin_auth_headers(admin_token):
    """返回管理员认证的请求头"""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def staff_auth_headers(staff_token):
    """返回前台认证的请求头"""
    return {"Authorization": f"Bearer {staff_token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_room(db_session):
    """创建测试房间：标准间 101，100.00/晚，可住 2 人"""
    room = Room(
        id=new_id(),
        number="101",
        type=RoomType.STANDARD,
        capacity=2,
        price_per_night=Decimal("100.00"),
        floor=1,
        amenities=["wifi", "tv"],
        status=RoomStatus.AVAILABLE,
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_guest(db_session):
    """创建测试客人"""
    guest = Guest(
        id=new_id(),
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="555-0101",
        id_number="ID-0001",
        address="12 Analytical Way",
        created_at=datetime.now(),
    )
    db_session.add(guest)
    db_session.commit()
    db_session.refresh(guest)
    return guest


@pytest.fixture
def stay_dates():
    """两晚的入住/离店时间"""
    check_in = datetime(2026, 3, 10, 14, 0)
    return check_in, check_in + timedelta(days=2)
