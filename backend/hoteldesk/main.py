"""
HotelDesk 主应用入口
酒店预订、入住、账单与归档
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from hoteldesk import __version__
from hoteldesk.config import settings
from hoteldesk.database import init_db, SessionLocal
from hoteldesk.errors import InternalError
from hoteldesk.routers import auth, users, rooms, guests, bookings, billing, archive, services, dashboard, events

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 初始化数据库
    init_db()

    # 注册事件处理器
    from hoteldesk.services.event_handlers import register_event_handlers
    register_event_handlers()

    # 默认管理员与服务目录
    from hoteldesk.repositories import SqlHotelRepository
    from hoteldesk.services.catalog_service import CatalogService
    from hoteldesk.services.user_service import UserService
    seed_db = SessionLocal()
    try:
        admin = UserService(seed_db).ensure_default_admin(
            settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD
        )
        if admin:
            logger.info(f"Default admin '{admin.username}' created")
        if settings.SEED_DEMO_DATA:
            seeded = CatalogService(SqlHotelRepository(seed_db)).seed_defaults()
            if seeded:
                logger.info(f"Service catalog seeded with {seeded} entries")
    finally:
        seed_db.close()

    yield


# 创建应用
app = FastAPI(
    title="HotelDesk - 酒店前台管理系统",
    description="预订、入住、退房、账单与归档",
    version=__version__,
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """未预期的持久化故障：记录日志，只返回通用错误"""
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": InternalError().message})


# 注册路由
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(rooms.router)
app.include_router(guests.router)
app.include_router(bookings.router)
app.include_router(billing.router)
app.include_router(archive.router)
app.include_router(services.router)
app.include_router(dashboard.router)
app.include_router(events.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}
