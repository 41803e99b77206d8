from fastapi import Header
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.domain.caller import Caller, TenantRole


def build_engine(db_uri: str, echo: bool = False, busy_timeout: float = 5.0):
    """Async engine; SQLite connections wait busy_timeout seconds on a held write lock"""
    connect_args = {}
    if db_uri.startswith("sqlite"):
        connect_args["timeout"] = busy_timeout
    return create_async_engine(db_uri, echo=echo, future=True, connect_args=connect_args)


engine = build_engine(
    ApplicationConfig.DB_URI,
    echo=ApplicationConfig.DB_ECHO,
    busy_timeout=ApplicationConfig.DB_BUSY_TIMEOUT_SECONDS,
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    """One session per request; use cases own commit and rollback"""
    async with AsyncSessionLocal() as session:
        yield session


async def get_caller(
    x_tenant_id: str = Header(..., min_length=1),
    x_user_id: str = Header(..., min_length=1),
    x_tenant_role: TenantRole = Header(TenantRole.STAFF),
) -> Caller:
    """Caller identity from headers set by the authenticating proxy"""
    return Caller(tenant_id=x_tenant_id, user_id=x_user_id, role=x_tenant_role)
