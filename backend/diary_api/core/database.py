from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from diary_api.core.config import get_settings

settings = get_settings()

# Convert postgresql:// to postgresql+asyncpg://
database_url = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")
database_url = database_url.replace("postgresql+psycopg://", "postgresql+asyncpg://")

engine_kwargs = {
    "pool_pre_ping": True,
    "echo": False,
}
if database_url.startswith("postgresql+asyncpg://"):
    engine_kwargs["connect_args"] = {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }

# Create async SQLAlchemy engine
engine = create_async_engine(database_url, **engine_kwargs)

# Create async SessionLocal class
SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Create Base class for models
Base = declarative_base()


# Dependency to get async DB session
async def get_db():
    """
    Dependency function to get async database session.
    Yields a database session and closes it after use.
    """
    async with SessionLocal() as session:
        yield session
