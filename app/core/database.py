from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from app.core.config import settings


def enable_sqlite_foreign_keys(async_engine):
    """SQLite ignores FOREIGN KEY constraints unless every connection turns them on."""
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
enable_sqlite_foreign_keys(engine)

# Keep loaded rows usable after commit, reports are serialized after the session commits
AsyncSessionLocal = async_sessionmaker(
    bind=engine, class_=AsyncSession, expire_on_commit=False
)


# One session per request, closed when the request is done
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


# The retail tables are mapped on this Base, the schema itself is owned by the database
class Base(DeclarativeBase):
    pass
