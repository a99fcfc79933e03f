from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.ext.asyncio.session import AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from storefront.core.config import settings

DB_URL = settings.DB_URL


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(async_engine):
    """Replace SQLite's ASCII-only lower() on every new connection.

    Case-insensitive search compiles to lower(column) LIKE lower(:text), so
    without this Cyrillic text would only match in its stored case.
    """
    if async_engine.dialect.name != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)


engine = create_async_engine(DB_URL, future=True, echo=settings.DB_ECHO)
register_sqlite_functions(engine)
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


def get_store():
    """FastAPI dependency returning the SQL backed data store."""
    from storefront.db.store import SqlAlchemyStore

    return SqlAlchemyStore(AsyncSessionLocal)
