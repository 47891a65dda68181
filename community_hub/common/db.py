from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from community_hub.core.config import get_settings

load_dotenv()

settings = get_settings()
DATABASE_URL = settings.DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    # a fresh connection per checkout keeps aiosqlite off stale event loops
    engine = create_async_engine(DATABASE_URL, echo=settings.DB_ECHO, poolclass=NullPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # ON DELETE CASCADE is a no-op in SQLite without this pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
else:
    engine = create_async_engine(
        DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_recycle=300,
    )

# фабрика асинхронных сессий
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)

# базовый класс для моделей
Base = declarative_base()


# зависимость для FastAPI: одна сессия на запрос, закрывается на любом выходе
async def get_async_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def import_models() -> None:
    # регистрирует все таблицы в Base.metadata
    import community_hub.users.models  # noqa: F401
    import community_hub.admins.models  # noqa: F401
    import community_hub.submissions.models  # noqa: F401
    import community_hub.media.models  # noqa: F401
    import community_hub.comments.models  # noqa: F401
    import community_hub.notifications.models  # noqa: F401
    import community_hub.validation_queue.models  # noqa: F401


# Function to create tables (for initial setup, not for production use)
async def init_models():
    import_models()
    async with engine.begin() as conn:
        # await conn.run_sync(Base.metadata.drop_all)  # use with caution
        await conn.run_sync(Base.metadata.create_all)


def upsert(session: AsyncSession, model):
    # insert() с поддержкой ON CONFLICT для диалекта сессии (prod: postgresql, тесты: sqlite)
    if session.bind.dialect.name == "sqlite":
        return sqlite_insert(model)
    return pg_insert(model)
