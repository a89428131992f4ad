"""
Общие фикстуры: файловая SQLite-база на каждый тест, HTTP-клиент поверх ASGI
и сессия для тестов сервисного слоя.
"""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from core.settings import Settings
from database.base import Base
from database.database import DataBaseConnection, get_database
from main import app


@pytest.fixture
async def db(tmp_path):
    database = DataBaseConnection(
        Settings(DATABASE_URL=f'sqlite+aiosqlite:///{tmp_path / "test.db"}')
    )
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield database
    await database.dispose()


@pytest.fixture
async def client(db):
    app.dependency_overrides[get_database] = lambda: db
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def session(db):
    async with db.get_session() as session:
        async with session.begin():
            yield session


@pytest.fixture
def count_rows(db):
    """Считает строки модели в отдельной сессии (после завершения запросов)."""

    async def _count(model, *where) -> int:
        async with db.get_session() as session:
            result = await session.execute(select(func.count()).select_from(model).where(*where))
            return result.scalar_one()

    return _count
