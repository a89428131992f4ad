from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from core.logger import logger
from core.settings import settings
from database.database import DataBaseConnection, database, get_database
from presentation.department import router as department_router
from presentation.errors import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    # Startup
    logger.info('[STARTUP] Запуск приложения...')
    try:
        await database.connect()
        logger.info('[STARTUP] Приложение успешно запущено')
    except Exception as e:
        logger.error(f'[STARTUP] Ошибка при запуске: {e}')
        raise

    yield

    # Shutdown
    logger.info('[SHUTDOWN] Остановка приложения...')
    try:
        await database.dispose()
        logger.info('[SHUTDOWN] Приложение остановлено')
    except Exception as e:
        logger.error(f'[SHUTDOWN] Ошибка при остановке: {e}')


# Создание FastAPI приложения
app = FastAPI(
    title='Org Structure API',
    description='API для управления деревом подразделений и сотрудниками',
    version='0.1.0',
    lifespan=lifespan,
)

# Обработчики ошибок и роутеры
register_error_handlers(app)
app.include_router(department_router)


@app.get('/', tags=['health'])
async def root(db: DataBaseConnection = Depends(get_database)):
    """Health check endpoint."""
    return {
        'status': 'ok',
        'message': 'Org Structure API is running',
        'db_connected': await db.is_connected(),
    }


if __name__ == '__main__':
    import uvicorn

    uvicorn.run(
        'main:app',
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=True,
    )
