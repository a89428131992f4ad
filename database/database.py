import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.logger import logger
from core.settings import Settings, settings


class DataBaseConnection:
    """
    Управление подключением к БД с async поддержкой.

    Принципы:
    - Все параметры берутся из переданного Settings
    - Один engine и sessionmaker на экземпляр
    - Async context manager для безопасной работы с сессией
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.url = settings.url()

        engine_kwargs = {
            'echo': settings.ECHO,  # Логгирование SQL-запросов для отладки
            'pool_pre_ping': settings.POOL_PRE_PING,  # Проверять соединение перед использованием
        }
        if self.url.get_backend_name() == 'postgresql':
            engine_kwargs.update(
                pool_size=settings.POOL_SIZE,  # Сколько соединений держать в пуле
                max_overflow=settings.MAX_OVERFLOW,  # Сколько дополнительных можно создать при пиках
                connect_args={
                    'timeout': settings.DB_CONNECT_TIMEOUT,
                    'command_timeout': settings.DB_COMMAND_TIMEOUT,
                    'server_settings': {
                        'application_name': 'orgstructure',
                    },
                },
            )
        elif self.url.get_backend_name() == 'sqlite':
            engine_kwargs['connect_args'] = {'timeout': settings.DB_CONNECT_TIMEOUT}

        self.engine = create_async_engine(self.url, **engine_kwargs)

        if self.url.get_backend_name() == 'sqlite':
            # SQLite не соблюдает ON DELETE CASCADE без этой прагмы
            event.listen(self.engine.sync_engine, 'connect', _enable_sqlite_foreign_keys)

        self.AsyncSessionLocal = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Объекты остаются доступны после commit()
            autoflush=False,  # Изменения уходят в БД только по явному flush()
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager для создания сессии БД.

        Коммит/откат здесь не выполняются: транзакцией управляет вызывающий код
        (зависимость get_session в presentation).
        """
        session = self.AsyncSessionLocal()
        try:
            yield session
        finally:
            await session.close()

    async def connect(self, max_retries: int = 10, retry_delay: float = 3) -> None:
        """Подключиться к БД (для lifespan startup) с retry логикой."""
        logger.info(f'[DATABASE] Попытка подключения к БД: {self.url.render_as_string(hide_password=True)}')

        for attempt in range(1, max_retries + 1):
            try:
                logger.info(f'[DATABASE] Попытка подключения {attempt}/{max_retries}...')
                async with self.engine.begin() as conn:
                    await conn.execute(text('SELECT 1'))
                logger.info('[DATABASE] Подключение к БД установлено')
                return
            except Exception as e:
                if attempt == max_retries:
                    logger.error(f'[DATABASE] Не удалось подключиться после {max_retries} попыток: {e}')
                    raise
                logger.warning(
                    f'[DATABASE] Попытка подключения {attempt}/{max_retries} не удалась: {type(e).__name__}: {e}. '
                    f'Повтор через {retry_delay} сек...'
                )
                await asyncio.sleep(retry_delay)
                retry_delay = min(retry_delay * 1.5, 10)  # Экспоненциальная задержка, но не больше 10 сек

    async def is_connected(self) -> bool:
        """Проверить, подключена ли БД."""
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text('SELECT 1'))
            return True
        except Exception as e:
            logger.warning(f'[DATABASE] Проверка соединения не удалась: {e}')
            return False

    async def dispose(self) -> None:
        """Корректно закрыть соединения пула (при завершении приложения)."""
        await self.engine.dispose()
        logger.info('[DATABASE] Пул соединений закрыт')


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


# Глобальный экземпляр
database = DataBaseConnection(settings)


def get_database() -> DataBaseConnection:
    """FastAPI-зависимость; в тестах подменяется через dependency_overrides."""
    return database
