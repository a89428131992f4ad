from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    # === PostgreSQL параметры ===
    DB_HOST: str = 'localhost'
    DB_PORT: int = 5432
    DB_USER: str = 'postgres'
    DB_PASSWORD: str = 'postgres'
    DB_NAME: str = 'organization'

    # Полный URL (если задан, перекрывает DB_* параметры)
    DATABASE_URL: str | None = None

    # SQLAlchemy параметры
    DRIVER: str = 'postgresql+asyncpg'
    ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_PRE_PING: bool = True

    # Таймауты (секунды)
    DB_CONNECT_TIMEOUT: float = 10
    DB_COMMAND_TIMEOUT: float = 60

    # === Приложение ===
    APP_HOST: str = '0.0.0.0'
    APP_PORT: int = 8000
    LOG_LEVEL: str = 'INFO'

    # Ограничения глубины дерева для GET /departments/{id}
    DEFAULT_TREE_DEPTH: int = 1
    MAX_TREE_DEPTH: int = 5

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,  # В .env можно использовать как верхний, так и нижний регистр
    )

    def url(self) -> URL:
        """Собрать URL подключения безопасно (защита от SQL injection)."""
        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            drivername=self.DRIVER,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )


# Singleton - Единственный экземпляр настроек на всё приложение
settings = Settings()
