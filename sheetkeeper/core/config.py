from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from sheetkeeper.util.paths import build_database_uri


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PROJECT_NAME: str = "sheetkeeper"
    API_PREFIX: str = "/api"

    DATABASE_PATH: str = "data/game_data.db"
    SAVES_DIR: str = "data/saves"

    HOST: str = "127.0.0.1"
    PORT: int = 8080
    CORS_ORIGINS: list[str] = [
        "http://localhost:30000",
        "http://127.0.0.1:30000",
    ]

    # None disables the cap on serialized character documents.
    MAX_DOCUMENT_BYTES: int | None = None

    LOG_LEVEL: str = "INFO"

    @property
    def database_uri(self) -> str:
        return build_database_uri(self.DATABASE_PATH)


settings = Settings()


@lru_cache
def get_test_settings() -> Settings:
    return Settings(_env_file=".env.test", DATABASE_PATH=":memory:")  # type: ignore[call-arg]
