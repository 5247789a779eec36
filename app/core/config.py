from typing import Optional

from pydantic_settings import BaseSettings

from app.core.exceptions import ConfigurationError
from app.utils.encoding import CANONICAL_ALPHABET, offset_for_min_length

# Used when neither ID_OFFSET nor TOKEN_MIN_LENGTH is configured
DEFAULT_ID_OFFSET = 14_000_000


class Settings(BaseSettings):
    PROJECT_NAME: str = "URL Shortener"
    LOG_LEVEL: str = "INFO"

    # Token generation (SECRET_KEY is required to start app)
    SECRET_KEY: str
    ALPHABET: str = CANONICAL_ALPHABET
    ID_OFFSET: Optional[int] = None
    TOKEN_MIN_LENGTH: Optional[int] = None
    ALLOCATOR_BACKEND: str = "redis"
    ALLOCATOR_KEY: str = "url_id"

    # Infrastructure Configs (Env Vars)
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "shortener"

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    BASE_URL: str = "http://localhost:8080"

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


def resolve_offset(id_offset: Optional[int], min_length: Optional[int], base: int) -> int:
    """Combine an explicit offset with a minimum token length requirement."""
    if id_offset is not None and id_offset < 0:
        raise ConfigurationError("ID_OFFSET must be non-negative")
    if min_length is None:
        return DEFAULT_ID_OFFSET if id_offset is None else id_offset
    required = offset_for_min_length(min_length, base)
    if id_offset is None:
        return required
    if id_offset < required:
        raise ConfigurationError(
            f"ID_OFFSET {id_offset} is too small for TOKEN_MIN_LENGTH {min_length} (needs >= {required})"
        )
    return id_offset


settings = Settings()
