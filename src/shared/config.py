"""Application configuration.

Values come from the ``[custom]`` table of the domain configuration
(``shared/domain.toml``, with the ``PROTEAN_ENV`` overlay already applied by
Protean). A few environment variables override the result:

    DATABASE_URL    -> database.url
    LOG_LEVEL       -> logging.level
"""

import os
from functools import lru_cache

from protean.domain import Domain
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///yapee.db"
    echo: bool = False


class SessionConfig(BaseModel):
    cookie_name: str = "yapee_sid"
    max_age: int = Field(86400, gt=0)
    secure: bool = False
    bcrypt_rounds: int = Field(12, ge=4, le=31)


class LoggingConfig(BaseModel):
    dir: str = "logs"
    file_prefix: str = "yapee"
    to_file: bool = True
    level: str | None = None


class CorsConfig(BaseModel):
    allow_origins: list[str] = ["*"]


class AppConfig(BaseModel):
    env: str = "development"
    name: str = "yapee"
    debug: bool = False
    database: DatabaseConfig = DatabaseConfig()
    session: SessionConfig = SessionConfig()
    logging: LoggingConfig = LoggingConfig()
    cors: CorsConfig = CorsConfig()


def current_env() -> str:
    return (os.getenv("PROTEAN_ENV") or "development").lower()


def load_config(domain: Domain | None = None) -> AppConfig:
    """Resolve the application settings held in ``domain``'s configuration."""
    if domain is None:
        from shared.domain import yapee

        domain = yapee

    data = dict(domain.config.get("custom") or {})
    data["env"] = current_env()

    if os.getenv("DATABASE_URL"):
        data["database"] = {**data.get("database", {}), "url": os.environ["DATABASE_URL"]}
    if os.getenv("LOG_LEVEL"):
        data["logging"] = {**data.get("logging", {}), "level": os.environ["LOG_LEVEL"]}

    return AppConfig.model_validate(data)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config()
