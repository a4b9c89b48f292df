from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Storage slot
    # file | database | redis | memory
    storage_backend: Literal["file", "database", "redis", "memory"] = "file"
    storage_slot: str = "potato_batches"
    storage_path: Path = Path("data/potato_batches.json")

    # Database backend
    database_url: str = "sqlite:///./potatoqc.db"

    # Redis backend
    redis_url: str = "redis://localhost:6379/0"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
