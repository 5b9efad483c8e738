# app/core/config.py

from typing import List, Literal
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Mongo connection; point this at Atlas in production
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "academic_connect"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Front end origins allowed by CORS
    CORS_ORIGINS: List[str] = ["*"]

    # uvicorn bind address for serve.py
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    class Config:
        env_prefix = "ACADEMIC_"
        case_sensitive = False


CONFIG = Settings()
