from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # memory | sql
    STORE_BACKEND: str = "memory"
    DATABASE_URL: str = "sqlite://"
    ID_MAX_ATTEMPTS: int = Field(16, ge=1)

    HOST: str = "127.0.0.1"
    PORT: int = 8080

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
