from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./canteen.db"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    AUTO_CREATE_TABLES: bool = True
    # reject orders whose totalPrice differs from the catalog total
    VERIFY_TOTAL_PRICE: bool = False
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 7001

    class Config:
        env_file = ".env"

settings = Settings()
