from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Appointment Booking Widget"
    API_V1_STR: str = "/api"

    # Server
    PORT: int = 3000
    ENVIRONMENT: str = "development"
    CORS_ORIGINS: List[str] = ["*"]

    # Store ("sql" or "supabase")
    STORE_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite+aiosqlite:///./bookings.db"
    DATABASE_ECHO: bool = False

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Widget / admin client
    API_BASE_URL: str = "http://localhost:3000/api"
    API_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/errors.log"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
