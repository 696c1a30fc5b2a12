from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./travelbudget.db"
    DATABASE_ECHO: bool = False

    PROJECT_NAME: str = "Travel Budget API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip costs, payment schedules and status tracking"

    # Local dev frontends only
    CORS_ORIGIN_REGEX: str = r"^(http:\/\/localhost(:\d{1,5})?|http:\/\/127\.0\.0\.1(:\d{1,5})?)$"

    DEFAULT_CURRENCY: str = "USD"
    URGENT_WINDOW_DAYS: int = 7

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
