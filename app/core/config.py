from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    APP_ENV: str = "development"
    CORS_ORIGINS: str = "http://localhost:3000"

    MONGODB_URI: str = ""
    MONGODB_DB: str = "ai_job_accessibility"

    JWT_SECRET: str = ""
    JWT_EXPIRES_DAYS: int = 7

    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT_SECONDS: float = 60.0

    SKILLS_API_BASE_URL: str = "https://api.dataatwork.org/v1"
    SKILLS_API_TIMEOUT_MS: int = 10000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
