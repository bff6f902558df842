
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Hot-Desk Booking API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "12345"
    POSTGRES_DB: str = "hotdesk_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Lifecycle reaper. The cadence only bounds how long an expired booking
    # can keep its seat marked Occupied; keep it under the shortest slot.
    REAPER_ENABLED: bool = True
    REAPER_INTERVAL_SECONDS: int = 30 * 60

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def is_postgres(self) -> bool:
        return self.DATABASE_URL.startswith("postgresql")

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
