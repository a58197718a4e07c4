from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (sync URL; the async driver is derived in core.db)
    database_url: str = "sqlite:///./scheduler.db"
    database_ssl: bool = False
    auto_create_tables: bool = True

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Business-hours policy. Hours are compared as whole hours only.
    business_timezone: str = "America/New_York"
    business_start_hour: int = 8
    business_end_hour: int = 22  # inclusive hour, so an end at 22:xx passes
    # Empty means the host system's local timezone
    display_timezone: str = ""
    # Window for the "appointments starting soon" alert
    upcoming_window_minutes: int = 15

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
