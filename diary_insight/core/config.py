from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://diary:diary@db:5432/diary"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # Local calendar that defines "today" for requests that omit it.
    APP_TIMEZONE: str = "Asia/Seoul"

    # "sunday" or "monday": first column of the calendar grid.
    WEEK_STARTS_ON: str = "sunday"

    # Digest flag default when a request does not say.
    INCLUDE_ADHERENCE_DEFAULT: bool = False

    # Longest custom range, in days, that /insights/range will expand.
    MAX_RANGE_DAYS: int = 366

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def first_weekday(self) -> int:
        """Python weekday number (Monday == 0) of the first grid column."""
        return 0 if self.WEEK_STARTS_ON.strip().lower() == "monday" else 6


settings = Settings()
