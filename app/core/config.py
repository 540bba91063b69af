from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Production points this at postgresql+asyncpg://...
    DATABASE_URL: str = "sqlite+aiosqlite:///./retail.db"
    DATABASE_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Payments with this status count towards customer spending
    COMPLETED_PAYMENT_STATUS: str = "Completed"

    DEFAULT_REPORT_LIMIT: int = 10
    MAX_REPORT_LIMIT: int = 100

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Create a single instance of the settings to use everywhere
settings = Settings()
