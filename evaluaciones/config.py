"""Application configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_SESSION_SECRET = "cambia_esto_en_env"
INSECURE_ACCESS_CODE = "DOCENTE1234"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    port: int = 3000
    session_secret: str = INSECURE_SESSION_SECRET
    access_code_docente: str = INSECURE_ACCESS_CODE

    database_url: str = "sqlite+aiosqlite:///./data.db"

    @field_validator("database_url", mode="after")
    @classmethod
    def normalize_db_url(cls, v: str) -> str:
        """Ensure async drivers (hosting providers hand out plain postgresql:// and sqlite:// URLs)."""
        if v.startswith("postgresql://") and "+asyncpg" not in v:
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://") and "+aiosqlite" not in v:
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    pin_pepper: str = ""

    session_max_age: int = 60 * 60 * 8
    session_cookie_name: str = "sess_eval"
    session_https_only: bool = False

    login_rate_limit: str = "20/15 minutes"

    log_level: str = "INFO"
    auto_create_schema: bool = True

    def insecure_defaults(self) -> list[str]:
        """Names of security-relevant settings still at their shipped defaults."""
        found = []
        if self.session_secret == INSECURE_SESSION_SECRET:
            found.append("SESSION_SECRET")
        if self.access_code_docente == INSECURE_ACCESS_CODE:
            found.append("ACCESS_CODE_DOCENTE")
        return found


settings = Settings()
