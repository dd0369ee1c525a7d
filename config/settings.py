from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Remote API
    api_base_url: str = "https://kaiqiuwang.cc/xcx/public/index.php/api/"
    api_timeout_seconds: float = 30.0
    token_header: str = "token"

    # Local persistence
    preferences_path: Path = Path("kaiqiu_preferences.json")

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('api_base_url', mode='after')
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        # Relative endpoint paths are joined onto the base URL
        return v if v.endswith("/") else v + "/"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_prefix="KAIQIU_",
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # KAIQIU_API_BASE_URL == api_base_url
    )


# Create settings instance
settings = Settings()
