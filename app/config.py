"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    """Centralised settings — no hardcoded values anywhere else."""

    # Upstream completion provider
    chat_api_url: str = Field(
        "https://g4f.space/api/groq/chat/completions", env="CHAT_API_URL"
    )
    chat_model: str = Field("openai/gpt-oss-120b", env="CHAT_MODEL")
    chat_api_key: str = Field("", env="CHAT_API_KEY")
    chat_timeout_seconds: float = Field(60.0, env="CHAT_TIMEOUT_SECONDS")

    # Security: access tokens are issued by Supabase Auth
    supabase_jwt_secret: str = Field("", env="SUPABASE_JWT_SECRET")
    supabase_jwt_audience: str = Field("authenticated", env="SUPABASE_JWT_AUDIENCE")
    allowed_origins: str = Field("http://localhost:3000", env="ALLOWED_ORIGINS")

    # App
    app_env: str = Field("development", env="APP_ENV")
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # Derived
    @property
    def allowed_origins_list(self) -> list[str]:
        """Return ALLOWED_ORIGINS as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = get_settings()
