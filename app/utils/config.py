from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App Environment
    app_env: str = "prod"
    log_format: str = "plain"
    # Postgres
    postgres_dsn: str = ""
    # OpenAI
    openai_api_key: str = ""
    openai_api_base_url: str = "https://api.openai.com/v1"
    # Completion
    completion_model: str = "gpt-3.5-turbo-16k-0613"
    completion_temperature: float = 0
    completion_max_tokens: int = 180
    max_code_length: int = 1500
    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_token_uri: str = "https://oauth2.googleapis.com/token"
    google_userinfo_url: str = "https://openidconnect.googleapis.com/v1/userinfo"
    # Quota
    free_monthly_quota: int = 100
    pro_monthly_quota: int = 2000
    # PostHog Configuration
    posthog_api_key: str = ""
    posthog_api_url: str = "https://us.i.posthog.com"
    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


class CompletionConfig(BaseModel):
    """Frozen completion parameters handed to every fig function."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    model: str
    temperature: float
    max_tokens: int
    max_code_length: int

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionConfig":
        return cls(
            base_url=settings.openai_api_base_url,
            model=settings.completion_model,
            temperature=settings.completion_temperature,
            max_tokens=settings.completion_max_tokens,
            max_code_length=settings.max_code_length,
        )


def get_completion_config() -> CompletionConfig:
    """FastAPI dependency returning the completion config for the current environment."""
    return CompletionConfig.from_settings(Settings())
