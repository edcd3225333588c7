from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import PostgresDsn


class PostgresSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    host: str = Field(alias="POSTGRES_HOST")
    port: int = Field(alias="POSTGRES_DB_PORT")
    db_name: str = Field(alias="POSTGRES_DB_NAME")
    user: str = Field(alias="POSTGRES_DB_USER")
    password: str = Field(alias="POSTGRES_DB_PASSWORD")
    echo: bool = Field(default=False, alias="POSTGRES_ECHO")
    pool_size: int = Field(default=5, ge=1, alias="POSTGRES_POOL_SIZE")

    @computed_field
    def connection_string(self) -> PostgresDsn:
        return PostgresDsn(
            f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db_name}"
        )


class OpenRouterSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )
    api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    model: str = Field(
        default="meta-llama/llama-4-maverick:free", alias="OPENROUTER_MODEL"
    )
    # Total attempts per generation call, first try included
    max_retries: int = Field(default=3, ge=1, alias="OPENROUTER_MAX_RETRIES")
    timeout_ms: int = Field(default=30000, gt=0, alias="OPENROUTER_TIMEOUT")
    base_url: str = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_BASE_URL"
    )

    @computed_field
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="10x-cards", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    jwt_secret: str = Field(alias="JWT_SECRET")
    token_lifetime_seconds: int = Field(
        default=3600, alias="JWT_TOKEN_LIFETIME_SECONDS"
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:4321"],
        alias="CORS_ORIGINS",
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    postgres: PostgresSettings = Field(default_factory=lambda: PostgresSettings())
    openrouter: OpenRouterSettings = Field(
        default_factory=lambda: OpenRouterSettings()
    )


settings = Settings()
