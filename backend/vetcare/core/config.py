"""Module: config."""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Primary SQLAlchemy connection string for the backend database.
    database_url: str

    # Token signing. There is deliberately no default for the secret.
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # PBKDF2 work factor used for newly hashed passwords.
    password_iterations: int = 390000

    # Reject professionals referencing unknown species instead of skipping them.
    strict_species_references: bool = True

    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]


# Global settings instance imported by app modules at runtime.
settings = Settings()
