"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/renoboard.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # JWT Configuration
    # No default: a missing secret must fail loudly, not sign with a placeholder
    jwt_secret_key: str | None = None

    # Password hashing work factor
    bcrypt_rounds: int = 12

    model_config = SettingsConfigDict(
        env_prefix="RENOBOARD_",
        env_file=".env",
        case_sensitive=False
    )

    def get_signing_secret(self) -> str:
        """Return the token signing secret.

        Raises:
            ConfigurationError: If no secret is configured
        """
        if not self.jwt_secret_key:
            raise ConfigurationError(
                "JWT signing secret is not configured",
                {"setting": "RENOBOARD_JWT_SECRET_KEY"}
            )
        return self.jwt_secret_key


settings = Settings()
