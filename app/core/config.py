from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    service_name: str = "order-service"
    version: str = "1.0.0"
    log_level: str = "INFO"
    cors_origins: str = "*"
    host: str = "0.0.0.0"
    port: int = 3002
    user_service_url: str = "http://localhost:3001"
    user_service_timeout: float = 5.0
    verify_users: bool = False
    seed_sample_data: bool = True

    @field_validator("user_service_url")
    @classmethod
    def validate_user_service_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("User service URL must be http(s)")
        return v.rstrip("/")

    @property
    def cors_origin_list(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]


settings = Settings()
