"""
Project configuration.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
from typing import Optional


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    shutdown_grace_seconds: float = 5.0
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)


class Settings(BaseSettings):
    """Project settings."""

    PROJECT_NAME: str = Field(default="Idempotent Payments Service")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=True)
    ENVIRONMENT: str = Field(default="development")

    # Logging (see core.logging_config); empty LOG_LEVEL follows DEBUG
    LOG_LEVEL: str = Field(default="")
    LOG_FORMAT: str = Field(default="auto")

    # gRPC settings
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)

    # HTTP gateway
    API_PREFIX: str = Field(default="/api/v1")

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )


settings = Settings()
