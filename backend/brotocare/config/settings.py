"""Application Settings - Central Configuration"""
from functools import lru_cache
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "brotocare_dev"
    # Multi-document transactions need a replica set; standalone servers
    # fall back to the compensating write order (status first, then timeline)
    mongo_transactions_enabled: bool = False
    
    # Identity provider (JWT issued by the external auth service)
    jwt_secret: str = ""
    jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"
    
    # Profile enrichment fan-out
    profile_lookup_concurrency: int = Field(16, ge=1)
    profile_lookup_timeout_seconds: float = Field(5.0, gt=0)
    
    # Audit trail
    # When False a status change without a note leaves no timeline entry
    timeline_on_every_transition: bool = False
    
    # Logging
    logs_path: str = "./logs"
    log_level: str = "INFO"
    
    # CORS - set to "*" to allow all origins
    cors_origins: str = "*"
    
    # Environment
    environment: str = "development"
    debug: bool = True
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string to list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]
    
    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.environment.lower() == "production"
    
    @property
    def verify_tokens(self) -> bool:
        """Signature verification is skipped only for local development"""
        return self.environment.lower() not in ["development", "dev", "local"]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
