"""
Configuration settings for the Order Inventory Service
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./order_inventory.db"
    
    # Seconds a transaction may wait on a lock (SQLite) or run a statement (PostgreSQL)
    TRANSACTION_TIMEOUT_SECONDS: float = 5.0
    
    # Service
    SERVICE_NAME: str = "order-inventory-service"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080"
    ]
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
