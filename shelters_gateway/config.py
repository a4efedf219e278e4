"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Airtable
    airtable_api_key: str = ""
    airtable_base_id: str = ""
    airtable_api_base: str = "https://api.airtable.com/v0"
    properties_table: str = "Properties"
    leads_table: str = "Leads"
    listings_view: str = "Grid view"

    # External Services
    lead_webhook_url: str = ""
    affiliate_base_url: str = "https://www.hdfcbank.com/personal/borrow/popular-loans/home-loan"
    affiliate_ref: str = "sheltersrealty"

    # Calculator policy
    fixed_interest_rate: float = 7.3  # Partner lender's annual rate, percent
    affordability_fraction: float = 0.5  # Share of monthly income available for EMIs
    redirect_countdown_seconds: int = 5

    # Service
    service_name: str = "shelters-gateway"
    log_level: str = "INFO"
    allowed_origins: str = "*"

    # HTTP Client
    http_timeout_seconds: float = 5.0
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
