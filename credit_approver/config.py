"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CREDIT_APPROVER_",
        extra="ignore",
    )

    # Assessment rules
    approval_threshold: int = 6  # Score must be strictly greater to qualify

    # External Services
    pdf_backend: str = "local"  # local | service
    pdf_service_url: str = "http://localhost:3000"
    mail_backend: str = "local"  # local | api
    mail_api_url: str = "http://localhost:8025"

    # Mail
    mail_from_name: str = "Credit Approver"
    mail_from_address: str = "support@creditapprover.com"
    pdf_filename: str = "credit_assessment_summary.pdf"

    # Service
    service_name: str = "credit-approver"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0


settings = Settings()
