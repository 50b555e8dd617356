"""
Configuration settings for the EasyPay client
Handles environment variables and gateway settings
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings

from easypay_client.config.load_env import load_env
from easypay_client.exceptions import ConfigurationError

DEFAULT_GATEWAY = "https://credit.linux.do/epay"
GATEWAY_PATH_SEGMENT = "/epay"


def normalize_gateway(gateway: str) -> str:
    """Strip trailing slashes and make sure the address ends with /epay."""
    gateway = (gateway or DEFAULT_GATEWAY).strip().rstrip("/")
    if not gateway.endswith(GATEWAY_PATH_SEGMENT):
        gateway = gateway + GATEWAY_PATH_SEGMENT
    return gateway


@dataclass(frozen=True)
class EasyPayConfig:
    """
    Explicit gateway configuration, built once and passed into adapters.

    pid and secret may be None here; operations that need them raise
    ConfigurationError before touching the network.
    """

    pid: Optional[str] = None
    secret: Optional[str] = None
    gateway: str = DEFAULT_GATEWAY
    timeout_seconds: float = 15.0
    notify_path: str = "/api/payment/notify"
    return_path: str = "/order/result"

    @property
    def gateway_url(self) -> str:
        return normalize_gateway(self.gateway)

    @property
    def is_configured(self) -> bool:
        return bool(self.pid and self.secret)

    def credentials(self) -> Tuple[str, str]:
        """Return (pid, secret) or raise ConfigurationError."""
        if not self.pid or not self.secret:
            raise ConfigurationError(
                "Payment configuration missing: set LDC_PID and LDC_SECRET in the environment or .env"
            )
        return self.pid, self.secret


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "easypay-client"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # EasyPay gateway
    LDC_GATEWAY: str = DEFAULT_GATEWAY
    LDC_PID: Optional[str] = None
    LDC_SECRET: Optional[str] = None
    LDC_TIMEOUT_SECONDS: float = 15.0

    # Callback routes on the merchant site
    LDC_NOTIFY_PATH: str = "/api/payment/notify"
    LDC_RETURN_PATH: str = "/order/result"

    @field_validator("LDC_PID", "LDC_SECRET", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("LDC_GATEWAY", mode="before")
    @classmethod
    def default_gateway(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_GATEWAY
        return v

    def easypay_config(self) -> EasyPayConfig:
        return EasyPayConfig(
            pid=self.LDC_PID,
            secret=self.LDC_SECRET,
            gateway=self.LDC_GATEWAY,
            timeout_seconds=self.LDC_TIMEOUT_SECONDS,
            notify_path=self.LDC_NOTIFY_PATH,
            return_path=self.LDC_RETURN_PATH,
        )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from .env file


load_env()

# Create settings instance
settings = Settings()


# Validation
def validate_settings(current: Optional[Settings] = None):
    """Validate critical settings"""
    current = current or settings
    issues = []

    if not current.LDC_PID:
        issues.append("LDC_PID must be set")
    if not current.LDC_SECRET:
        issues.append("LDC_SECRET must be set")
    if current.LDC_TIMEOUT_SECONDS <= 0:
        issues.append("LDC_TIMEOUT_SECONDS must be positive")

    if issues:
        raise ConfigurationError(f"Configuration issues: {', '.join(issues)}")


# Auto-validate on import in production
if settings.ENVIRONMENT == "production":
    validate_settings()
