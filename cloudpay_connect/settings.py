from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "CloudPayConnect"
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    PORT: int = 8080

    # Default provider selection
    DEFAULT_PROVIDER: str = "CloudPayments"

    # Provider: CloudPayments
    CLOUDPAYMENTS_BASE_URL: str = "https://api.cloudpayments.ru"
    CLOUDPAYMENTS_PUBLIC_ID: str = ""
    CLOUDPAYMENTS_SECRET_KEY: str = ""
    CLOUDPAYMENTS_ACCOUNT_ID: Optional[str] = None
    # client renders the CloudPayments widget, no server-side charge
    CLOUDPAYMENTS_USE_WIDGET: bool = False

    # Outbound HTTP
    HTTP_TIMEOUT_SEC: int = 15
    HTTP_RETRY_MAX: int = 4

settings = Settings()
