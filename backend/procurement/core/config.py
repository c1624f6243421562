from typing import List, Union
import logging

from pydantic import AnyHttpUrl, Field, validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    PROJECT_NAME: str = "Procurement Orders"
    API_V1_STR: str = "/api/v1"

    # CORS
    BACKEND_CORS_ORIGINS: List[Union[str, AnyHttpUrl]] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database
    SQLITE_DATABASE_URI: str = "sqlite:///./procurement.db"

    # Fallback rate pair (ILS per unit)
    DEFAULT_USD_RATE: float = 3.76
    DEFAULT_CNY_RATE: float = 0.52

    # Bank of Israel public rates
    RATES_URL: str = "https://www.boi.org.il/PublicApi/GetExchangeRates"
    RATES_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    RATES_CACHE_SECONDS: int = Field(default=3600, ge=0, description="0 disables caching")

    DEFAULT_ORDER_STATUS: str = "חדש"

    # Automatic backup
    AUTO_BACKUP_ENABLED: bool = True
    AUTO_BACKUP_HOUR: int = 3  # 0-23
    AUTO_BACKUP_MINUTE: int = 0  # 0-59
    AUTO_BACKUP_KEEP_COUNT: int = 7

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
logger.info(f"Loaded settings: API_V1_STR={settings.API_V1_STR}, CORS={settings.BACKEND_CORS_ORIGINS}")
