from dotenv import load_dotenv
load_dotenv()
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

class Settings(BaseSettings):
    CALL2FA_LOGIN: str = ""
    CALL2FA_PASSWORD: str = ""
    CALL2FA_BASE_URL: str = "https://api-call2fa.rikkicom.io"
    CALL2FA_API_VERSION: str = "v1"
    CALL2FA_TIMEOUT: float = 30
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        return value

settings = Settings()
