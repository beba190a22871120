# /core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_TITLE: str = "Parking Fee API"
    API_PREFIX: str = "/api/v1"
    CORS_ALLOW_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:4173,http://127.0.0.1:4173"
    LOG_LEVEL: str = "INFO"
    # rule names, in evaluation order
    ENABLED_RULES: str = "standard,early_bird,night_owl"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

    @property
    def enabled_rules(self) -> list[str]:
        return [r.strip() for r in self.ENABLED_RULES.split(",") if r.strip()]

settings = Settings()
