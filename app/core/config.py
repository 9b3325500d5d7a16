from pydantic_settings import BaseSettings, SettingsConfigDict

from app.engine.types import ScoringParameters


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://wellness:wellness@db:5432/wellness"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://app.example.com,https://admin.example.com"
    CORS_ORIGINS: str = "*"

    # Scoring windows, in days, ending on the evaluation date (inclusive).
    SCORING_WINDOW_DAYS: int = 7
    BASELINE_WINDOW_DAYS: int = 28
    CALIBRATION_WINDOW_DAYS: int = 7

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def scoring_parameters(self) -> ScoringParameters:
        return ScoringParameters(
            window_days=self.SCORING_WINDOW_DAYS,
            baseline_days=max(self.BASELINE_WINDOW_DAYS, self.SCORING_WINDOW_DAYS),
            calibration_window_days=self.CALIBRATION_WINDOW_DAYS,
        )


settings = Settings()
