import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    def __init__(self):
        self.app_name = "Chariot Payments API"
        self.api_version = "1.0.0"
        self.environment = os.getenv("APP_ENV", "development")
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./chariot.db")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.json_logs = _env_bool("LOG_JSON", False)
        self.cors_origins = _env_list(
            "CORS_ORIGINS",
            ["http://localhost:5173", "http://127.0.0.1:5173"],
        )
        self.default_page_size = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
        if self.default_page_size <= 0:
            raise ValueError(f"DEFAULT_PAGE_SIZE must be a positive integer, got {self.default_page_size}")
        self.seed_demo_data = _env_bool("SEED_DEMO_DATA", True)


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
