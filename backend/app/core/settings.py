import os


def _env(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


class Settings:
    def __init__(self):
        self.app_name = "Line Item Editor"
        self.api_version = "1.0.0"
        self.environment = _env("LINE_ITEMS_ENVIRONMENT", "development")
        self.database_url = _env("LINE_ITEMS_DATABASE_URL", "sqlite:///./line_items.db")
        self.api_url = _env("LINE_ITEMS_API_URL", "http://localhost:8000")
        self.log_level = _env("LINE_ITEMS_LOG_LEVEL", "INFO").upper()
        try:
            self.http_timeout = float(_env("LINE_ITEMS_HTTP_TIMEOUT", "10"))
        except ValueError as exc:
            raise ValueError("LINE_ITEMS_HTTP_TIMEOUT must be a number") from exc
        self.templates_path = "/line-item-templates/"


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
