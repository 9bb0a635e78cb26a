from dotenv import load_dotenv

import os

DEFAULT_CITY = "Delhi"


def _env_number(name, default, cast=int):
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


class Settings:
    """Runtime settings, read from the environment (and a .env file if present)."""

    def __init__(self):
        load_dotenv()
        self.OPENWEATHER_KEY = os.environ.get("OPENWEATHER_KEY", "").strip()
        self.DEFAULT_CITY = os.environ.get("DEFAULT_CITY", "").strip() or DEFAULT_CITY
        self.WEATHER_CACHE_TTL = _env_number("WEATHER_CACHE_TTL", 600)
        self.REQUEST_TIMEOUT = _env_number("REQUEST_TIMEOUT", 15.0, cast=float)
        self.WEATHER_LANGUAGE = os.environ.get("WEATHER_LANGUAGE", "").strip() or "en"
        self.LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    def api_key(self, override=""):
        # Prefer an explicit (UI-supplied) key over the environment
        return (override or "").strip() or self.OPENWEATHER_KEY


_settings = None

def get_settings():
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
