# OpenWeather adapter.
#
# Only goes as far as producing the plain data the risk engine and the
# dashboard consume: current conditions, the next few forecast slots and a
# midday reading per day.

import logging

import requests

from heatsense.config import DEFAULT_CITY
from heatsense.risk import to_number
from heatsense.units import format_hour, local_time

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"

SUPPORTED_CITIES = ["Delhi", "Mumbai", "Bangalore", "Chennai", "Kolkata", "Hyderabad", "Pune", "Ahmedabad"]
SUPPORTED_LANGUAGES = ("en", "hi", "ta")

# Served when no API key is configured
DEMO_CURRENT = dict(temperature=35, temp=35, feels_like=38, humidity=55, wind_speed=3.2,
                    condition="Clear", icon="01d")


class WeatherError(Exception):
    pass


def map_language(language):
    lang = (language or "en").strip().lower()
    # OpenWeather has no Marathi; Hindi shares the script
    if lang == "mr":
        return "hi"
    return lang if lang in SUPPORTED_LANGUAGES else "en"

def normalize_city(city):
    s = (city or "").strip()
    if not s:
        return DEFAULT_CITY
    return s[0].upper() + s[1:].lower()

def is_supported_city(city):
    return normalize_city(city) in SUPPORTED_CITIES


def _first_weather(item):
    arr = item.get("weather") or [{}]
    return arr[0] if isinstance(arr, list) and arr else {}

def parse_current(payload):
    payload = payload or {}
    main = payload.get("main") or {}
    wind = payload.get("wind") or {}
    w = _first_weather(payload)
    temp = to_number(main.get("temp"))
    return {
        "temp": round(temp),
        "temperature": temp,
        "feels_like": round(to_number(main.get("feels_like"))),
        "humidity": to_number(main.get("humidity")),
        "wind_speed": to_number(wind.get("speed")),
        "condition": w.get("main") or "Unknown",
        "icon": w.get("icon") or "01d",
    }

def parse_forecast(payload, tz_offset=0, slots=4):
    """Next ``slots`` 3-hourly entries of a /forecast response."""
    payload = payload or {}
    items = payload.get("list")
    if not isinstance(items, list):
        return []
    rows = []
    for item in items[:slots]:
        main = item.get("main") or {}
        ts = int(to_number(item.get("dt")))
        rows.append({
            "ts": ts,
            "time": format_hour(ts, tz_offset),
            "temp": round(to_number(main.get("temp"))),
            "feels_like": round(to_number(main.get("feels_like"))),
            "humidity": to_number(main.get("humidity")),
            "icon": _first_weather(item).get("icon") or "01d",
        })
    return rows

def parse_daily(payload, tz_offset=0, days=5):
    """One midday entry per local calendar day of a /forecast response.

    Prefers the slot nearest 12:00 within 11:00-14:00 (earlier slot on a tie).
    Days with no midday slot are filled from their first entry until ``days``
    days are covered.
    """
    payload = payload or {}
    items = payload.get("list")
    if not isinstance(items, list):
        return []

    noon, first = {}, {}
    for item in items:
        if not isinstance(item, dict):
            continue
        local = local_time(int(to_number(item.get("dt"))), tz_offset)
        day = local.date()
        first.setdefault(day, (local, item))
        if 11 <= local.hour <= 14:
            best = noon.get(day)
            if best is None or abs(local.hour - 12) < abs(best[0].hour - 12):
                noon[day] = (local, item)

    picked = dict(noon)
    for day in sorted(first):
        if len(picked) >= days:
            break
        picked.setdefault(day, first[day])

    rows = []
    for day in sorted(picked)[:days]:
        local, item = picked[day]
        w = _first_weather(item)
        rows.append({
            "day": local.strftime("%a"),
            "date": day.isoformat(),
            "temp": round(to_number((item.get("main") or {}).get("temp"))),
            "icon": w.get("icon") or "01d",
            "condition": w.get("main") or "Unknown",
        })
    return rows


class WeatherClient:
    """Fetches and parses current conditions and forecast. Holds no state between calls."""

    def __init__(self, api_key="", timeout=15, language="en", session=None):
        self.api_key = (api_key or "").strip()
        self.timeout = timeout
        self.language = map_language(language)
        self.session = session or requests.Session()

    def _query(self, city, lat, lon):
        if lat is not None and lon is not None:
            return {"lat": lat, "lon": lon}, f"{lat}_{lon}"
        c = normalize_city(city)
        return {"q": f"{c},IN"}, c.lower()

    def _get(self, endpoint, query):
        params = dict(query, units="metric", lang=self.language, appid=self.api_key)
        url = f"{OPENWEATHER_BASE_URL}/{endpoint}"
        try:
            r = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise WeatherError(f"Weather request failed: {e}") from e
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not r.ok:
            message = body.get("message") if isinstance(body, dict) else None
            raise WeatherError(message or f"Failed to fetch {endpoint} ({r.status_code})")
        return body

    def current(self, city=None, lat=None, lon=None):
        if not self.api_key:
            logger.warning("No OpenWeather key configured; using demo observation")
            return dict(DEMO_CURRENT)
        query, loc = self._query(city, lat, lon)
        logger.info("Fetching current weather for %s", loc)
        return parse_current(self._get("weather", query))

    def dashboard(self, city=None, lat=None, lon=None, slots=4, days=5):
        """Current conditions, the next forecast slots, a daily midday outlook and the resolved location name."""
        if not self.api_key:
            raise WeatherError("OpenWeatherMap API key is missing")
        query, loc = self._query(city, lat, lon)
        logger.info("Fetching dashboard weather for %s", loc)
        current_raw = self._get("weather", query)
        forecast_raw = self._get("forecast", query)
        tz_offset = current_raw.get("timezone", 0) or 0
        return {
            "current": parse_current(current_raw),
            "forecast": parse_forecast(forecast_raw, tz_offset=tz_offset, slots=slots),
            "daily": parse_daily(forecast_raw, tz_offset=tz_offset, days=days),
            "location": {"name": current_raw.get("name") or city or "Unknown Location"},
            "timezone_offset": tz_offset,
        }
