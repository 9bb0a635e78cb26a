# HeatSense — personal heat-risk scoring
#
# assess_risk(profile, weather) -> RiskAssessment
#
# Pure and total: any profile/weather shape (including None or {}) yields a
# bounded score. Nothing in this module raises.

import math
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Missing or unreadable numeric inputs count as this value.
NEUTRAL_DEFAULT = 0

SCORE_MIN = 0
SCORE_MAX = 100

CHRONIC_KEYWORDS = ("heart", "diabetes", "respiratory", "bp", "hypertension")
CHRONIC_WEIGHT = 15


def norm(value):
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def to_number(value, default=NEUTRAL_DEFAULT):
    if value is None or isinstance(value, bool):
        return default
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(num) or math.isinf(num):
        return default
    return num


# ----------------------
# Types
# ----------------------
class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self):
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH, RiskLevel.CRITICAL]


class Occupation(str, Enum):
    OUTDOOR = "outdoor"
    DELIVERY = "delivery"
    CONSTRUCTION = "construction"
    PREGNANT = "pregnant"
    SENIOR = "senior"
    STUDENT = "student"
    HOMEMAKER = "homemaker"
    INDOOR = "indoor"
    OFFICE = "office"
    OTHER = "other"


# Closed vocabulary of the profile form
OCCUPATION_WEIGHTS = {
    Occupation.OUTDOOR: 20,
    Occupation.DELIVERY: 20,
    Occupation.CONSTRUCTION: 20,
    Occupation.PREGNANT: 25,
    Occupation.SENIOR: 20,
    Occupation.STUDENT: 10,
    Occupation.HOMEMAKER: 5,
    Occupation.INDOOR: 5,
    Occupation.OFFICE: 5,
    Occupation.OTHER: 0,
}


def _contains_any(*keywords):
    return lambda text: any(k in text for k in keywords)


# Free-text fallback. First match wins; categories never compound.
OCCUPATION_RULES = (
    (_contains_any("outdoor", "delivery", "construction"), 20),
    (_contains_any("pregnant"), 25),
    (_contains_any("senior"), 20),
    (_contains_any("student"), 10),
    (_contains_any("homemaker"), 5),
    (_contains_any("indoor", "office"), 5),
)

# Evaluated on the housing-adjusted temperature, top-down.
TEMPERATURE_BANDS = (
    (lambda t: t > 45, 40),
    (lambda t: t >= 40, 30),
    (lambda t: t >= 35, 20),
    (lambda t: t >= 30, 10),
)

HOUSING_PENALTIES = {
    "tin_sheet": 4,
    "asbestos": 2,
    "hut": -1,
    "thatched": -1,
}

LEVEL_COLORS = {
    RiskLevel.LOW: "#10B981",
    RiskLevel.MEDIUM: "#F59E0B",
    RiskLevel.HIGH: "#F97316",
    RiskLevel.CRITICAL: "#EF4444",
}

# (inclusive upper bound, level), ascending
LEVEL_THRESHOLDS = (
    (30, RiskLevel.LOW),
    (60, RiskLevel.MEDIUM),
    (80, RiskLevel.HIGH),
)


def first_match(rules, value, default=0):
    """Weight of the first (predicate, weight) pair whose predicate accepts value."""
    for predicate, weight in rules:
        if predicate(value):
            return weight
    return default


@dataclass(frozen=True)
class UserRiskProfile:
    # None means "not given" and contributes no age term; 0 is an infant.
    age: Optional[float] = None
    occupation: str = ""
    housing_type: Optional[str] = None
    conditions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        conds = self.conditions if isinstance(self.conditions, (list, tuple)) else ()
        object.__setattr__(self, "age", to_number(self.age, default=None))
        object.__setattr__(self, "occupation", norm(self.occupation))
        object.__setattr__(self, "housing_type", self.housing_type or None)
        object.__setattr__(self, "conditions", tuple(norm(c) for c in conds))

    @classmethod
    def from_mapping(cls, data):
        data = data or {}
        return cls(
            age=data.get("age"),
            occupation=data.get("occupation"),
            housing_type=data.get("housing_type"),
            conditions=data.get("conditions"),
        )


@dataclass(frozen=True)
class WeatherObservation:
    feels_like: float = NEUTRAL_DEFAULT
    humidity: float = NEUTRAL_DEFAULT

    def __post_init__(self):
        object.__setattr__(self, "feels_like", to_number(self.feels_like))
        object.__setattr__(self, "humidity", to_number(self.humidity))

    @classmethod
    def from_mapping(cls, data):
        data = data or {}
        # Dashboard payloads carry the observation under "current",
        # raw provider responses under "main".
        if "feels_like" not in data and isinstance(data.get("current"), dict):
            data = data["current"]
        main = data.get("main") if isinstance(data.get("main"), dict) else {}
        feels = data.get("feels_like")
        if feels is None:
            feels = main.get("feels_like")
        hum = data.get("humidity")
        if hum is None:
            hum = main.get("humidity")
        return cls(feels_like=feels, humidity=hum)


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    level: RiskLevel
    color: str
    adjusted_temp: float

    def as_dict(self):
        return {
            "score": self.score,
            "level": self.level.value,
            "color": self.color,
            "adjustedTemp": self.adjusted_temp,
        }


def _as_profile(profile):
    if isinstance(profile, UserRiskProfile):
        return profile
    return UserRiskProfile.from_mapping(profile if isinstance(profile, dict) else None)


def _as_weather(weather):
    if isinstance(weather, WeatherObservation):
        return weather
    return WeatherObservation.from_mapping(weather if isinstance(weather, dict) else None)


def profile_from_record(record):
    """Engine-shaped profile from a stored profile record."""
    record = record or {}
    conds = record.get("health_conditions")
    if isinstance(conds, str):
        conds = [conds]
    return UserRiskProfile.from_mapping({
        "age": record.get("age"),
        "occupation": record.get("occupation") or "",
        "housing_type": record.get("housing_type"),
        "conditions": conds if isinstance(conds, (list, tuple)) else [],
    })


# ----------------------
# Scoring steps
# ----------------------
def housing_penalty(housing_type):
    """Indoor-vs-outdoor temperature offset in °C for a roof/wall type."""
    return HOUSING_PENALTIES.get(norm(housing_type), 0)


def occupation_weight(occupation):
    occ = norm(occupation)
    try:
        return OCCUPATION_WEIGHTS[Occupation(occ)]
    except ValueError:
        return first_match(OCCUPATION_RULES, occ)


def age_weight(age):
    if age is None:
        return 0
    if age < 5 or age > 60:
        return 20
    if 5 <= age <= 18 or 50 <= age <= 60:
        return 10
    return 0


def is_chronic(condition):
    cond = norm(condition)
    return any(k in cond for k in CHRONIC_KEYWORDS)


def chronic_count(conditions):
    return sum(1 for c in conditions if is_chronic(c))


def compute_score(profile, weather):
    """Clamped additive score and the housing-adjusted temperature.

    Returns ``(score, adjusted_temp)``.
    """
    profile = _as_profile(profile)
    weather = _as_weather(weather)

    adjusted_temp = weather.feels_like + housing_penalty(profile.housing_type)

    total = first_match(TEMPERATURE_BANDS, adjusted_temp)
    if weather.humidity > 70:
        total += 10
    total += age_weight(profile.age)
    total += occupation_weight(profile.occupation)
    total += chronic_count(profile.conditions) * CHRONIC_WEIGHT

    score = int(max(SCORE_MIN, min(SCORE_MAX, total)))
    logger.debug("raw=%s score=%s adjusted_temp=%s", total, score, adjusted_temp)
    return score, adjusted_temp


def classify(score):
    for bound, level in LEVEL_THRESHOLDS:
        if score <= bound:
            return level
    return RiskLevel.CRITICAL


def color_for(level):
    """Display color for a level. Anything unrecognized gets the Critical color."""
    if isinstance(level, RiskLevel):
        return LEVEL_COLORS[level]
    for known, color in LEVEL_COLORS.items():
        if norm(level) == known.value.lower():
            return color
    return LEVEL_COLORS[RiskLevel.CRITICAL]


def assess_risk(profile, weather):
    score, adjusted_temp = compute_score(profile, weather)
    level = classify(score)
    return RiskAssessment(
        score=score,
        level=level,
        color=color_for(level),
        adjusted_temp=adjusted_temp,
    )
