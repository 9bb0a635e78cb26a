# Rule-based heat advisories.
#
# Used directly on the dashboard and as the fallback whenever no generated
# advisory is available. Every function here accepts any input shape.

from dataclasses import dataclass, field, asdict
from typing import Dict, List

from heatsense.risk import RiskLevel, norm, to_number

# ----------------------
# Level advisories
# ----------------------
LEVEL_ADVISORIES = {
    "critical": {
        "hydration": ["Drink water every 15-20 minutes"],
        "activity": ["Avoid all outdoor activities"],
        "location": ["Stay in air-conditioned spaces"],
        "warning": ["Seek medical help if dizzy or nauseous"],
        "safety": ["Inform family/colleagues of whereabouts"],
    },
    "high": {
        "hydration": ["Increase water intake significantly"],
        "activity": ["Limit outdoor activities to morning/evening"],
        "clothing": ["Wear light-colored, loose-fitting clothes"],
        "breaks": ["Take frequent breaks in shade"],
        "timing": ["Avoid peak sun hours (11 AM - 4 PM)"],
    },
    "medium": {
        "activity": ["Be cautious during outdoor activities"],
        "hydration": ["Stay hydrated throughout the day"],
        "clothing": ["Wear breathable clothing"],
        "protection": ["Use sunscreen and hat"],
        "planning": ["Plan outdoor work during cooler hours"],
    },
    "low": {
        "normal": ["Normal activities are safe"],
        "hydration": ["Maintain regular hydration"],
        "monitoring": ["Monitor weather updates"],
        "preparation": ["Dress appropriately for weather"],
    },
}


def _level_key(level):
    if isinstance(level, RiskLevel):
        return level.value.lower()
    return norm(level)


def get_advisories(level):
    adv = LEVEL_ADVISORIES.get(_level_key(level), LEVEL_ADVISORIES["low"])
    return {k: list(v) for k, v in adv.items()}

def advisories_for(level):
    return [item for items in get_advisories(level).values() for item in items]


@dataclass(frozen=True)
class EmergencyContact:
    name: str
    number: str

EMERGENCY_CONTACTS = (
    EmergencyContact("National Emergency", "112"),
    EmergencyContact("Ambulance", "108"),
    EmergencyContact("Fire", "101"),
    EmergencyContact("Police", "100"),
)

def emergency_contacts():
    return list(EMERGENCY_CONTACTS)


# ----------------------
# Personal tips
# ----------------------
CONDITION_TIPS = (
    (("heart",), "Avoid strenuous activity; monitor symptoms"),
    (("diabetes",), "Keep glucose monitored; hydrate frequently"),
    (("respiratory",), "Avoid polluted, hot air; carry inhaler"),
    (("bp", "hypertension"), "Limit heat exposure; take medication on time"),
)

def health_tips(occupation, conditions=None):
    occ = norm(occupation)
    conds = [norm(c) for c in conditions] if isinstance(conditions, (list, tuple)) else []
    tips = []

    if any(k in occ for k in ("outdoor", "delivery", "construction")):
        tips += [
            "Carry water and ORS; sip regularly",
            "Take shade breaks every 30 minutes",
            "Avoid peak sun (11 AM - 4 PM)",
        ]
    elif "indoor" in occ or "office" in occ:
        tips += [
            "Ensure good ventilation and fans",
            "Drink water at regular intervals",
        ]
    elif "student" in occ:
        tips += [
            "Schedule sports in early morning or evening",
            "Use cap and sunscreen for outdoor activities",
        ]

    for keywords, tip in CONDITION_TIPS:
        if any(k in c for c in conds for k in keywords):
            tips.append(tip)
    return tips


GENERIC_HOUSING_TIP = (
    "Keep curtains and windows closed during peak afternoon hours "
    "(12 PM - 4 PM) to trap cool air inside."
)

HOUSING_TIPS = {
    "tin_sheet": [
        "Cover your roof with wet gunny bags or coir mats during peak hours",
        "Sprinkle water on the roof at 2 PM and 6 PM to reduce indoor heat",
        "Ensure cross-ventilation by opening windows on opposite sides",
    ],
    "asbestos": [
        "Hang wet bedsheets inside windows to cool incoming air",
        "Do not wet asbestos sheets directly when hot to avoid damage",
        "Use fans to circulate air and create a cooling effect",
    ],
}

def housing_tips(housing_type):
    key = norm(housing_type)
    if not key:
        return [GENERIC_HOUSING_TIP]
    if key in HOUSING_TIPS:
        return list(HOUSING_TIPS[key])
    # concrete, tiled, hut and anything else
    return [
        GENERIC_HOUSING_TIP,
        "Use fans or air circulation to maintain airflow",
        "Stay in the coolest room of the house during peak heat hours",
    ]


# ----------------------
# Structured advisory
# ----------------------
@dataclass
class Hydration:
    amount: str
    frequency: str
    message: str

@dataclass
class Advisory:
    summary: str
    dos: List[str]
    donts: List[str]
    hydration: Hydration
    activity_management: List[str] = field(default_factory=list)
    clothing: List[str] = field(default_factory=list)
    warning_signs: List[str] = field(default_factory=list)
    housing_tips: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict:
        return asdict(self)


def _assessment_level(assessment):
    if assessment is None:
        return ""
    level = getattr(assessment, "level", None)
    if level is None and isinstance(assessment, dict):
        level = assessment.get("label") or assessment.get("level")
    return _level_key(level)

def _field(obj, name):
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def is_high_risk(weather, assessment):
    temp = to_number(_field(weather, "temp"))
    return _assessment_level(assessment) in ("high", "critical") or temp > 35


def advisory_tone(temperature, level):
    """Tone for advisory text: calm, urgent or balanced."""
    temp = to_number(temperature)
    if temp < 30:
        return "calm"
    if temp > 35 or _level_key(level) in ("high", "critical"):
        return "urgent"
    return "balanced"


def fallback_advisory(profile, weather, assessment):
    high = is_high_risk(weather, assessment)
    return Advisory(
        summary=(
            "High heat risk detected. Take immediate precautions and stay hydrated."
            if high else
            "Stay safe in the heat. Monitor your health and stay hydrated."
        ),
        dos=[
            "Drink water regularly throughout the day",
            "Take breaks in shaded or air-conditioned areas",
            "Wear light-colored, loose-fitting clothing",
        ],
        donts=[
            "Avoid prolonged sun exposure during peak hours (12PM-4PM)",
            "Don't skip meals or hydration",
            "Avoid alcohol and caffeinated beverages",
        ],
        hydration=Hydration(
            amount="500ml" if high else "250-500ml",
            frequency="every 15-20 minutes" if high else "every 20-30 minutes",
            message="Drink water regularly to prevent dehydration, especially during physical activity",
        ),
        activity_management=[
            "Take frequent breaks in shaded areas",
            "Avoid strenuous activity during peak heat hours",
            "Plan outdoor work for early morning or evening",
        ],
        clothing=[
            "Wear light-colored, breathable fabrics",
            "Use a wide-brimmed hat or cap",
            "Wear sunglasses to protect eyes",
        ],
        warning_signs=[
            "Dizziness or lightheadedness",
            "Nausea or vomiting",
            "Excessive sweating or lack of sweating",
            "Rapid heartbeat",
            "Confusion or disorientation",
        ],
        housing_tips=housing_tips(_field(profile, "housing_type")),
    )
