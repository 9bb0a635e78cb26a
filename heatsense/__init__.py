from heatsense.risk import (
    RiskLevel, Occupation, UserRiskProfile, WeatherObservation, RiskAssessment,
    housing_penalty, compute_score, classify, color_for, assess_risk, profile_from_record,
)

__version__ = "0.1.0"
