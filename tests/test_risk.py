"""
Unit Tests for the risk scoring engine.
"""
import pytest

from heatsense.risk import (
    RiskLevel, Occupation, UserRiskProfile, WeatherObservation, RiskAssessment,
    housing_penalty, compute_score, classify, color_for, assess_risk,
    occupation_weight, age_weight, chronic_count, profile_from_record, first_match,
    TEMPERATURE_BANDS,
)


class TestHousingPenalty:
    """Tests for indoor temperature adjustment."""

    @pytest.mark.parametrize("housing,expected", [
        ("tin_sheet", 4),
        ("asbestos", 2),
        ("hut", -1),
        ("thatched", -1),
        ("concrete", 0),
        ("tiled", 0),
        ("castle", 0),
        ("", 0),
        (None, 0),
    ])
    def test_penalty_table(self, housing, expected):
        assert housing_penalty(housing) == expected

    def test_case_and_whitespace_insensitive(self):
        assert housing_penalty("  TIN_Sheet ") == 4
        assert housing_penalty("\tThatched\n") == -1

    def test_non_string_input(self):
        assert housing_penalty(42) == 0
        assert housing_penalty(["tin_sheet"]) == 0


class TestClassify:
    """Tests for score → level classification."""

    @pytest.mark.parametrize("score,level", [
        (0, RiskLevel.LOW),
        (30, RiskLevel.LOW),
        (31, RiskLevel.MEDIUM),
        (60, RiskLevel.MEDIUM),
        (61, RiskLevel.HIGH),
        (80, RiskLevel.HIGH),
        (81, RiskLevel.CRITICAL),
        (100, RiskLevel.CRITICAL),
    ])
    def test_boundaries(self, score, level):
        assert classify(score) == level

    def test_monotonic(self):
        ranks = [classify(s).rank for s in range(0, 101)]
        assert ranks == sorted(ranks)
        assert set(classify(s) for s in range(0, 101)) == set(RiskLevel)

    def test_level_order(self):
        assert RiskLevel.LOW.rank < RiskLevel.MEDIUM.rank < RiskLevel.HIGH.rank < RiskLevel.CRITICAL.rank


class TestColorFor:
    """Tests for level → color lookup."""

    def test_known_levels(self):
        assert color_for(RiskLevel.LOW) == "#10B981"
        assert color_for(RiskLevel.MEDIUM) == "#F59E0B"
        assert color_for(RiskLevel.HIGH) == "#F97316"
        assert color_for(RiskLevel.CRITICAL) == "#EF4444"

    def test_string_levels(self):
        assert color_for("low") == "#10B981"
        assert color_for(" Medium ") == "#F59E0B"

    def test_unknown_level_falls_back_to_critical(self):
        assert color_for("Unknown") == "#EF4444"
        assert color_for(None) == "#EF4444"
        assert color_for(3) == "#EF4444"


class TestScoringTerms:
    """Tests for the individual additive terms."""

    @pytest.mark.parametrize("temp,weight", [
        (45.1, 40),
        (45, 30),
        (40.0, 30),
        (39.9, 20),
        (35, 20),
        (34.9, 10),
        (30, 10),
        (29.9, 0),
        (-5, 0),
    ])
    def test_temperature_bands(self, temp, weight):
        assert first_match(TEMPERATURE_BANDS, temp) == weight

    @pytest.mark.parametrize("age,weight", [
        (0, 20), (4, 20), (5, 10), (18, 10), (19, 0), (49, 0),
        (50, 10), (60, 10), (61, 20), (90, 20),
    ])
    def test_age_brackets(self, age, weight):
        assert age_weight(age) == weight

    @pytest.mark.parametrize("occupation,weight", [
        ("Outdoor Worker", 20),
        ("delivery", 20),
        ("construction site", 20),
        ("pregnant", 25),
        ("Senior Citizen", 20),
        ("student", 10),
        ("homemaker", 5),
        ("indoor", 5),
        ("office worker", 5),
        ("other", 0),
        ("astronaut", 0),
        ("", 0),
        (None, 0),
    ])
    def test_occupation(self, occupation, weight):
        assert occupation_weight(occupation) == weight

    def test_occupation_enum_values(self):
        assert occupation_weight(Occupation.PREGNANT) == 25
        assert occupation_weight(Occupation.OTHER) == 0

    def test_occupation_first_match_wins(self):
        # Outdoor tier takes precedence; pregnancy does not also apply
        assert occupation_weight("pregnant outdoor worker") == 20

    def test_chronic_count_once_per_condition(self):
        assert chronic_count(["heart and bp issues"]) == 1
        assert chronic_count(["heart", "diabetes", "none"]) == 2
        assert chronic_count([]) == 0


class TestComputeScore:
    """Tests for the clamped additive score."""

    def test_empty_inputs(self):
        assert compute_score({}, {}) == (0, 0)

    def test_none_inputs(self):
        assert compute_score(None, None) == (0, 0)

    def test_humidity_threshold(self):
        assert compute_score({"age": 30}, {"humidity": 70})[0] == 0
        assert compute_score({"age": 30}, {"humidity": 70.5})[0] == 10

    def test_adjusted_temp_uses_housing(self):
        score, adjusted = compute_score({"age": 30, "housing_type": "tin_sheet"}, {"feels_like": 37})
        assert adjusted == 41
        assert score == 30

    def test_hut_can_drop_band(self):
        score, adjusted = compute_score({"age": 30, "housing_type": "hut"}, {"feels_like": 30})
        assert adjusted == 29
        assert score == 0

    def test_chronic_conditions_saturate(self):
        conds = ["heart"] * 7
        score, _ = compute_score({"age": 30, "conditions": conds}, {})
        assert score == 100

    def test_conditions_case_and_whitespace(self):
        score, _ = compute_score({"age": 30, "conditions": ["  HEART disease ", "Hypertension"]}, {})
        assert score == 30

    def test_malformed_inputs_degrade(self):
        score, adjusted = compute_score(
            {"age": "old", "occupation": 7, "housing_type": 3, "conditions": "heart"},
            {"feels_like": "hot", "humidity": float("nan")},
        )
        assert adjusted == 0
        assert score == 0

    def test_missing_age_adds_nothing(self):
        assert compute_score({"occupation": "other"}, {})[0] == 0
        assert compute_score({"age": None}, {})[0] == 0

    def test_explicit_zero_age_is_infant(self):
        assert compute_score({"age": 0}, {})[0] == 20

    def test_numeric_strings_accepted(self):
        score, adjusted = compute_score({"age": "70"}, {"feels_like": "41", "humidity": "80"})
        assert adjusted == 41
        assert score == 30 + 10 + 20

    def test_nested_provider_shape(self):
        _, adjusted = compute_score({}, {"main": {"feels_like": 36, "humidity": 40}})
        assert adjusted == 36

    def test_dashboard_shape(self):
        _, adjusted = compute_score({}, {"current": {"feels_like": 33, "humidity": 10}})
        assert adjusted == 33

    def test_score_always_bounded(self):
        for feels in (-60, 0, 29, 35, 40, 46, 80):
            for age in (0, 10, 30, 55, 99):
                for n in (0, 3, 10):
                    score, _ = compute_score(
                        {"age": age, "occupation": "pregnant", "conditions": ["diabetes"] * n},
                        {"feels_like": feels, "humidity": 90},
                    )
                    assert 0 <= score <= 100
                    assert isinstance(score, int)


class TestAssessRisk:
    """Concrete end-to-end scenarios."""

    def test_office_worker_low(self):
        a = assess_risk(
            {"age": 30, "occupation": "office worker", "housing_type": "concrete", "conditions": []},
            {"feels_like": 28, "humidity": 50},
        )
        assert a.adjusted_temp == 28
        assert a.score == 5
        assert a.level == RiskLevel.LOW
        assert a.color == "#10B981"

    def test_elderly_outdoor_tin_roof_critical(self):
        a = assess_risk(
            {"age": 70, "occupation": "outdoor laborer", "housing_type": "tin_sheet",
             "conditions": ["Heart Disease", "Diabetes"]},
            {"feels_like": 38, "humidity": 75},
        )
        assert a.adjusted_temp == 42
        assert a.score == 100
        assert a.level == RiskLevel.CRITICAL
        assert a.color == "#EF4444"

    def test_student_in_hut_boundary_low(self):
        a = assess_risk(
            {"age": 8, "occupation": "student", "housing_type": "hut", "conditions": ["None"]},
            {"feels_like": 33, "humidity": 60},
        )
        assert a.adjusted_temp == 32
        assert a.score == 30
        assert a.level == RiskLevel.LOW

    def test_empty_profile_and_weather(self):
        a = assess_risk({}, {})
        assert a == RiskAssessment(score=0, level=RiskLevel.LOW, color="#10B981", adjusted_temp=0)

    def test_pregnant_asbestos_high(self):
        a = assess_risk(
            {"occupation": "Pregnant", "housing_type": "asbestos"},
            {"feels_like": 41, "humidity": 80},
        )
        assert a.adjusted_temp == 43
        assert a.score == 65
        assert a.level == RiskLevel.HIGH

    def test_deterministic(self):
        profile = {"age": 55, "occupation": "delivery", "conditions": ["bp"]}
        weather = {"feels_like": 39, "humidity": 72}
        assert assess_risk(profile, weather) == assess_risk(profile, weather)

    def test_accepts_dataclasses(self):
        profile = UserRiskProfile(age=70, occupation="senior")
        weather = WeatherObservation(feels_like=46, humidity=10)
        a = assess_risk(profile, weather)
        assert a.score == 40 + 20 + 20

    def test_as_dict_shape(self):
        d = assess_risk({"age": 30}, {"feels_like": 28}).as_dict()
        assert d == {"score": 0, "level": "Low", "color": "#10B981", "adjustedTemp": 28}


class TestProfileFromRecord:
    """Tests for adapting stored profile records."""

    def test_health_conditions_mapped(self):
        p = profile_from_record({
            "age": 64, "occupation": "senior", "housing_type": "tiled",
            "health_conditions": ["Diabetes", "Respiratory Issues"],
        })
        assert p.conditions == ("diabetes", "respiratory issues")
        assert p.age == 64

    def test_null_fields(self):
        p = profile_from_record({"age": None, "occupation": None, "health_conditions": None})
        assert p == UserRiskProfile()

    def test_single_condition_string(self):
        p = profile_from_record({"health_conditions": "heart"})
        assert p.conditions == ("heart",)

    def test_none_record(self):
        assert profile_from_record(None) == UserRiskProfile()


class TestOutOfRangeInputs:
    """Oversized numbers and dataclasses built directly from raw field values."""

    @pytest.mark.parametrize("weather", [
        {"feels_like": 10 ** 400},
        {"humidity": 10 ** 400},
        {"feels_like": -(10 ** 400), "humidity": 10 ** 400},
    ])
    def test_huge_weather_values_are_neutral(self, weather):
        a = assess_risk({"age": 30}, weather)
        assert a.score == 0
        assert a.adjusted_temp == 0

    def test_huge_age_is_treated_as_missing(self):
        a = assess_risk({"age": 10 ** 400}, {})
        assert a.score == 0
        assert a.level == RiskLevel.LOW

    def test_weather_dataclass_with_none_fields(self):
        a = assess_risk({}, WeatherObservation(feels_like=None, humidity=None))
        assert a.score == 0
        assert a.adjusted_temp == 0

    def test_weather_dataclass_with_string_fields(self):
        obs = WeatherObservation(feels_like="41", humidity="hot")
        assert obs == WeatherObservation(feels_like=41, humidity=0)
        assert assess_risk({}, obs).score == 30

    def test_profile_dataclass_with_none_conditions(self):
        a = assess_risk(UserRiskProfile(conditions=None), {})
        assert a.score == 0

    def test_profile_dataclass_fields_normalized(self):
        p = UserRiskProfile(age="70", occupation=" Outdoor ", housing_type="",
                            conditions=["  HEART disease "])
        assert p.age == 70
        assert p.occupation == "outdoor"
        assert p.housing_type is None
        assert p.conditions == ("heart disease",)
        assert assess_risk(p, {}).score == 20 + 20 + 15

    def test_profile_dataclass_enum_occupation(self):
        p = UserRiskProfile(occupation=Occupation.HOMEMAKER)
        assert p.occupation == "homemaker"
