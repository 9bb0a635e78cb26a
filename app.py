# HeatSense — personal heatwave risk (Streamlit)
#
# Run:
#   pip install -e .
#   streamlit run app.py
#
# Uses an OpenWeather API key from: https://home.openweathermap.org/api_keys
# Without a key the current observation falls back to a demo reading.

from dotenv import load_dotenv
load_dotenv()  # <- loads your .env file first

import datetime as dt

import pandas as pd
import streamlit as st

from heatsense.advisory import (
    get_advisories, advisories_for, advisory_tone, health_tips, housing_tips,
    emergency_contacts, fallback_advisory,
)
from heatsense.config import get_settings
from heatsense.logging_config import setup_logging
from heatsense.outlook import forecast_risk, peak_slot, safe_windows
from heatsense.risk import Occupation, assess_risk
from heatsense.units import format_temp, format_range
from heatsense.weather import (
    SUPPORTED_CITIES, WeatherClient, WeatherError, is_supported_city, normalize_city,
)

# ----------------------
# Config & Utilities
# ----------------------
st.set_page_config(page_title="HeatSense AI", page_icon="🌡️", layout="centered")

settings = get_settings()
logger = setup_logging(settings.LOG_LEVEL)

OCCUPATION_LABELS = {
    Occupation.STUDENT: "Student / Child (< 18)",
    Occupation.PREGNANT: "Pregnant / Expecting Mother",
    Occupation.SENIOR: "Senior Citizen / Retired",
    Occupation.HOMEMAKER: "Homemaker / Stay at Home",
    Occupation.OUTDOOR: "Outdoor Worker",
    Occupation.DELIVERY: "Delivery",
    Occupation.CONSTRUCTION: "Construction",
    Occupation.OFFICE: "Indoor/Office",
    Occupation.OTHER: "Other",
}

HOUSING_LABELS = {
    "concrete": "Concrete / Pucca House",
    "tin_sheet": "Metal / Tin Sheet Roof",
    "asbestos": "Asbestos Sheet",
    "tiled": "Tiled Roof",
    "hut": "Thatched / Hut",
}

CONDITION_LABELS = {
    "heart": "Heart Disease",
    "diabetes": "Diabetes",
    "respiratory": "Respiratory Issues",
    "hypertension": "High Blood Pressure",
}

LEVEL_EMOJI = dict(Low="🟢", Medium="🟡", High="🟠", Critical="🔴")

TONE_BOX = dict(urgent=st.error, balanced=st.warning, calm=st.info)


@st.cache_data(ttl=settings.WEATHER_CACHE_TTL, show_spinner=False)
def fetch_current(api_key, city, language):
    client = WeatherClient(api_key=api_key, timeout=settings.REQUEST_TIMEOUT, language=language)
    return client.current(city=city)

@st.cache_data(ttl=settings.WEATHER_CACHE_TTL, show_spinner=False)
def fetch_dashboard(api_key, city, language):
    client = WeatherClient(api_key=api_key, timeout=settings.REQUEST_TIMEOUT, language=language)
    return client.dashboard(city=city)

def get_api_key():
    return settings.api_key(st.session_state.get("OPENWEATHER_KEY_UI", ""))

# ----------------------
# Sidebar Controls
# ----------------------
st.sidebar.title("Your Profile")
st.sidebar.write("Tell us about yourself to personalize your heat risk.")

age = st.sidebar.number_input("Age", min_value=0, max_value=120, value=30, step=1)

occupation = st.sidebar.selectbox("Occupation", list(OCCUPATION_LABELS.keys()),
                                  format_func=lambda o: OCCUPATION_LABELS[o])

housing = st.sidebar.selectbox("Housing type", [None] + list(HOUSING_LABELS.keys()),
                               format_func=lambda h: "Select housing type" if h is None else HOUSING_LABELS[h])

conditions = st.sidebar.multiselect("Health conditions", list(CONDITION_LABELS.keys()),
                                    format_func=lambda c: CONDITION_LABELS[c])

default_city = normalize_city(settings.DEFAULT_CITY) if is_supported_city(settings.DEFAULT_CITY) else SUPPORTED_CITIES[0]
city = st.sidebar.selectbox("City", SUPPORTED_CITIES, index=SUPPORTED_CITIES.index(default_city))

units = st.sidebar.radio("Units", ["Celsius (°C)", "Fahrenheit (°F)"], index=0)
unit = "imperial" if units.startswith("Fahrenheit") else "metric"

api_key_ui = st.sidebar.text_input("OpenWeather API Key (optional, else use env)",
                                   type="password",
                                   value=st.session_state.get("OPENWEATHER_KEY_UI", ""))
st.session_state["OPENWEATHER_KEY_UI"] = api_key_ui

profile = {
    "age": age,
    "occupation": occupation.value,
    "housing_type": housing,
    "conditions": conditions,
}

# ----------------------
# Main UI
# ----------------------
st.title("🌡️ HeatSense AI — Heatwave Risk")

st.markdown(
"""Your **personal heat risk score**, based on today's weather, your home and your health.
"""
)

api_key = get_api_key()
if not api_key:
    st.warning("No OpenWeather API key set (sidebar or env var OPENWEATHER_KEY). Showing a demo reading.")

colA, colB = st.columns(2)
with colA:
    go = st.button("Assess my risk", type="primary")
with colB:
    demo = st.button("Try a demo reading")

if go or demo:
    key = "" if demo else api_key
    forecast = []
    daily = []
    tz_offset = 0
    place = city
    try:
        if key:
            data = fetch_dashboard(key, city, settings.WEATHER_LANGUAGE)
            current = data["current"]
            forecast = data["forecast"]
            daily = data.get("daily", [])
            tz_offset = data.get("timezone_offset", 0)
            place = data["location"]["name"]
        else:
            current = fetch_current(key, city, settings.WEATHER_LANGUAGE)
    except WeatherError as e:
        logger.error("Weather lookup failed for %s: %s", city, e)
        st.error(f"Weather error: {e}")
        st.stop()

    risk = assess_risk(profile, current)
    logger.info("Assessed %s: score=%s level=%s", place, risk.score, risk.level.value)

    # Render
    st.success(f"Location: **{place}**")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Heat Risk Score", f"{risk.score} / 100")
        st.markdown(
            f"<span style='background:{risk.color};color:white;padding:4px 12px;border-radius:12px'>"
            f"{LEVEL_EMOJI[risk.level.value]} {risk.level.value}</span>",
            unsafe_allow_html=True,
        )
        st.progress(risk.score / 100)
    with col2:
        st.metric("Feels like (outdoor)", format_temp(current.get("feels_like"), unit))
        st.metric("Feels like (your home)", format_temp(risk.adjusted_temp, unit),
                  help="Outdoor feels-like temperature adjusted for your roof/wall type.")
        st.write(f"Humidity: **{current.get('humidity', 0):.0f}%**")

    # Forecast
    if forecast:
        rows = forecast_risk(profile, forecast)
        peak = peak_slot(rows)
        windows = safe_windows(rows)

        st.subheader("Next 12 hours")
        df = pd.DataFrame([{
            "Time": r["time"],
            "Temp": format_temp(r["temp"], unit),
            "Feels like": format_temp(r["feels_like"], unit),
            "RH (%)": r["humidity"],
            "Score": r["score"],
            "Risk": f"{LEVEL_EMOJI[r['level'].value]} {r['level'].value}",
        } for r in rows])
        st.dataframe(df, use_container_width=True)

        st.write(f"**Peak risk:** {peak['level'].value} at {peak['time']} (score {peak['score']})")
        if windows:
            st.write("**Safer windows:** " + ", ".join(format_range(a, b, tz_offset) for a, b in windows))
        else:
            st.write("**Safer windows:** None — stay indoors and keep cool")

    if daily:
        st.subheader("Next 5 days (midday)")
        st.dataframe(pd.DataFrame([{
            "Day": d["day"],
            "Date": d["date"],
            "Temp": format_temp(d["temp"], unit),
            "Sky": d["condition"],
        } for d in daily]), use_container_width=True)

    # Guidance
    st.subheader("What to do now")
    for category, items in get_advisories(risk.level).items():
        st.markdown(f"- **{category.replace('_', ' ').title()}:** " + "; ".join(items))

    tips = health_tips(profile["occupation"], profile["conditions"])
    if tips:
        st.subheader("For you")
        st.markdown("\n".join(f"- {t}" for t in tips))

    st.subheader("Cooling your home")
    st.markdown("\n".join(f"- {t}" for t in housing_tips(housing)))

    advisory = fallback_advisory(profile, current, risk)
    tone = advisory_tone(current.get("temp"), risk.level)
    TONE_BOX[tone](f"{advisory.summary}  \n💧 {advisory.hydration.amount} {advisory.hydration.frequency}")

    with st.expander("Warning signs & emergency contacts"):
        st.markdown("\n".join(f"- {s}" for s in advisory.warning_signs))
        st.markdown("\n".join(f"- **{c.name}:** {c.number}" for c in emergency_contacts()))

    # Printable daily bulletin
    advice_lines = "\n".join(f"- {a}" for a in advisories_for(risk.level))
    bulletin = f"""HEATSENSE DAILY BULLETIN
Location: {place}
Feels like: {format_temp(current.get('feels_like'), unit)} (home: {format_temp(risk.adjusted_temp, unit)})
Humidity: {current.get('humidity', 0):.0f}%
Risk: {risk.level.value} ({risk.score}/100)

Summary: {advisory.summary}
Hydration: {advisory.hydration.amount} {advisory.hydration.frequency}

Advisories:
{advice_lines}

Generated: {dt.datetime.now().strftime('%Y-%m-%d %H:%M')}
"""
    st.download_button("Download bulletin (.txt)", bulletin, file_name="heatsense_bulletin.txt")

st.caption("Tip: this Python app uses Streamlit + OpenWeather")
