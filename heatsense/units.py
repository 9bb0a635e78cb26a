import math
import datetime as dt


def c_to_f(c):
    return c * 9.0/5.0 + 32.0

def format_temp(t, unit="metric"):
    if t is None or isinstance(t, bool):
        return "--°F" if unit == "imperial" else "--°C"
    try:
        t = float(t)
    except (TypeError, ValueError, OverflowError):
        t = float("nan")
    if math.isnan(t) or math.isinf(t):
        return "--°F" if unit == "imperial" else "--°C"
    if unit == "imperial":
        return f"{round(c_to_f(t))}°F"
    return f"{round(t)}°C"

def local_time(ts, tz_offset_seconds=0):
    # ts is unix UTC; the result carries the city's wall-clock time
    return dt.datetime.fromtimestamp(ts + tz_offset_seconds, tz=dt.timezone.utc)

def format_hour(ts, tz_offset_seconds=0):
    local = local_time(ts, tz_offset_seconds)
    hour = local.hour % 12 or 12
    return f"{hour} {'AM' if local.hour < 12 else 'PM'}"

def format_range(start_ts, end_ts, tz_offset_seconds=0):
    a = format_hour(start_ts, tz_offset_seconds)
    b = format_hour(end_ts, tz_offset_seconds)
    if start_ts == end_ts:
        return a
    return f"{a}–{b}"
