from heatsense.risk import RiskLevel, assess_risk

SAFE_LEVELS = (RiskLevel.LOW, RiskLevel.MEDIUM)


def forecast_risk(profile, slots):
    """Score each forecast slot for one profile."""
    rows = []
    for slot in slots or []:
        a = assess_risk(profile, {"feels_like": slot.get("feels_like"), "humidity": slot.get("humidity")})
        rows.append(dict(slot, score=a.score, level=a.level, color=a.color, adjusted_temp=a.adjusted_temp))
    return rows


def peak_slot(rows):
    if not rows:
        return None
    return max(rows, key=lambda r: r["score"])


def safe_windows(rows, safe_levels=SAFE_LEVELS):
    """Contiguous runs of slots at a safe level, as (start_ts, end_ts) pairs."""
    windows = []
    start = end = None
    for r in rows or []:
        if r["level"] in safe_levels:
            if start is None:
                start = r["ts"]
            end = r["ts"]
        elif start is not None:
            windows.append((start, end))
            start = end = None
    if start is not None:
        windows.append((start, end))
    return windows
