"""Display strings for times, paces and distances."""


def format_elapsed(seconds):
    """``MM:SS``, or ``H:MM:SS`` from one hour on."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_split_time(seconds):
    """``M:SS.t`` with tenths, as shown for splits."""
    # round() first so 12.3 doesn't truncate to 12.2 through float error
    total_tenths = int(round(seconds * 10, 6))
    minutes, rest = divmod(total_tenths, 600)
    secs, tenths = divmod(rest, 10)
    return f"{minutes}:{secs:02d}.{tenths}"


def format_pace(pace_seconds):
    """``M:SS`` per 500 m, ``--:--`` when the pace is unknown."""
    if not pace_seconds or pace_seconds <= 0:
        return "--:--"
    minutes, secs = divmod(int(pace_seconds), 60)
    return f"{minutes}:{secs:02d}"


def format_distance(meters):
    if meters < 1000:
        return f"{meters:.0f} m"
    return f"{meters / 1000:.2f} km"
