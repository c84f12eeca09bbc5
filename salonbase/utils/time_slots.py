import re

MINUTES_PER_DAY = 24 * 60

# Accepts "9:05" as well as "09:05"; stored values are always zero padded
TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def normalize_time(value: str) -> str:
    """Return ``value`` as a zero padded "HH:MM" string.

    Raises ValueError when the string is not a 24h clock time.
    """
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError("Please enter a valid time in HH:MM format")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_duration(minutes: int) -> str:
    """Human readable duration, e.g. 90 -> "1h 30m", 60 -> "1h", 45 -> "45m"."""
    hours, rest = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {f'{rest}m' if rest > 0 else ''}".strip()
    return f"{rest}m"
