"""Formatting helpers for widget text."""

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def _duration_tokens(seconds: int) -> str:
    """Render whole seconds as ``1h2m3s``, ``2m3s`` or ``3s``."""
    hours, rest = divmod(seconds, SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, SECONDS_PER_MINUTE)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


def format_seconds(seconds: float) -> str:
    """
    Format an uptime as a human readable elapsed time.

    Whole days are only split off while more than 24 hours remain, so
    exactly one day reads ``24h 0m 0s``.

    Args:
        seconds: Elapsed time in seconds (fractions are truncated)

    Returns:
        Text such as ``"1d 1h 1m 1s"`` or ``"0s"``

    Raises:
        ValueError: If seconds is negative
    """
    if seconds < 0:
        raise ValueError(f"Duration must not be negative: {seconds}")

    remaining = int(seconds)
    days = 0
    while remaining > SECONDS_PER_DAY:
        days += 1
        remaining -= SECONDS_PER_DAY

    text = f"{days}d " if days > 0 else ""
    for ch in _duration_tokens(remaining):
        text += ch
        if ch in ("h", "m"):
            text += " "
    return text


def format_rate(rate: float) -> str:
    """Format a percentage with two decimals, e.g. ``"42.00 %"``."""
    return f"{rate:.2f} %"
