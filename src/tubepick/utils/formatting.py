"""
Formatting helpers for human-readable output.
"""


def format_duration(seconds: int | float | None) -> str | None:
    """Format seconds as M:SS (or H:MM:SS past an hour)."""
    if seconds is None:
        return None
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_size(num_bytes: int | None) -> str | None:
    """Format a byte count as whole megabytes, e.g. "12 MB"."""
    if num_bytes is None:
        return None
    return f"{round(num_bytes / (1024 * 1024))} MB"
