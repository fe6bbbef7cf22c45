"""Text formatting helpers."""

from typing import List


def format_time(seconds: float) -> str:
    """Format a duration in seconds to a readable string."""
    if seconds < 60:
        return f"{seconds:.0f}s"
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    if secs == 0:
        return f"{mins}m"
    return f"{mins}m {secs}s"


def format_win_rate(wins: int, games: int, decimals: int = 1) -> str:
    """Format a win rate as a percentage."""
    if games <= 0:
        return "N/A"
    return f"{wins / games * 100:.{decimals}f}%"


def format_list(items: List[str], separator: str = ", ", last_separator: str = " and ") -> str:
    """Format a list of items with proper separators."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]}{last_separator}{items[1]}"

    return separator.join(items[:-1]) + f"{last_separator}{items[-1]}"
