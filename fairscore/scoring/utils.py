"""
Score Math Utilities
fairscore/scoring/utils.py

Small helpers shared by the ranking engine and exports. Averages are plain
floats; rounding happens only for display.
"""

from typing import Iterable, Optional, Sequence


def safe_mean(values: Sequence[float]) -> float:
    """Mean of values, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def percentage(value: float, maximum: float) -> float:
    """value / maximum x 100, 0.0 when maximum is 0."""
    if maximum <= 0:
        return 0.0
    return value / maximum * 100


def progress_percent(completed: int, total: int) -> int:
    """Whole-number completion percent, 0 when nothing is assigned."""
    if total <= 0:
        return 0
    # halves round up, unlike round()
    return int(completed / total * 100 + 0.5)


def mean_or_none(values: Iterable[float]) -> Optional[float]:
    values = list(values)
    return safe_mean(values) if values else None
