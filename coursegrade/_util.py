"""Private helper utilities."""

import uuid


def new_id() -> str:
    """Generate a short random identifier for a course, component or item."""
    return uuid.uuid4().hex[:9]


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Fold a number into [low, high]."""
    return min(high, max(low, value))
