"""Management efficiency helpers."""


def management_percent(actual: float, maximum: float) -> float:
    """
    Actual points as a percentage of the best possible lineup.

    Args:
        actual: Points scored by the starters
        maximum: Points the optimal lineup would have scored

    Returns:
        Percentage, or 0.0 when maximum is not positive

    Example:
        management_percent(110.5, 140.0)  # 78.928...
    """
    if not maximum or maximum <= 0:
        return 0.0
    return actual / maximum * 100.0


def delta(current: float, prior: float) -> float:
    """Percentage-point change between two management values."""
    return current - prior


def rounded(value: float, digits: int = 2) -> float:
    return round(value, digits)


def per_unit(total: float, count: int) -> float:
    """Average of `total` over `count`, 0.0 when count is zero."""
    return total / count if count > 0 else 0.0
