from typing import Union
from decimal import Decimal

Number = Union[int, float, Decimal]


def progress_percentage(current: Number, target: Number) -> float:
    """Share of the target reached, as a percentage capped at 100."""
    if not target or target <= 0:
        return 0.0
    return round(min(float(current) / float(target), 1.0) * 100, 2)
