import math
from typing import Sequence, TypeVar
import numpy as np

T = TypeVar("T")


def date_key(year: int, month: int) -> int:
    return year * 12 + month


def format_label(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def total_return_pct(final_value: float, total_contributions: float) -> float:
    if total_contributions <= 0:
        return 0.0
    return 100.0 * (final_value - total_contributions) / total_contributions


def growth_factor(return_pct: float) -> float:
    return 1.0 + return_pct / 100.0


def downsample_indices(length: int, max_points: int) -> list[int]:
    """
    Picks which positions of a series of ``length`` points survive downsampling.

    Every ``step``-th index is kept starting at zero, and the final index is
    always included so the last plotted point matches the computed summary.
    Sequences that must stay aligned (values, contributions, labels) should
    all be sliced with the same returned index list.
    """
    if max_points <= 0:
        raise ValueError("max_points must be positive")
    if length <= max_points:
        return list(range(length))

    step = math.ceil(length / max_points)
    strided = np.arange(0, length, step)
    return np.unique(np.append(strided, length - 1)).tolist()


def downsample(points: Sequence[T], max_points: int) -> list[T]:
    indices = downsample_indices(len(points), max_points)
    return [points[i] for i in indices]
