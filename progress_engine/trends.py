"""
Engagement Trend Module

Splits a conversation into contiguous segments and averages the
per-segment engagement ratings into a single five-dimension score.
No external libraries needed - pure Python implementation.
"""

import math
from typing import List, Sequence, TypeVar

from .parsers import ENGAGEMENT_SIZE

T = TypeVar("T")

TREND_SEGMENTS = 3


def split_into_segments(items: Sequence[T], segments: int = TREND_SEGMENTS) -> List[List[T]]:
    """
    Split items into contiguous chunks of size ceil(len / segments).

    The last chunk may be shorter, and fewer than ``segments`` chunks come
    back when the size rounds up (4 messages -> chunks of 2, 2).
    """
    if not items:
        return []
    size = math.ceil(len(items) / segments)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def average_engagement_levels(results: Sequence[Sequence[int]]) -> List[int]:
    """
    Per-dimension mean of several engagement ratings, rounded half up.

    Missing dimensions in a rating count as 0.
    """
    if not results:
        return [0] * ENGAGEMENT_SIZE

    totals = [0] * ENGAGEMENT_SIZE
    for levels in results:
        for idx in range(ENGAGEMENT_SIZE):
            totals[idx] += levels[idx] if idx < len(levels) else 0

    return [round_half_up(total / len(results)) for total in totals]
