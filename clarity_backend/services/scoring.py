import math

MIN_SCORE = 1
MAX_SCORE = 5


def clamp_score(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def to_five_point(v: float) -> int:
    """Map a [0,1] heuristic to an integer 1..5 (round half up, clamped)."""
    if math.isnan(v):
        return MIN_SCORE
    if math.isinf(v):
        return MAX_SCORE if v > 0 else MIN_SCORE
    return clamp_score(math.floor(v * 4 + 1 + 0.5))
