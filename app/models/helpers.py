import math

from app.models.constants import RANDOMNESS_RANGE

_UINT32_MASK = 0xFFFFFFFF
_MULBERRY_INCREMENT = 0x6D2B79F5


def clamp(n: float, min_value: float = 0, max_value: float = math.inf) -> float:
    """Clamp n into [min_value, max_value]. NaN passes through untouched."""
    if n < min_value:
        return min_value
    if n > max_value:
        return max_value
    return n


def blend(a: float, b: float, weight: float) -> float:
    """Mix a with b, where weight is the share given to b."""
    return a * (1 - weight) + b * weight


def logistic(x: float) -> float:
    try:
        return 1 / (1 + math.exp(-x))
    except OverflowError:
        return 0.0


def round_to(value: float, digits: int) -> float:
    """Round half away from zero to the given number of decimals."""
    if not math.isfinite(value):
        return value
    factor = 10 ** digits
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - 0x100000000 if value & 0x80000000 else value


def string_to_seed(text: str) -> int:
    """
    Fold a string into a non-negative integer with hash = hash * 31 + code,
    wrapping at 32 bits after every step. Characters are taken as UTF-16
    code units so astral characters hash as surrogate pairs.
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    hash_value = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        hash_value = _to_int32(hash_value * 31 + code_unit)
    return abs(hash_value)


def mulberry32(seed: int) -> float:
    """Single draw in [0, 1) from a mulberry32 generator seeded with seed."""
    t = (seed + _MULBERRY_INCREMENT) & _UINT32_MASK
    t = ((t ^ (t >> 15)) * (t | 1)) & _UINT32_MASK
    t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & _UINT32_MASK)) & _UINT32_MASK
    return (t ^ (t >> 14)) / 4294967296


def random_offset(seed: str) -> float:
    """Deterministic offset in [-RANDOMNESS_RANGE / 2, RANDOMNESS_RANGE / 2]."""
    draw = mulberry32(string_to_seed(seed))
    return (draw - 0.5) * RANDOMNESS_RANGE
