"""Checked integer conversions for on-chain quantities."""

from indexer.errors import NarrowingError, Uint256OverflowError
from indexer.utils.constants import INT32_MAX, INT32_MIN, UINT256_MAX


def to_i32(value: int, field: str = "value") -> int:
    """Narrow a wide integer to the signed 32-bit range, refusing to wrap."""
    if value < INT32_MIN or value > INT32_MAX:
        raise NarrowingError(field, value)
    return int(value)


def checked_add_u256(a: int, b: int) -> int:
    if a < 0 or b < 0:
        raise Uint256OverflowError(f"negative operand in uint256 addition: {a} + {b}")
    total = a + b
    if total > UINT256_MAX:
        raise Uint256OverflowError(f"{a} + {b} exceeds uint256")
    return total
