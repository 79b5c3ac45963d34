"""Positional base-N codec and digit interleaving.

A normalized integer becomes a sequence of base-N digits, most significant
first. N is the size of the syllable inventory (128 for the bundled set),
so each digit later maps to exactly one syllable.

Plain positional digits keep the slow-changing high digit in the same
place for long runs of consecutive inputs. The interleaver rotates high
and low digits around the first digit so consecutive versions differ
across the whole string:

    interleave([1, 2, 3, 4, 5, 6, 7, 8, 9]) -> [4, 7, 2, 9, 1, 8, 3, 6, 5]

The permutation depends only on the sequence length.
"""

from functools import lru_cache
from typing import List, Sequence

from .errors import InvalidInput


def to_digits(value: int, base: int, min_length: int = 0) -> List[int]:
    """Encode a non-negative integer as base-N digits (MSB first).

    Zero encodes to [0]. Zero digits are prepended up to min_length; they
    decode as no-ops.
    """
    if base < 2:
        raise InvalidInput(f"Base must be at least 2, got {base}")
    if value < 0:
        raise InvalidInput(f"Cannot encode negative value {value}")
    if min_length < 0:
        raise InvalidInput(f"Minimum length must be non-negative, got {min_length}")

    digits = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(remainder)
    if not digits:
        digits.append(0)

    digits.extend([0] * (min_length - len(digits)))
    digits.reverse()
    return digits


def from_digits(digits: Sequence[int], base: int) -> int:
    """Decode base-N digits (MSB first) back to an integer."""
    value = 0
    for d in digits:
        value = value * base + d
    return value


def _rotate(items: Sequence) -> list:
    """Forward four-phase rotation shared by interleave and its inverse."""
    n = len(items)
    if n < 2:
        return list(items)

    # prepends collect in `front` and are reversed once at the end
    front = []
    back = [items[0]]
    left, right = 1, n - 1
    phase = 0
    while left <= right:
        if phase == 0:
            front.append(items[right])
            right -= 1
        elif phase == 1:
            back.append(items[right])
            right -= 1
        elif phase == 2:
            front.append(items[left])
            left += 1
        else:
            back.append(items[left])
            left += 1
        phase = (phase + 1) % 4

    front.reverse()
    return front + back


@lru_cache(maxsize=64)
def interleave_order(length: int) -> tuple:
    """Original position found at each permuted position, for a length."""
    return tuple(_rotate(range(length)))


def interleave(digits: Sequence[int]) -> List[int]:
    """Mix slow and fast digits across all positions."""
    return _rotate(digits)


def deinterleave(permuted: Sequence[int]) -> List[int]:
    """Undo interleave() by scattering digits back to their positions."""
    order = interleave_order(len(permuted))
    result = [0] * len(permuted)
    for pos, original in enumerate(order):
        result[original] = permuted[pos]
    return result
