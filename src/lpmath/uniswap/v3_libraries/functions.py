from lpmath.constants import MAX_UINT128, MIN_UINT128
from lpmath.exceptions import EVMRevertError


def mulmod(x: int, y: int, k: int) -> int:
    if k == 0:
        raise EVMRevertError(error="division by zero")
    return (x * y) % k


# adapted from OpenZeppelin's SafeCast checks, which throw an exception if the input value exceeds
# the maximum value for this type
def to_uint128(x: int) -> int:
    if not (MIN_UINT128 <= x <= MAX_UINT128):
        raise EVMRevertError(error=f"{x} outside range of uint128 values")
    return x
