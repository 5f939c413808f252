from lpmath.constants import MAX_UINT256, MIN_UINT256
from lpmath.exceptions import EVMRevertError
from lpmath.uniswap.v3_libraries.functions import mulmod

"""
ref: https://github.com/Uniswap/v3-core/blob/main/contracts/libraries/FullMath.sol
"""


def _check_uint256(name: str, value: int) -> None:
    if not (MIN_UINT256 <= value <= MAX_UINT256):
        raise EVMRevertError(error=f"{name} is not a valid uint256")


def muldiv(a: int, b: int, denominator: int) -> int:
    """
    Calculate floor(a * b / denominator) for uint256 operands.

    The contract version carries a 512-bit intermediate product to avoid overflow. Python integers
    are unbounded, so only the operand and result widths need to be checked.
    """

    _check_uint256("a", a)
    _check_uint256("b", b)
    _check_uint256("denominator", denominator)

    if denominator == 0:
        raise EVMRevertError(error="DIVISION BY ZERO")

    result = (a * b) // denominator
    _check_uint256("result", result)
    return result


def muldiv_rounding_up(a: int, b: int, denominator: int) -> int:
    """
    Calculate ceil(a * b / denominator) for uint256 operands.
    """

    result = muldiv(a, b, denominator)
    if mulmod(a, b, denominator) == 0:
        return result

    if result == MAX_UINT256:
        raise EVMRevertError(error="rounded result does not fit in uint256")
    return result + 1
