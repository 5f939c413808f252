__all__ = (
    "MAX_INT16",
    "MAX_UINT128",
    "MAX_UINT160",
    "MAX_UINT256",
    "MIN_INT16",
    "MIN_UINT128",
    "MIN_UINT160",
    "MIN_UINT256",
)

import typing


def _min_uint(_: int) -> int:
    return 0


def _max_uint(bits: int) -> int:
    return typing.cast("int", 2**bits - 1)


def _min_int(bits: int) -> int:
    return typing.cast("int", -(2 ** (bits - 1)))


def _max_int(bits: int) -> int:
    return typing.cast("int", (2 ** (bits - 1)) - 1)


# Tick spacing is stored as an int24 but the factory only enables values below 16384, so int16
# bounds are used when validating configured spacings
MIN_INT16 = _min_int(16)
MAX_INT16 = _max_int(16)

MIN_UINT128 = _min_uint(128)
MAX_UINT128 = _max_uint(128)

# Square root prices are stored as uint160
MIN_UINT160 = _min_uint(160)
MAX_UINT160 = _max_uint(160)

MIN_UINT256 = _min_uint(256)
MAX_UINT256 = _max_uint(256)
