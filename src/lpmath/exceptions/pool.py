from typing import Any

from eth_typing import ChecksumAddress

from lpmath.exceptions.base import LpMathError


class PoolReaderError(LpMathError):
    """
    Exception raised by the read-only pool interface.
    """


class UnexpectedPoolResponse(PoolReaderError):
    """
    Raised when a pool returns a value that fails a sanity check, e.g. an uninitialized price.
    """

    def __init__(self, pool: ChecksumAddress, reason: str) -> None:
        self.pool = pool
        self.reason = reason
        super().__init__(message=f"Unexpected response from pool {pool}: {reason}")

    def __reduce__(self) -> tuple[Any, ...]:
        return self.__class__, (self.pool, self.reason)
