from lpmath.exceptions.base import LpMathError


class EVMRevertError(LpMathError):
    """
    Raised when a fixed-width calculation would revert inside the EVM contract it mirrors.
    """

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(message=f"EVM Revert: {error}")

    def __reduce__(self) -> tuple[type["EVMRevertError"], tuple[str]]:
        return self.__class__, (self.error,)
