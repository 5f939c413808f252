from typing import Any

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address
from hexbytes import HexBytes
from web3 import Web3
from web3.types import BlockIdentifier

from lpmath.exceptions import UnexpectedPoolResponse
from lpmath.functions import encode_function_calldata, raw_call
from lpmath.logging import logger
from lpmath.types.aliases import Liquidity, TickSpacing
from lpmath.uniswap.v3_functions import get_position_key_for_range
from lpmath.uniswap.v3_types import TickRange, UniswapV3PoolSlot, UniswapV3PositionInfo


class UniswapV3PoolReader:
    """
    Read-only access to the pool values used when sizing a position. Every read is a single eth_call
    against the provided Web3 instance; node errors propagate unchanged.
    """

    def __init__(self, address: str, w3: Web3) -> None:
        self.address: ChecksumAddress = to_checksum_address(address)
        self.w3 = w3

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(address={self.address})"

    def _call(
        self,
        function_prototype: str,
        return_types: list[str],
        function_arguments: list[Any] | None = None,
        block_identifier: BlockIdentifier | None = None,
    ) -> tuple[Any, ...]:
        return raw_call(
            w3=self.w3,
            address=self.address,
            calldata=encode_function_calldata(
                function_prototype=function_prototype,
                function_arguments=function_arguments,
            ),
            return_types=return_types,
            block_identifier=block_identifier,
        )

    def slot0(self, block_identifier: BlockIdentifier | None = None) -> UniswapV3PoolSlot:
        sqrt_price_x96, tick, *_ = self._call(
            "slot0()",
            ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"],
            block_identifier=block_identifier,
        )
        if sqrt_price_x96 == 0:
            raise UnexpectedPoolResponse(pool=self.address, reason="price is not initialized")

        logger.debug(f"{self}: slot0 sqrt_price_x96={sqrt_price_x96}, tick={tick}")
        return UniswapV3PoolSlot(sqrt_price_x96=sqrt_price_x96, tick=tick)

    def tick_spacing(self, block_identifier: BlockIdentifier | None = None) -> TickSpacing:
        (tick_spacing,) = self._call("tickSpacing()", ["int24"], block_identifier=block_identifier)
        if tick_spacing <= 0:
            raise UnexpectedPoolResponse(
                pool=self.address, reason=f"tick spacing {tick_spacing} is not positive"
            )
        return tick_spacing

    def liquidity(self, block_identifier: BlockIdentifier | None = None) -> Liquidity:
        (liquidity,) = self._call("liquidity()", ["uint128"], block_identifier=block_identifier)
        return liquidity

    def token0(self, block_identifier: BlockIdentifier | None = None) -> ChecksumAddress:
        (token,) = self._call("token0()", ["address"], block_identifier=block_identifier)
        return to_checksum_address(token)

    def token1(self, block_identifier: BlockIdentifier | None = None) -> ChecksumAddress:
        (token,) = self._call("token1()", ["address"], block_identifier=block_identifier)
        return to_checksum_address(token)

    def position(
        self,
        position_key: bytes,
        block_identifier: BlockIdentifier | None = None,
    ) -> UniswapV3PositionInfo:
        """
        Fetch the stored state for a position key. Unknown keys return a zeroed position, the same
        as the pool does.
        """

        (
            liquidity,
            fee_growth_inside0_last_x128,
            fee_growth_inside1_last_x128,
            tokens_owed0,
            tokens_owed1,
        ) = self._call(
            "positions(bytes32)",
            ["uint128", "uint256", "uint256", "uint128", "uint128"],
            function_arguments=[bytes(HexBytes(position_key))],
            block_identifier=block_identifier,
        )
        return UniswapV3PositionInfo(
            liquidity=liquidity,
            fee_growth_inside0_last_x128=fee_growth_inside0_last_x128,
            fee_growth_inside1_last_x128=fee_growth_inside1_last_x128,
            tokens_owed0=tokens_owed0,
            tokens_owed1=tokens_owed1,
        )

    def position_for(
        self,
        owner: str,
        tick_range: TickRange,
        block_identifier: BlockIdentifier | None = None,
    ) -> UniswapV3PositionInfo:
        return self.position(
            get_position_key_for_range(owner, tick_range),
            block_identifier=block_identifier,
        )
