import logging
from collections.abc import Callable
from typing import Any

import eth_abi.abi
import pytest
from eth_utils.crypto import keccak
from hexbytes import HexBytes

from lpmath.logging import logger

POOL_TOKEN0 = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
POOL_TOKEN1 = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


@pytest.fixture(scope="session", autouse=True)
def _set_lpmath_logging():
    """
    Set the logging level to DEBUG for the test run
    """
    logger.setLevel(logging.DEBUG)


def function_selector(function_prototype: str) -> bytes:
    return keccak(text=function_prototype)[:4]


class FakeEth:
    """
    Answers eth_call requests from a table of canned responses, keyed by function selector.
    """

    def __init__(self, responses: dict[bytes, bytes]) -> None:
        self.responses = responses
        self.calls: list[tuple[dict[str, Any], Any]] = []

    def call(self, transaction: dict[str, Any], block_identifier: Any = None) -> HexBytes:
        self.calls.append((transaction, block_identifier))
        return HexBytes(self.responses[bytes(transaction["data"])[:4]])


class FakeWeb3:
    def __init__(self, responses: dict[bytes, bytes]) -> None:
        self.eth = FakeEth(responses)


@pytest.fixture
def make_pool_w3() -> Callable[..., FakeWeb3]:
    """
    Build a stand-in Web3 object that returns fixed values for the V3 pool getters.
    """

    def _make_pool_w3(
        sqrt_price_x96: int = 2**96,
        tick: int = 0,
        tick_spacing: int = 60,
        position_liquidity: int = 1000,
    ) -> FakeWeb3:
        return FakeWeb3(
            {
                function_selector("slot0()"): eth_abi.abi.encode(
                    ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"],
                    [sqrt_price_x96, tick, 0, 1, 1, 0, True],
                ),
                function_selector("tickSpacing()"): eth_abi.abi.encode(["int24"], [tick_spacing]),
                function_selector("liquidity()"): eth_abi.abi.encode(["uint128"], [12345]),
                function_selector("token0()"): eth_abi.abi.encode(["address"], [POOL_TOKEN0]),
                function_selector("token1()"): eth_abi.abi.encode(["address"], [POOL_TOKEN1]),
                function_selector("positions(bytes32)"): eth_abi.abi.encode(
                    ["uint128", "uint256", "uint256", "uint128", "uint128"],
                    [position_liquidity, 2**128, 2**129, 5, 6],
                ),
            }
        )

    return _make_pool_w3
